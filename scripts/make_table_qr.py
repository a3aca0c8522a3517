"""
Table QR Code Generator

Writes one printable PNG per table of an outlet.
Run from project root:

    python scripts/make_table_qr.py --base-url https://menu.example.com \
        --outlet 200 --outlet-name "Foodie Prayagraj" --tables 12

Version: 1.0.0
"""

import argparse
import os
import sys
from pathlib import Path

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from foodie.services.qr import make_table_qr, table_qr_url


def generate(base_url: str, outlet_id: str, tables: int, out_dir: Path, outlet_name: str = "") -> int:
    out_dir.mkdir(parents=True, exist_ok=True)

    print("=" * 60)
    print(f"🔳 TABLE QR CODES · outlet {outlet_id}")
    print("=" * 60)

    for number in range(1, tables + 1):
        table_id = f"T{number}"
        png = make_table_qr(
            base_url,
            outlet_id,
            table_id,
            outlet_name=outlet_name or None,
            table_number=str(number),
        )
        out_path = out_dir / f"outlet-{outlet_id}__{table_id}.png"
        out_path.write_bytes(png)

        url = table_qr_url(base_url, outlet_id, table_id, outlet_name or None, str(number))
        print(f"OK  {table_id:>4}  ->  {out_path}  ({url})")

    print(f"\nDone. Generated {tables} QR codes in: {out_dir}")
    return tables


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate table QR codes")
    parser.add_argument("--base-url", required=True, help="Public storefront URL")
    parser.add_argument("--outlet", required=True, help="FoodieOS outlet id")
    parser.add_argument("--outlet-name", default="", help="Name shown after scanning")
    parser.add_argument("--tables", type=int, default=10, help="Number of tables")
    parser.add_argument("--out", default="qrcodes", help="Output directory")
    args = parser.parse_args()

    generate(args.base_url, args.outlet, args.tables, Path(args.out), args.outlet_name)
