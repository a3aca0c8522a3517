"""
Camera Scan Script

Scans a table QR code with a local camera and prints where the diner
would be redirected. Useful for checking printed codes before they go
on the tables.

Run from project root: python scripts/scan_table.py [--device 0] [--lat .. --lon ..]

Version: 1.0.0
"""

import argparse
import asyncio
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from foodie.core.config import get_settings, setup_logging
from foodie.exceptions import CameraUnavailableError
from foodie.services.geo import get_geo_service
from foodie.services.qr import CameraScanner, QRResolver


async def scan(device: int, lat, lon, max_frames: int) -> bool:
    print("=" * 60)
    print(f"📷 Scanning with camera {device} (up to {max_frames} frames)")
    print("=" * 60)

    try:
        with CameraScanner(device=device) as scanner:
            data = scanner.scan(max_frames=max_frames)
            text = scanner.last_text
    except CameraUnavailableError as e:
        print(f"\n❌ {e.message}")
        return False

    if data is None:
        print("\n⚠️ No valid table QR code seen")
        return False

    resolution = await QRResolver(get_geo_service()).resolve(text, lat, lon)

    print(f"\n✅ Outlet: {data.outlet_id}")
    print(f"   Table: {data.table_id or '-'} ({data.table_number or '-'})")
    print(f"   Outlet name: {data.outlet_name or '-'}")
    if resolution.location:
        print(f"   Location: {resolution.location.city or '?'}, {resolution.location.state or '?'}")
    print(f"   Redirect: {resolution.redirect_url}")
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Scan a table QR code")
    parser.add_argument("--device", type=int, default=0, help="Camera index")
    parser.add_argument("--lat", type=float, default=None)
    parser.add_argument("--lon", type=float, default=None)
    parser.add_argument("--max-frames", type=int, default=get_settings().camera_max_frames)
    args = parser.parse_args()

    setup_logging()
    ok = asyncio.run(scan(args.device, args.lat, args.lon, args.max_frames))
    sys.exit(0 if ok else 1)
