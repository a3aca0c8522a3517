"""
Table QR Code Generation

Produces the printable codes that sit on each table. They encode the
query-string form understood by parse_qr_payload():

    <base_url>/?tableId=T1&outletId=200&outletName=..&tableNumber=..
"""

import io
from typing import Optional
from urllib.parse import urlencode

import qrcode


def table_qr_url(
    base_url: str,
    outlet_id: str,
    table_id: str,
    outlet_name: Optional[str] = None,
    table_number: Optional[str] = None,
) -> str:
    params = {"tableId": table_id, "outletId": outlet_id}
    if outlet_name:
        params["outletName"] = outlet_name
    if table_number:
        params["tableNumber"] = table_number
    return f"{base_url.rstrip('/')}/?{urlencode(params)}"


def make_table_qr(
    base_url: str,
    outlet_id: str,
    table_id: str,
    outlet_name: Optional[str] = None,
    table_number: Optional[str] = None,
    box_size: int = 10,
) -> bytes:
    """PNG bytes of the QR code for one table."""
    qr = qrcode.QRCode(
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=4,
    )
    qr.add_data(table_qr_url(base_url, outlet_id, table_id, outlet_name, table_number))
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
