"""
QR Payload Parsing

Table and outlet QR codes come in three shapes:

    https://host/?tableId=T1&outletId=200&outletName=..&tableNumber=..
    https://host/ac/200            (or just "/ac/200": /{category}/{outletId})
    {"tableId": "T1", "outletId": "200", "outletName": "..."}

parse_qr_payload() accepts any of them and returns a QRCodeData, or raises
QRPayloadError. A payload missing a required identifier is never returned
half-filled.
"""

import json
import logging
from typing import Optional
from urllib.parse import parse_qs, unquote, urlparse

from foodie.exceptions import QRPayloadError
from foodie.schemas import QRCodeData

logger = logging.getLogger(__name__)

INVALID_QR_MESSAGE = "Invalid QR code. Please scan a valid FoodieOS QR code."


def _first(query: dict[str, list[str]], name: str) -> Optional[str]:
    values = query.get(name)
    if not values:
        return None
    value = values[0].strip()
    return value or None


def _parse_query(query_string: str) -> QRCodeData:
    query = parse_qs(query_string, keep_blank_values=True)
    table_id = _first(query, "tableId")
    outlet_id = _first(query, "outletId")

    if not table_id or not outlet_id:
        raise QRPayloadError("QR code is missing tableId or outletId")

    return QRCodeData(
        tableId=table_id,
        outletId=outlet_id,
        outletName=_first(query, "outletName"),
        tableNumber=_first(query, "tableNumber"),
    )


def _parse_path(path: str) -> QRCodeData:
    parts = [unquote(part) for part in path.split("/") if part]
    if len(parts) < 2:
        raise QRPayloadError(INVALID_QR_MESSAGE)

    food_category, outlet_id = parts[0].strip(), parts[1].strip()
    if not food_category or not outlet_id:
        raise QRPayloadError("Missing outlet ID or food category in QR code")

    return QRCodeData(outletId=outlet_id, foodCategory=food_category)


def _parse_json(text: str) -> QRCodeData:
    try:
        data = json.loads(text)
    except ValueError:
        raise QRPayloadError(INVALID_QR_MESSAGE)

    if not isinstance(data, dict):
        raise QRPayloadError(INVALID_QR_MESSAGE)

    table_id = data.get("tableId")
    outlet_id = data.get("outletId")
    if table_id in (None, "") or outlet_id in (None, ""):
        raise QRPayloadError("QR code is missing tableId or outletId")

    def optional(name: str) -> Optional[str]:
        value = data.get(name)
        return None if value in (None, "") else str(value)

    return QRCodeData(
        tableId=str(table_id),
        outletId=str(outlet_id),
        outletName=optional("outletName"),
        tableNumber=optional("tableNumber"),
    )


def parse_qr_payload(text: str) -> QRCodeData:
    """
    Parse decoded QR text into outlet/table identifiers.

    Raises:
        QRPayloadError: The text matches none of the known shapes or
            lacks a required identifier.
    """
    text = (text or "").strip()
    if not text:
        raise QRPayloadError(INVALID_QR_MESSAGE)

    if text.lower().startswith(("http://", "https://")):
        url = urlparse(text)
        query = parse_qs(url.query, keep_blank_values=True)
        if "tableId" in query or "outletId" in query:
            data = _parse_query(url.query)
        else:
            data = _parse_path(url.path)
    elif text.startswith("/"):
        data = _parse_path(urlparse(text).path)
    else:
        data = _parse_json(text)

    logger.debug(f"QR payload parsed: outlet={data.outlet_id} table={data.table_id}")
    return data
