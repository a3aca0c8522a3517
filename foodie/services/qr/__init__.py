"""
QR Scanning and Resolution

Usage:
    from foodie.services.qr import get_qr_decoder, QRResolver

    text = get_qr_decoder().decode_image_bytes(upload)
    resolution = await QRResolver(get_geo_service()).resolve(text, lat, lon)
"""

from functools import lru_cache

from foodie.services.qr.camera import CameraScanner
from foodie.services.qr.decoder import BaseQRDecoder, OpenCVQRDecoder
from foodie.services.qr.generator import make_table_qr, table_qr_url
from foodie.services.qr.payload import parse_qr_payload
from foodie.services.qr.resolver import QRResolution, QRResolver, build_menu_redirect


@lru_cache()
def get_qr_decoder() -> BaseQRDecoder:
    return OpenCVQRDecoder()


__all__ = [
    "get_qr_decoder",
    "BaseQRDecoder",
    "OpenCVQRDecoder",
    "CameraScanner",
    "QRResolution",
    "QRResolver",
    "build_menu_redirect",
    "make_table_qr",
    "parse_qr_payload",
    "table_qr_url",
]
