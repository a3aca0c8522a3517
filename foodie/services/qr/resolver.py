"""
QR Resolution

After a payload is decoded the diner is sent to the menu listing with
the outlet/table identifiers and, when the device shared its position,
the coordinates plus the reverse-geocoded city and state.

Geolocation is best effort: a failed lookup keeps the coordinates and
drops city/state, and no coordinates means no location at all.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode

from foodie.schemas import LocationContext, QRCodeData
from foodie.services.geo import BaseGeoService
from foodie.services.qr.payload import parse_qr_payload

logger = logging.getLogger(__name__)


@dataclass
class QRResolution:
    data: QRCodeData
    location: Optional[LocationContext]
    redirect_url: str


def build_menu_redirect(data: QRCodeData, location: Optional[LocationContext] = None) -> str:
    """Menu listing URL for a scanned code, e.g. '/?outletId=200&tableId=T1'."""
    params = {"outletId": data.outlet_id}
    if data.table_id:
        params["tableId"] = data.table_id
    if data.food_category:
        params["category"] = data.food_category
    if location is not None:
        params["lat"] = str(location.lat)
        params["lon"] = str(location.lon)
        if location.city is not None:
            params["city"] = location.city
            params["state"] = location.state or ""
    return "/?" + urlencode(params)


class QRResolver:
    """Parse a decoded payload and attach the diner's location."""

    def __init__(self, geo_service: BaseGeoService):
        self.geo_service = geo_service

    async def locate(self, lat: Optional[float], lon: Optional[float]) -> Optional[LocationContext]:
        if lat is None or lon is None:
            return None

        result = await self.geo_service.reverse_geocode(lat, lon)
        if not result.success:
            logger.warning(
                f"QR Resolver: Reverse geocoding failed ({result.error_code}), "
                f"keeping coordinates only"
            )
            return LocationContext(lat=lat, lon=lon)

        return LocationContext(
            lat=lat,
            lon=lon,
            city=result.city or "",
            state=result.state or "",
        )

    async def resolve(
        self,
        text: str,
        lat: Optional[float] = None,
        lon: Optional[float] = None,
    ) -> QRResolution:
        """
        Resolve decoded QR text into identifiers, location and redirect.

        Raises:
            QRPayloadError: The payload is invalid. Nothing is geocoded
                in that case.
        """
        data = parse_qr_payload(text)
        location = await self.locate(lat, lon)
        redirect_url = build_menu_redirect(data, location)

        logger.info(f"QR resolved: outlet={data.outlet_id} table={data.table_id} -> {redirect_url}")
        return QRResolution(data=data, location=location, redirect_url=redirect_url)
