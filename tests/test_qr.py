import pytest

from foodie.exceptions import QRPayloadError
from foodie.services.geo.base import BaseGeoService
from foodie.services.geo.mock import MockGeoService
from foodie.services.qr import QRResolver, build_menu_redirect, parse_qr_payload


class TestParsePayload:
    def test_query_url(self):
        data = parse_qr_payload("https://x/?tableId=T1&outletId=O1")

        assert data.table_id == "T1"
        assert data.outlet_id == "O1"
        assert data.outlet_name is None
        assert data.table_number is None

    def test_query_url_optional_fields(self):
        data = parse_qr_payload(
            "https://menu.example.com/?tableId=T4&outletId=200&outletName=Foodie%20Cafe&tableNumber=4"
        )

        assert data.outlet_name == "Foodie Cafe"
        assert data.table_number == "4"

    def test_query_url_missing_outlet_id(self):
        with pytest.raises(QRPayloadError):
            parse_qr_payload("https://x/?tableId=T1")

    def test_query_url_blank_table_id(self):
        with pytest.raises(QRPayloadError):
            parse_qr_payload("https://x/?tableId=&outletId=O1")

    def test_path_url(self):
        data = parse_qr_payload("https://foodieos.example.com/ac/200")

        assert data.outlet_id == "200"
        assert data.food_category == "ac"
        assert data.table_id is None

    def test_bare_path(self):
        data = parse_qr_payload("/ac/200")

        assert data.outlet_id == "200"
        assert data.food_category == "ac"

    def test_json(self):
        data = parse_qr_payload('{"tableId": 7, "outletId": 200, "outletName": "Foodie"}')

        assert data.table_id == "7"
        assert data.outlet_id == "200"
        assert data.outlet_name == "Foodie"

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "   ",
            "https://x/200",
            "/200",
            "hello there",
            "[1, 2]",
            '{"tableId": "T1"}',
            '{"outletId": "O1", "tableId": ""}',
        ],
    )
    def test_invalid_payloads(self, text):
        with pytest.raises(QRPayloadError):
            parse_qr_payload(text)


class CountingGeoService(BaseGeoService):
    def __init__(self):
        self.calls = 0

    @property
    def provider_name(self):
        return "counting"

    async def reverse_geocode(self, latitude, longitude):
        self.calls += 1
        raise AssertionError("should not be called")

    async def health_check(self):
        return True


class TestResolver:
    async def test_without_location(self, geo_service):
        resolution = await QRResolver(geo_service).resolve("https://x/?tableId=T1&outletId=O1")

        assert resolution.location is None
        assert resolution.redirect_url == "/?outletId=O1&tableId=T1"

    async def test_with_location(self, geo_service):
        resolution = await QRResolver(geo_service).resolve(
            "https://x/?tableId=T1&outletId=200", lat=25.44, lon=81.85
        )

        assert resolution.location.city == "Prayagraj"
        assert resolution.location.state == "Uttar Pradesh"
        assert resolution.redirect_url == (
            "/?outletId=200&tableId=T1&lat=25.44&lon=81.85&city=Prayagraj&state=Uttar+Pradesh"
        )

    async def test_geocoding_failure_keeps_coordinates(self):
        failing = MockGeoService(failure_rate=1.0, min_latency=0, max_latency=0)
        resolution = await QRResolver(failing).resolve("/ac/200", lat=25.44, lon=81.85)

        assert resolution.location.lat == 25.44
        assert resolution.location.city is None
        assert resolution.redirect_url == "/?outletId=200&category=ac&lat=25.44&lon=81.85"

    async def test_invalid_payload_skips_geocoding(self):
        geo = CountingGeoService()
        with pytest.raises(QRPayloadError):
            await QRResolver(geo).resolve("not a code", lat=1.0, lon=2.0)
        assert geo.calls == 0

    def test_redirect_carries_category(self):
        data = parse_qr_payload("/BEVERAGES/200")
        assert build_menu_redirect(data) == "/?outletId=200&category=BEVERAGES"
