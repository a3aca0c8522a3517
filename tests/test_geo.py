import httpx
import pytest
from googlemaps.exceptions import Timeout

from foodie.services.geo import GoogleGeoService, NominatimGeoService


def nominatim(handler):
    return NominatimGeoService(
        base_url="https://nominatim.example.com",
        user_agent="foodie-tests",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.parametrize(
    "address, city",
    [
        ({"city": "Prayagraj", "town": "Naini", "state": "Uttar Pradesh"}, "Prayagraj"),
        ({"town": "Naini", "village": "Arail", "state": "Uttar Pradesh"}, "Naini"),
        ({"village": "Arail", "state": "Uttar Pradesh"}, "Arail"),
    ],
)
async def test_city_fallbacks(address, city):
    result = await nominatim(
        lambda request: httpx.Response(200, json={"address": address, "display_name": "somewhere"})
    ).reverse_geocode(25.43, 81.84)

    assert result.success
    assert result.city == city
    assert result.state == "Uttar Pradesh"


async def test_request_parameters():
    seen = {}

    def handler(request):
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        seen["agent"] = request.headers.get("user-agent")
        return httpx.Response(200, json={"address": {"city": "Lucknow", "state": "Uttar Pradesh"}})

    await nominatim(handler).reverse_geocode(26.84, 80.94)

    assert seen["path"] == "/reverse"
    assert seen["params"]["format"] == "json"
    assert seen["params"]["addressdetails"] == "1"
    assert seen["params"]["lat"] == "26.84"
    assert seen["agent"] == "foodie-tests"


async def test_no_address():
    result = await nominatim(
        lambda request: httpx.Response(200, json={"error": "Unable to geocode"})
    ).reverse_geocode(0.0, 0.0)

    assert not result.success
    assert result.error_code == "address_not_found"


async def test_network_failure_does_not_raise():
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    result = await nominatim(handler).reverse_geocode(25.43, 81.84)

    assert not result.success
    assert result.error_code == "network_error"


async def test_mock_nearest_city(geo_service):
    result = await geo_service.reverse_geocode(19.1, 72.9)

    assert result.success
    assert result.city == "Mumbai"
    assert result.state == "Maharashtra"


class FakeGoogleClient:
    def __init__(self, results=None, error=None):
        self.results = results or []
        self.error = error

    def reverse_geocode(self, latlng):
        if self.error is not None:
            raise self.error
        return self.results


async def test_google_components():
    client = FakeGoogleClient(results=[{
        "formatted_address": "Civil Lines, Prayagraj, Uttar Pradesh, India",
        "address_components": [
            {"long_name": "Prayagraj", "types": ["locality", "political"]},
            {"long_name": "Uttar Pradesh", "types": ["administrative_area_level_1", "political"]},
            {"long_name": "India", "types": ["country", "political"]},
        ],
    }])

    result = await GoogleGeoService(client=client).reverse_geocode(25.45, 81.83)

    assert result.success
    assert (result.city, result.state, result.country) == ("Prayagraj", "Uttar Pradesh", "India")


async def test_google_timeout():
    result = await GoogleGeoService(client=FakeGoogleClient(error=Timeout())).reverse_geocode(25.45, 81.83)

    assert not result.success
    assert result.error_code == "timeout"
