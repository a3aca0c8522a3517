import json
from datetime import datetime, timezone

import httpx

from foodie.schemas import MenuItem
from foodie.services.foodieos import (
    HttpFoodieService,
    OutletLocation,
    build_outlet_food_request,
    parse_outlet_food,
)

BASE_URL = "https://foodie.example.com/api"


def service(handler):
    return HttpFoodieService(base_url=BASE_URL, timeout=5, platform="web", transport=httpx.MockTransport(handler))


def menu_envelope(*items):
    return {"status": 200, "output": {"r": list(items)}}


def raw_item(item_id, name, price=10000, **extra):
    return {"id": item_id, "h": name, "dp": price, "ct": "MAIN COURSE", "veg": True, **extra}


class TestRequestBody:
    def test_outlet_food_request(self):
        now = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
        body = build_outlet_food_request(
            "200",
            OutletLocation(lat=25.4, lon=81.8, city="Prayagraj", state="UP"),
            "BEVERAGES",
            platform="web",
            now=now,
        )

        assert body == {
            "platform": "web",
            "country": "India",
            "city": "Prayagraj",
            "state": "UP",
            "lat": 25.4,
            "lon": 81.8,
            "outletid": 200,
            "foodCategory": "BEVERAGES",
            "date": "2024-03-01T12:00:00+00:00",
        }

    def test_unknown_location_is_blank(self):
        body = build_outlet_food_request(200, OutletLocation())
        assert (body["city"], body["state"], body["lat"], body["lon"]) == ("", "", 0.0, 0.0)


class TestParse:
    def test_duplicates_keep_first_position_last_value(self):
        items = parse_outlet_food(menu_envelope(
            raw_item("A", "First"),
            raw_item("B", "Second"),
            raw_item("A", "First again"),
        ))

        assert [i.id for i in items] == ["A", "B"]
        assert items[0].name == "First again"

    def test_add_on_items_alias(self):
        items = parse_outlet_food(menu_envelope(
            raw_item("A", "Burger", addOnItems=[{"id": "x", "name": "X", "price": 500}]),
        ))
        assert items[0].add_ons[0].price == 500

    def test_malformed_entry_skipped(self):
        items = parse_outlet_food(menu_envelope({"id": "A"}, raw_item("B", "Ok")))
        assert [i.id for i in items] == ["B"]

    def test_wrong_envelope(self):
        assert parse_outlet_food({"status": 500, "output": {"r": []}}) is None
        assert parse_outlet_food({"status": 200, "output": {}}) is None
        assert parse_outlet_food([]) is None


class TestHttpService:
    async def test_fetch(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=menu_envelope(raw_item("A", "Dosa"), raw_item("B", "Idli")))

        result = await service(handler).fetch_outlet_food(200, OutletLocation(city="Prayagraj"), "STARTERS")

        assert result.success
        assert [i.name for i in result.items] == ["Dosa", "Idli"]
        assert seen["path"] == "/api/getOutletFood"
        assert seen["body"]["outletid"] == 200
        assert seen["body"]["foodCategory"] == "STARTERS"
        assert seen["body"]["platform"] == "web"

    async def test_unexpected_body_is_empty_menu(self):
        result = await service(lambda request: httpx.Response(200, json={"status": 404})).fetch_outlet_food(
            200, OutletLocation()
        )

        assert not result.success
        assert result.error_code == "empty_menu"
        assert result.error_message == "No food items available at the moment."

    async def test_server_error(self):
        result = await service(lambda request: httpx.Response(500)).fetch_outlet_food(200, OutletLocation())

        assert not result.success
        assert result.error_code == "bad_status"
        assert result.error_message == "Failed to load menu. Please try again later."

    async def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        result = await service(handler).fetch_outlet_food(200, OutletLocation())

        assert not result.success
        assert result.error_code == "network_error"

    async def test_sync_envelope(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"message": "ok"})

        items = [MenuItem.model_validate(raw_item("M001", "Butter Chicken", 45000, bestSeller=True))]
        result = await service(handler).update_outlet_food(200, items, ["MAIN COURSE"])

        assert result.success
        assert result.synced_items == 1
        assert seen["path"] == "/api/updateOutletFood"
        assert seen["body"]["outletid"] == 200
        assert seen["body"]["food"]["cat"] == ["MAIN COURSE"]
        assert seen["body"]["food"]["r"][0]["h"] == "Butter Chicken"
        assert seen["body"]["food"]["r"][0]["bestSeller"] is True

    async def test_sync_rejected(self):
        result = await service(lambda request: httpx.Response(503)).update_outlet_food(200, [], [])

        assert not result.success
        assert result.error_code == "bad_status"
