import pytest
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import async_sessionmaker

from foodie.database import build_engine, init_db
from foodie.schemas import MenuItemCreate
from foodie.services.foodieos import MockFoodieService
from foodie.services.menu import (
    InMemoryMenuRepository,
    SqlMenuRepository,
    generate_item_id,
    sync_menu,
    sync_status_message,
)


def payload(**fields):
    data = {"h": "Dal Makhani", "dp": 28000, "ct": "MAIN COURSE", "veg": True}
    data.update(fields)
    return MenuItemCreate.model_validate(data)


@pytest.fixture(params=["memory", "sql"])
async def repository(request, tmp_path):
    if request.param == "memory":
        yield InMemoryMenuRepository()
        return

    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'menu.db'}")
    await init_db(engine)
    yield SqlMenuRepository(async_sessionmaker(engine, expire_on_commit=False))
    await engine.dispose()


class TestRepository:
    async def test_first_main_course_item_gets_m001(self, repository):
        item, is_new = await repository.save_item(payload())

        assert item.id == "M001"
        assert is_new

    async def test_ids_follow_highest_suffix(self, repository):
        await repository.save_item(payload(id="M007"))
        await repository.save_item(payload(id="D001", ct="DESSERTS"))

        item, _ = await repository.save_item(payload())
        assert item.id == "M008"
        assert await repository.next_item_id("DESSERTS") == "D002"
        assert await repository.next_item_id("BEVERAGES") == "B001"

    async def test_save_with_existing_id_replaces(self, repository):
        await repository.save_item(payload(id="M001"))
        item, is_new = await repository.save_item(payload(id="M001", h="Dal Tadka", dp=25000))

        items = await repository.list_items()
        assert not is_new
        assert len(items) == 1
        assert items[0].name == "Dal Tadka"
        assert items[0].price == 25000

    async def test_list_keeps_insertion_order(self, repository):
        for item_id in ["S001", "B001", "M001"]:
            await repository.save_item(payload(id=item_id))
        await repository.save_item(payload(id="B001", h="Updated"))

        assert [i.id for i in await repository.list_items()] == ["S001", "B001", "M001"]

    async def test_delete_missing_id_is_noop(self, repository):
        await repository.save_item(payload())

        assert await repository.delete_item("Z999") is False
        assert [i.id for i in await repository.list_items()] == ["M001"]

    async def test_delete(self, repository):
        await repository.save_item(payload())

        assert await repository.delete_item("M001") is True
        assert await repository.list_items() == []
        assert await repository.get_item("M001") is None

    async def test_add_ons_and_extra_fields_survive(self, repository):
        await repository.save_item(payload(
            addOns=[{"id": "butter", "name": "Extra Butter", "price": 2000}],
            spiceLevel="medium",
        ))

        item = await repository.get_item("M001")
        assert item.add_ons[0].id == "butter"
        assert item.add_ons[0].price == 2000
        assert item.to_wire()["spiceLevel"] == "medium"


def test_seeded_store():
    repository = InMemoryMenuRepository(seed=True)
    assert [i.id for i in repository._items] == ["M001", "D001"]


def test_generate_item_id_ignores_other_shapes():
    assert generate_item_id("MAIN COURSE", ["M002", "MX", "M0x1", "D009"]) == "M003"
    assert generate_item_id("starters", []) == "S001"


class TestMenuItemCreate:
    def test_category_is_normalised(self):
        assert payload(ct="desserts").category == "DESSERTS"

    def test_blank_id_means_new(self):
        assert payload(id="  ").id is None

    @pytest.mark.parametrize(
        "fields",
        [
            {"dp": 0},
            {"dp": -100},
            {"h": "   "},
            {"ct": "PIZZA"},
        ],
    )
    def test_invalid(self, fields):
        with pytest.raises(ValidationError):
            payload(**fields)


class TestSync:
    async def test_pushes_all_items(self):
        repository = InMemoryMenuRepository(seed=True)
        foodie = MockFoodieService(min_latency=0, max_latency=0)

        result = await sync_menu(repository, foodie, outlet_id=200)

        assert result.success
        assert result.synced_items == 2
        assert sync_status_message(result) == "Sync successful!"

        envelope = foodie.synced[-1]
        assert envelope["outletid"] == 200
        assert envelope["food"]["cat"] == ["BEVERAGES", "STARTERS", "MAIN COURSE", "DESSERTS"]
        assert envelope["food"]["r"][0]["h"] == "Butter Chicken"
        assert envelope["food"]["r"][0]["dp"] == 45000

    async def test_failure_message(self):
        foodie = MockFoodieService(failure_rate=1.0, min_latency=0, max_latency=0)

        result = await sync_menu(InMemoryMenuRepository(seed=True), foodie, outlet_id=200)

        assert not result.success
        assert sync_status_message(result) == "Error: FoodieOS temporarily unavailable"
        assert foodie.synced == []
