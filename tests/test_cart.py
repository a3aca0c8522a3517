from datetime import datetime

import pytest

from foodie.exceptions import CartError
from foodie.schemas import MenuItem
from foodie.services.cart import (
    Cart,
    cart_line_key,
    delivery_estimate,
    filter_menu,
    format_price,
    menu_categories,
    unit_price,
)


def make_item(item_id, name, price, category, veg=True, best_seller=False):
    return MenuItem.model_validate({
        "id": item_id,
        "h": name,
        "dp": price,
        "ct": category,
        "veg": veg,
        "bestSeller": best_seller,
    })


class TestPricing:
    def test_line_key_without_add_ons(self):
        assert cart_line_key("P1") == "P1-"

    def test_line_key_sorts_add_ons(self):
        assert cart_line_key("P1", ["mint", "cheese"]) == "P1-cheese-mint"

    def test_unit_price_adds_selected_add_ons(self, paneer):
        assert unit_price(paneer) == 20000
        assert unit_price(paneer, ["cheese"]) == 23000
        assert unit_price(paneer, ["cheese", "mint"]) == 24500

    def test_unknown_add_on_costs_nothing(self, paneer):
        assert unit_price(paneer, ["truffle"]) == 20000

    def test_format_price(self):
        assert format_price(45000) == "₹450.00"
        assert format_price(12345) == "₹123.45"
        assert format_price(0) == "₹0.00"

    def test_delivery_estimate_is_fifteen_minutes_out(self):
        # 2024-01-05 is a Friday
        assert delivery_estimate(datetime(2024, 1, 5, 18, 50)) == {"time": "7:05 PM", "day": "Friday"}

    def test_delivery_estimate_rolls_over_midnight(self):
        assert delivery_estimate(datetime(2024, 1, 7, 23, 50)) == {"time": "12:05 AM", "day": "Monday"}


class TestCart:
    def test_repeated_add_merges_line(self, paneer):
        cart = Cart()
        cart.add(paneer, ["cheese"])
        line = cart.add(paneer, ["cheese"])

        assert len(cart) == 1
        assert line.quantity == 2

    def test_add_on_order_does_not_matter(self, paneer):
        cart = Cart()
        cart.add(paneer, ["mint", "cheese"])
        cart.add(paneer, ["cheese", "mint"])

        assert len(cart) == 1
        assert cart.lines[0].key == "P1-cheese-mint"

    def test_different_add_ons_are_separate_lines(self, paneer):
        cart = Cart()
        plain = cart.add(paneer)
        cheesy = cart.add(paneer, ["cheese"])

        assert len(cart) == 2
        assert plain.key != cheesy.key
        assert plain.price == 20000
        assert cheesy.price == 23000

    def test_decrement_to_zero_removes_line(self, paneer):
        cart = Cart()
        line = cart.add(paneer)

        assert cart.decrement(line.key) is None
        assert cart.is_empty

        # Further decrements are no-ops
        assert cart.decrement(line.key) is None
        assert cart.is_empty

    def test_update_quantity(self, paneer):
        cart = Cart()
        line = cart.add(paneer)

        cart.update_quantity(line.key, 4)
        assert cart.get(line.key).quantity == 4

        cart.update_quantity(line.key, 0)
        assert cart.get(line.key) is None

    def test_update_unknown_key_is_ignored(self, paneer):
        cart = Cart()
        cart.add(paneer)

        assert cart.update_quantity("nope-", 3) is None
        assert cart.total_items() == 1

    def test_increment_unknown_key_raises(self):
        with pytest.raises(CartError):
            Cart().increment("nope-")

    def test_totals(self, paneer):
        cart = Cart()
        cart.add(paneer)
        cart.add(paneer)
        cart.add(paneer, ["cheese", "mint"])

        assert cart.total_price() == 20000 * 2 + 24500
        assert cart.total_items() == 3

    def test_item_quantity_spans_variants(self, paneer):
        cart = Cart()
        cart.add(paneer)
        cart.add(paneer, ["cheese"])
        cart.add(paneer, ["cheese"])

        assert cart.item_quantity("P1") == 3
        assert cart.item_quantity("P10") == 0

    def test_clear(self, paneer):
        cart = Cart()
        cart.add(paneer)
        cart.clear()

        assert cart.is_empty
        assert cart.total_price() == 0


class TestMenuBrowsing:
    @pytest.fixture
    def menu(self):
        return [
            make_item("1", "Masala Dosa", 15000, "MAIN COURSE", veg=True, best_seller=True),
            make_item("2", "Chicken Biryani", 30000, "MAIN COURSE", veg=False),
            make_item("3", "Mango Lassi", 9000, "BEVERAGES", veg=True),
            make_item("4", "Chicken Soup", 11000, "STARTERS", veg=False, best_seller=True),
        ]

    def test_categories_in_first_seen_order(self, menu):
        assert menu_categories(menu) == ["MAIN COURSE", "BEVERAGES", "STARTERS"]

    def test_search_is_case_insensitive(self, menu):
        assert [i.id for i in filter_menu(menu, search="chicken")] == ["2", "4"]

    def test_veg_and_non_veg(self, menu):
        assert [i.id for i in filter_menu(menu, veg=True)] == ["1", "3"]
        assert [i.id for i in filter_menu(menu, non_veg=True)] == ["2", "4"]

    def test_category_selection_ignores_diet_toggles(self, menu):
        result = filter_menu(menu, categories=["MAIN COURSE"], veg=True)
        assert [i.id for i in result] == ["1", "2"]

    def test_bestseller(self, menu):
        assert [i.id for i in filter_menu(menu, bestseller=True)] == ["1", "4"]
