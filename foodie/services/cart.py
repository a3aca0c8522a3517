"""
Cart and Pricing

A diner's cart is a list of lines. Each line is one dish with one
particular set of add-ons, identified by a composite key:

    "<menu item id>-<add-on ids, sorted, joined by '-'>"

so the same dish ordered with different add-ons shows up as separate
lines while repeated adds of the same variant just bump the quantity.
All amounts are integers in paise.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Iterable, Optional

from foodie.exceptions import CartError
from foodie.schemas import MenuItem

logger = logging.getLogger(__name__)

DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


# =============================================================================
# PRICING
# =============================================================================

def cart_line_key(item_id: str, add_on_ids: Iterable[str] = ()) -> str:
    """Composite key of (menu item, add-on set)."""
    return f"{item_id}-{'-'.join(sorted(set(add_on_ids)))}"


def unit_price(item: MenuItem, add_on_ids: Iterable[str] = ()) -> int:
    """
    Base price plus the price of every selected add-on.

    Add-ons are looked up by id in the item's own add-on list;
    ids the item does not offer contribute nothing.
    """
    prices = {add_on.id: add_on.price for add_on in item.add_ons}
    return item.price + sum(prices.get(add_on_id, 0) for add_on_id in set(add_on_ids))


def format_price(paise: int) -> str:
    """Display form of a paise amount, e.g. 45000 -> '₹450.00'."""
    return f"₹{paise / 100:.2f}"


def delivery_estimate(now: Optional[datetime] = None, minutes: int = 15) -> dict[str, str]:
    """ETA shown on the order summary, e.g. {'time': '7:05 PM', 'day': 'Friday'}."""
    eta = (now or datetime.now()) + timedelta(minutes=minutes)
    hour = eta.hour % 12 or 12
    suffix = "PM" if eta.hour >= 12 else "AM"
    return {
        "time": f"{hour}:{eta.minute:02d} {suffix}",
        "day": DAY_NAMES[eta.weekday()],
    }


# =============================================================================
# CART
# =============================================================================

@dataclass
class CartLine:
    key: str
    item_id: str
    name: str
    price: int
    quantity: int
    image: Optional[str] = None
    add_ons: list[str] = field(default_factory=list)

    @property
    def line_total(self) -> int:
        return self.price * self.quantity


class Cart:
    """
    Ordered collection of cart lines.

    Lines with quantity 0 are never stored: any update that would bring a
    line to zero removes it instead.
    """

    def __init__(self):
        self._lines: dict[str, CartLine] = {}

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self):
        return iter(list(self._lines.values()))

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines.values())

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def get(self, key: str) -> Optional[CartLine]:
        return self._lines.get(key)

    def add(self, item: MenuItem, add_on_ids: Iterable[str] = ()) -> CartLine:
        """Add one unit of `item` with the given add-ons."""
        selected = sorted(set(add_on_ids))
        key = cart_line_key(item.id, selected)

        line = self._lines.get(key)
        if line is not None:
            line.quantity += 1
            logger.debug(f"Cart: {key} quantity -> {line.quantity}")
            return line

        line = CartLine(
            key=key,
            item_id=item.id,
            name=item.name,
            price=unit_price(item, selected),
            quantity=1,
            image=item.image,
            add_ons=selected,
        )
        self._lines[key] = line
        logger.debug(f"Cart: Added {key} at {line.price} paise")
        return line

    def update_quantity(self, key: str, quantity: int) -> Optional[CartLine]:
        """
        Set a line's quantity. Zero or less removes the line.

        Unknown keys are ignored. Returns the updated line, or None when
        the line is (or already was) gone.
        """
        line = self._lines.get(key)
        if line is None:
            return None

        if quantity <= 0:
            del self._lines[key]
            logger.debug(f"Cart: Removed {key}")
            return None

        line.quantity = quantity
        return line

    def increment(self, key: str) -> CartLine:
        line = self._lines.get(key)
        if line is None:
            raise CartError(f"Cart line {key} not found", code="line_not_found", status_code=404)
        return self.update_quantity(key, line.quantity + 1)

    def decrement(self, key: str) -> Optional[CartLine]:
        line = self._lines.get(key)
        if line is None:
            return None
        return self.update_quantity(key, line.quantity - 1)

    def remove(self, key: str) -> None:
        self._lines.pop(key, None)

    def clear(self) -> None:
        self._lines.clear()

    def total_price(self) -> int:
        return sum(line.price * line.quantity for line in self._lines.values())

    def total_items(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def item_quantity(self, item_id: str) -> int:
        """Units of one dish across all of its add-on variants."""
        return sum(
            line.quantity for line in self._lines.values() if line.item_id == item_id
        )


# =============================================================================
# MENU BROWSING
# =============================================================================

def menu_categories(items: Iterable[MenuItem]) -> list[str]:
    """Distinct non-empty categories in first-seen order."""
    seen: dict[str, None] = {}
    for item in items:
        if item.category:
            seen.setdefault(item.category, None)
    return list(seen)


def filter_menu(
    items: Iterable[MenuItem],
    search: str = "",
    categories: Iterable[str] = (),
    veg: bool = False,
    non_veg: bool = False,
    bestseller: bool = False,
) -> list[MenuItem]:
    """
    Storefront menu filter.

    Name search is a case-insensitive substring match. When categories are
    selected only those categories are shown and the veg / non-veg toggles
    are ignored.
    """
    needle = search.strip().lower()
    selected = set(categories)
    apply_diet = not selected

    result = []
    for item in items:
        if needle and needle not in item.name.lower():
            continue
        if selected and item.category not in selected:
            continue
        if apply_diet and veg and not item.veg:
            continue
        if apply_diet and non_veg and item.veg:
            continue
        if bestseller and not item.best_seller:
            continue
        result.append(item)
    return result
