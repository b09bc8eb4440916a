"""Shared CLI rendering helpers."""
from __future__ import annotations

import logging
import os
from typing import Iterable, List, Sequence, Tuple

from cozyshop.domain.customer import Customer
from cozyshop.domain.inventory import DisplaySlot, Product
from cozyshop.services.shop_day_service import DaySummary


def debug_enabled() -> bool:
    """Return True only when COZYSHOP_DEBUG is explicitly set to '1'."""
    return os.getenv("COZYSHOP_DEBUG") == "1"


def configure_logging() -> None:
    level = logging.DEBUG if debug_enabled() else logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def format_coins(amount: int) -> str:
    return f"{amount} coin" if amount == 1 else f"{amount} coins"


def render_boxed(title: str, lines: Sequence[str]) -> List[str]:
    width = max([len(title), *(len(line) for line in lines)]) + 2
    border = "+" + "-" * width + "+"
    rendered = [border, f"| {title.ljust(width - 1)}|", border]
    rendered.extend(f"| {line.ljust(width - 1)}|" for line in lines)
    rendered.append(border)
    return rendered


def render_displays(pairs: Iterable[Tuple[DisplaySlot, Product | None]]) -> List[str]:
    lines: List[str] = []
    for slot, product in pairs:
        if product is None:
            lines.append(f"{slot.id}: (empty)")
        else:
            lines.append(f"{slot.id}: {product.name} - {format_coins(product.price)}")
    return lines


def render_customer(
    customer: Customer,
    product_names: dict[str, str],
    color_names: dict[str, str] | None = None,
) -> str:
    """One queue line: liked products and colors by display name, then the budget."""
    prefs = customer.preferences
    color_names = color_names or {}
    liked = ", ".join(product_names.get(type_id, type_id) for type_id in sorted(prefs.liked_product_types))
    colors = ", ".join(color_names.get(hex_value, hex_value) for hex_value in sorted(prefs.liked_colors))
    return (
        f"{customer.id} [{customer.customer_type}] likes {liked} in {colors}; "
        f"budget {prefs.budget.min}-{prefs.budget.max}"
    )


def render_day_summary(summary: DaySummary) -> List[str]:
    return render_boxed(
        f"Day {summary.day_number} Summary",
        [
            f"Items Sold: {summary.items_sold}",
            f"Revenue: {format_coins(summary.revenue)}",
            f"Customers Visited: {summary.customers_visited}",
            f"Daily Profit: {format_coins(summary.revenue)}",
        ],
    )
