"""Notification hooks exposed to a presentation layer."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from cozyshop.core.types import CustomerStateName
from cozyshop.domain.customer import Customer
from cozyshop.domain.inventory import Product

if TYPE_CHECKING:
    from cozyshop.services.shop_day_service import DaySummary


class ShopListener:
    """No-op base; presentation layers override the hooks they render."""

    def on_customer_state_changed(
        self,
        customer: Customer,
        previous: CustomerStateName | None,
        new: CustomerStateName,
    ) -> None:
        pass

    def on_customer_thought(self, customer: Customer, text: str) -> None:
        pass

    def on_sale(self, product: Product, price: int) -> None:
        pass

    def on_customer_left(self, customer: Customer, made_sale: bool) -> None:
        pass

    def on_day_started(self, day_number: int) -> None:
        pass

    def on_day_ended(self, summary: "DaySummary") -> None:
        pass


@dataclass(slots=True)
class RecordedNotification:
    kind: str
    payload: tuple


class RecordingListener(ShopListener):
    """Keeps every notification in order; handy for replays and tests."""

    def __init__(self) -> None:
        self.notifications: list[RecordedNotification] = []

    def kinds(self) -> list[str]:
        return [entry.kind for entry in self.notifications]

    def of_kind(self, kind: str) -> list[tuple]:
        return [entry.payload for entry in self.notifications if entry.kind == kind]

    def on_customer_state_changed(self, customer, previous, new) -> None:
        self.notifications.append(RecordedNotification("state", (customer.id, previous, new)))

    def on_customer_thought(self, customer, text) -> None:
        self.notifications.append(RecordedNotification("thought", (customer.id, text)))

    def on_sale(self, product, price) -> None:
        self.notifications.append(RecordedNotification("sale", (product.id, price)))

    def on_customer_left(self, customer, made_sale) -> None:
        self.notifications.append(RecordedNotification("left", (customer.id, made_sale)))

    def on_day_started(self, day_number) -> None:
        self.notifications.append(RecordedNotification("day_started", (day_number,)))

    def on_day_ended(self, summary) -> None:
        self.notifications.append(RecordedNotification("day_ended", (summary,)))
