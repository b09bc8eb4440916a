"""Player-facing product creation, pricing and display management."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Tuple

from cozyshop.domain.catalog import ProductCatalog
from cozyshop.domain.inventory import Product
from cozyshop.domain.settings import SimulationSettings
from cozyshop.domain.state import ShopSession
from cozyshop.services.factories import make_instance_id

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class InventoryEvent:
    """Base class for inventory-related events."""


@dataclass(slots=True)
class ProductCreatedEvent(InventoryEvent):
    product_id: str
    name: str
    price: int


@dataclass(slots=True)
class PriceUpdatedEvent(InventoryEvent):
    product_id: str
    old_price: int
    new_price: int


@dataclass(slots=True)
class ProductDisplayedEvent(InventoryEvent):
    product_id: str
    slot_id: str


@dataclass(slots=True)
class DisplayClearedEvent(InventoryEvent):
    product_id: str
    slot_id: str


@dataclass(slots=True)
class InventoryActionFailedEvent(InventoryEvent):
    reason: str
    message: str


class InventoryService:
    """Keeps inventory and display slots consistent while the player edits the shop."""

    def __init__(
        self,
        *,
        catalog: ProductCatalog,
        settings: SimulationSettings | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._catalog = catalog
        self._settings = settings or SimulationSettings()
        self._clock = clock

    def create_product(
        self,
        session: ShopSession,
        template_id: str,
        artwork_ref: str,
        name: str | None = None,
    ) -> List[InventoryEvent]:
        template = self._catalog.get_template(template_id)
        if template is None:
            return [_failed("template_not_found", f"Unknown product template '{template_id}'.")]
        product = Product(
            id=make_instance_id("product", session.rng, session.inventory),
            template_id=template.id,
            name=name or template.name,
            price=template.base_price + self._settings.markup,
            artwork_ref=artwork_ref,
            created_at=self._clock(),
        )
        session.inventory.add(product)
        logger.debug("Created %s (%s) at %d coins", product.id, template.id, product.price)
        return [ProductCreatedEvent(product_id=product.id, name=product.name, price=product.price)]

    def set_price(self, session: ShopSession, product_id: str, price: int) -> List[InventoryEvent]:
        product = session.inventory.find_by_id(product_id)
        if product is None:
            return [_failed("product_not_found", "That product is not in your inventory.")]
        template = self._catalog.get_template(product.template_id)
        if template is None:
            return [_failed("template_not_found", f"Unknown product template '{product.template_id}'.")]
        if price < template.base_price:
            return [_failed("price_below_base", f"Price must be at least {template.base_price} coins.")]
        old_price = product.price
        product.price = price
        return [PriceUpdatedEvent(product_id=product.id, old_price=old_price, new_price=price)]

    def display_product(self, session: ShopSession, product_id: str, slot_id: str) -> List[InventoryEvent]:
        if session.shop_open:
            return [_failed("shop_open", "Cannot change displays while shop is open!")]
        product = session.inventory.find_by_id(product_id)
        if product is None:
            return [_failed("product_not_found", "That product is not in your inventory.")]
        slot = session.displays.get_slot(slot_id)
        if slot is None:
            return [_failed("slot_not_found", f"Unknown display slot '{slot_id}'.")]
        if product.displayed:
            return [_failed("already_displayed", f"{product.name} is already on display.")]
        if not session.displays.assign(slot_id, product_id):
            return [_failed("slot_filled", "That display already holds a product.")]
        product.displayed = True
        return [ProductDisplayedEvent(product_id=product_id, slot_id=slot_id)]

    def remove_from_display(self, session: ShopSession, slot_id: str) -> List[InventoryEvent]:
        if session.shop_open:
            return [_failed("shop_open", "Cannot change displays while shop is open!")]
        slot = session.displays.get_slot(slot_id)
        if slot is None:
            return [_failed("slot_not_found", f"Unknown display slot '{slot_id}'.")]
        product_id = slot.product_id
        if product_id is None or not session.displays.clear(slot_id):
            return [_failed("slot_empty", "That display is already empty.")]
        product = session.inventory.find_by_id(product_id)
        if product is not None:
            product.displayed = False
        return [DisplayClearedEvent(product_id=product_id, slot_id=slot_id)]

    @staticmethod
    def list_undisplayed(session: ShopSession) -> List[Product]:
        return session.inventory.list_undisplayed()

    @staticmethod
    def displayed_products(session: ShopSession) -> List[Tuple[str, Product]]:
        return [(slot.id, product) for slot, product in session.displays.displayed_pairs(session.inventory)]


def _failed(reason: str, message: str) -> InventoryActionFailedEvent:
    return InventoryActionFailedEvent(reason=reason, message=message)
