"""Sale settlement shared by the shop day and the customer queue."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from cozyshop.domain.inventory import Product
from cozyshop.domain.state import ShopSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SaleRecord:
    product_id: str
    product_name: str
    template_id: str
    price: int
    customer_id: str
    sold_at: float


def available_for_sale(session: ShopSession, product_id: str) -> Product | None:
    """Return the product if it is still in inventory and sitting in a display slot."""
    product = session.inventory.find_by_id(product_id)
    if product is None or session.displays.slot_for_product(product_id) is None:
        return None
    return product


def complete_sale(
    session: ShopSession, product_id: str, *, customer_id: str, now: float
) -> SaleRecord | None:
    """Free the product's slot, drop it from inventory and pay the player."""
    product = session.inventory.find_by_id(product_id)
    if product is None:
        return None
    slot = session.displays.slot_for_product(product_id)
    if slot is not None:
        session.displays.clear(slot.id)
    session.inventory.remove(product_id)
    session.wallet.credit(product.price)
    session.customers_served += 1
    logger.debug("Sold %s to %s for %d coins", product.id, customer_id, product.price)
    return SaleRecord(
        product_id=product.id,
        product_name=product.name,
        template_id=product.template_id,
        price=product.price,
        customer_id=customer_id,
        sold_at=now,
    )
