"""Player inventory, shop display slots and wallet."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple

DEFAULT_DISPLAY_CAPACITY = 6


@dataclass(slots=True)
class Product:
    """A finished design printed on a product template."""

    id: str
    template_id: str
    name: str
    price: int
    artwork_ref: str
    created_at: float
    displayed: bool = False


@dataclass(slots=True)
class DisplaySlot:
    """Fixed shop location holding zero or one product."""

    id: str
    product_id: str | None = None

    @property
    def filled(self) -> bool:
        return self.product_id is not None


class InventoryStore:
    """Insertion-ordered collection of the player's products."""

    def __init__(self, products: List[Product] | None = None) -> None:
        self._products: Dict[str, Product] = {}
        for product in products or []:
            self.add(product)

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self) -> Iterator[Product]:
        return iter(list(self._products.values()))

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._products

    def add(self, product: Product) -> None:
        if product.id in self._products:
            raise ValueError(f"Product '{product.id}' is already in the inventory.")
        self._products[product.id] = product

    def find_by_id(self, product_id: str) -> Product | None:
        return self._products.get(product_id)

    def remove(self, product_id: str) -> bool:
        return self._products.pop(product_id, None) is not None

    def list_undisplayed(self) -> List[Product]:
        return [product for product in self._products.values() if not product.displayed]


class DisplayStore:
    """Shop shelves. Slots are created once; only their contents change."""

    def __init__(self, capacity: int = DEFAULT_DISPLAY_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("Display capacity must be positive.")
        self._slots: List[DisplaySlot] = [DisplaySlot(id=f"display-{index}") for index in range(capacity)]

    @property
    def capacity(self) -> int:
        return len(self._slots)

    def slots(self) -> List[DisplaySlot]:
        return list(self._slots)

    def get_slot(self, slot_id: str) -> DisplaySlot | None:
        for slot in self._slots:
            if slot.id == slot_id:
                return slot
        return None

    def slot_for_product(self, product_id: str) -> DisplaySlot | None:
        for slot in self._slots:
            if slot.product_id == product_id:
                return slot
        return None

    def filled_slots(self) -> List[DisplaySlot]:
        return [slot for slot in self._slots if slot.filled]

    def filled_count(self) -> int:
        return len(self.filled_slots())

    def assign(self, slot_id: str, product_id: str) -> bool:
        """Place product_id into an empty slot. The product may occupy one slot only."""
        slot = self.get_slot(slot_id)
        if slot is None or slot.filled or self.slot_for_product(product_id) is not None:
            return False
        slot.product_id = product_id
        return True

    def clear(self, slot_id: str) -> bool:
        slot = self.get_slot(slot_id)
        if slot is None or not slot.filled:
            return False
        slot.product_id = None
        return True

    def displayed_pairs(self, inventory: InventoryStore) -> List[Tuple[DisplaySlot, Product]]:
        """Return (slot, product) for filled slots whose product is still in inventory."""
        pairs: List[Tuple[DisplaySlot, Product]] = []
        for slot in self._slots:
            if slot.product_id is None:
                continue
            product = inventory.find_by_id(slot.product_id)
            if product is not None:
                pairs.append((slot, product))
        return pairs


@dataclass(slots=True)
class Wallet:
    coins: int = 0
    history: List[int] = field(default_factory=list)

    def credit(self, amount: int) -> int:
        if amount < 0:
            raise ValueError("Credit amount must be zero or higher.")
        self.coins += amount
        self.history.append(amount)
        return self.coins
