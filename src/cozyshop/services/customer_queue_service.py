"""Waiting customers served by hand, each with a patience timer."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List

from cozyshop.core.scheduler import Scheduler, TimerHandle
from cozyshop.core.types import CustomerStateName
from cozyshop.data.repositories import ProductTemplatesRepository
from cozyshop.domain.customer import Customer
from cozyshop.domain.inventory import Product
from cozyshop.domain.matching import best_match, score_product
from cozyshop.domain.purchase import PurchaseDecisionEngine
from cozyshop.domain.settings import SimulationSettings
from cozyshop.domain.state import ShopSession
from cozyshop.services.customer_generator import CustomerGenerator
from cozyshop.services.listeners import ShopListener
from cozyshop.services.sales import SaleRecord, available_for_sale, complete_sale

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProductInterestView:
    slot_id: str
    product: Product
    score: float


@dataclass(slots=True)
class QueueEvent:
    """Base class for customer queue events."""


@dataclass(slots=True)
class QueueSaleEvent(QueueEvent):
    customer_id: str
    sale: SaleRecord
    total_coins: int


@dataclass(slots=True)
class QueueDeclinedEvent(QueueEvent):
    customer_id: str
    product_id: str
    probability: float


@dataclass(slots=True)
class QueueActionFailedEvent(QueueEvent):
    reason: str
    message: str


class CustomerQueueService:
    """Persistent queue of ad-hoc customers outside the timed shop day.

    Customers wait until the player serves them or their patience runs out,
    whichever happens first.
    """

    def __init__(
        self,
        *,
        session: ShopSession,
        scheduler: Scheduler,
        generator: CustomerGenerator,
        products_repo: ProductTemplatesRepository,
        settings: SimulationSettings | None = None,
        listener: ShopListener | None = None,
    ) -> None:
        self._session = session
        self._scheduler = scheduler
        self._generator = generator
        self._products_repo = products_repo
        self._settings = settings or SimulationSettings()
        self._listener = listener or ShopListener()
        self._engine = PurchaseDecisionEngine(session.rng)
        self._waiting: Dict[str, Customer] = {}
        self._patience_timers: Dict[str, TimerHandle] = {}

    @property
    def waiting(self) -> List[Customer]:
        return list(self._waiting.values())

    def get_customer(self, customer_id: str) -> Customer | None:
        return self._waiting.get(customer_id)

    def admit_customers(self) -> List[Customer]:
        """Replace the queue with one customer per two filled displays, at least one."""
        self.clear()
        filled = self._session.displays.filled_count()
        if filled == 0:
            return []
        count = min(self._settings.max_customers, max(1, filled // 2))
        admitted: List[Customer] = []
        for _ in range(count):
            customer = self.admit_customer()
            if customer is not None:
                admitted.append(customer)
        return admitted

    def admit_customer(self) -> Customer | None:
        if len(self._waiting) >= self._settings.max_customers:
            return None
        customer = self._generator.create_customer(
            self._session.rng,
            mode="ad_hoc",
            trend=self._session.trend,
            now=self._scheduler.now,
            taken_ids=self._waiting,
        )
        customer.state = "browsing"
        customer.history.append("browsing")
        self._waiting[customer.id] = customer
        self._patience_timers[customer.id] = self._scheduler.after(
            customer.preferences.patience_seconds, self._on_patience_expired, customer.id
        )
        self._listener.on_customer_state_changed(customer, None, "browsing")
        return customer

    def clear(self) -> None:
        for customer_id in list(self._waiting):
            self._release(customer_id)

    def patience_ratio(self, customer_id: str) -> float | None:
        """Fraction of patience left, 1.0 on arrival down to 0.0 at the deadline."""
        customer = self._waiting.get(customer_id)
        if customer is None:
            return None
        elapsed = self._scheduler.now - customer.entered_at
        remaining = 1.0 - elapsed / customer.preferences.patience_seconds
        return max(0.0, min(1.0, remaining))

    def rank_interest(self, customer_id: str) -> List[ProductInterestView] | None:
        customer = self._waiting.get(customer_id)
        if customer is None:
            return None
        views: List[ProductInterestView] = []
        for slot, product in self._session.displays.displayed_pairs(self._session.inventory):
            template = self._products_repo.get_template(product.template_id)
            if template is None:
                continue
            views.append(
                ProductInterestView(
                    slot_id=slot.id,
                    product=product,
                    score=score_product(product, template, customer.preferences),
                )
            )
        return sorted(views, key=lambda view: view.score, reverse=True)

    def recommend(self, customer_id: str) -> Product | None:
        customer = self._waiting.get(customer_id)
        if customer is None:
            return None
        candidates = []
        for _, product in self._session.displays.displayed_pairs(self._session.inventory):
            template = self._products_repo.get_template(product.template_id)
            if template is not None:
                candidates.append((product, template))
        return best_match(candidates, customer.preferences)

    def serve(self, customer_id: str, product_id: str) -> List[QueueEvent]:
        customer = self._waiting.get(customer_id)
        if customer is None:
            return [QueueActionFailedEvent(reason="customer_not_found", message="That customer has left.")]
        product = available_for_sale(self._session, product_id)
        template = (
            self._products_repo.get_template(product.template_id) if product is not None else None
        )
        if product is None or template is None:
            return [
                QueueActionFailedEvent(
                    reason="product_unavailable", message="That product is not on display."
                )
            ]
        if product.price > customer.preferences.budget.max:
            return [
                QueueActionFailedEvent(
                    reason="too_expensive", message="That's too expensive for this customer!"
                )
            ]
        customer.interested_product_id = product.id
        self._set_state(customer, "buying")
        probability = self._engine.probability("exploratory", product, template, customer.preferences)
        if not self._engine.decide("exploratory", product, template, customer.preferences):
            self._listener.on_customer_thought(customer, "Hmm, maybe another time.")
            self._depart(customer, made_sale=False)
            return [QueueDeclinedEvent(customer_id=customer.id, product_id=product.id, probability=probability)]
        record = complete_sale(self._session, product.id, customer_id=customer.id, now=self._scheduler.now)
        if record is None:
            self._depart(customer, made_sale=False)
            return [
                QueueActionFailedEvent(
                    reason="product_unavailable", message="That product is not on display."
                )
            ]
        customer.made_purchase = True
        self._listener.on_sale(product, record.price)
        self._depart(customer, made_sale=True)
        return [QueueSaleEvent(customer_id=customer.id, sale=record, total_coins=self._session.wallet.coins)]

    def _on_patience_expired(self, customer_id: str) -> None:
        customer = self._waiting.get(customer_id)
        if customer is None:
            return
        logger.debug("%s ran out of patience", customer_id)
        self._listener.on_customer_thought(customer, "I can't wait any longer.")
        self._depart(customer, made_sale=False)

    def _depart(self, customer: Customer, *, made_sale: bool) -> None:
        self._set_state(customer, "leaving")
        self._release(customer.id)
        self._listener.on_customer_left(customer, made_sale)

    def _release(self, customer_id: str) -> None:
        self._waiting.pop(customer_id, None)
        handle = self._patience_timers.pop(customer_id, None)
        if handle is not None:
            handle.cancel()

    def _set_state(self, customer: Customer, new_state: CustomerStateName) -> None:
        previous = customer.state
        if previous == new_state:
            return
        customer.state = new_state
        customer.history.append(new_state)
        self._listener.on_customer_state_changed(customer, previous, new_state)
