"""Timed shop day: customer arrivals, browsing, buying and the day summary.

Every customer walks ``entering -> browsing -> buying -> leaving`` (or skips
straight from browsing to leaving). All delays are callbacks on the injected
scheduler, so a day runs identically against a virtual clock in tests and a
real one in the presentation layer. Handlers run to completion between
callbacks; the inventory, display and wallet are only touched inside them.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from cozyshop.core.scheduler import Scheduler, TimerHandle
from cozyshop.core.types import CustomerStateName
from cozyshop.data.repositories import PaletteRepository, ProductTemplatesRepository
from cozyshop.domain.customer import Customer
from cozyshop.domain.matching import is_eligible
from cozyshop.domain.purchase import PurchaseDecisionEngine
from cozyshop.domain.settings import SimulationSettings
from cozyshop.domain.state import ShopDayState, ShopSession
from cozyshop.services.customer_generator import CustomerGenerator
from cozyshop.services.listeners import ShopListener
from cozyshop.services.sales import SaleRecord, available_for_sale, complete_sale

logger = logging.getLogger(__name__)

BASE_CUSTOMERS_PER_DAY = 3
MAX_CUSTOMERS_PER_DAY = 8

THOUGHT_NOTHING_LIKED = "I don't see anything I like..."
THOUGHT_PRODUCT_GONE = "Oh, it's gone..."
THOUGHT_BUYING = "I'll take it!"
THOUGHT_DECLINED = "Actually, not today."


@dataclass(frozen=True, slots=True)
class DaySummary:
    day_number: int
    items_sold: int
    revenue: int
    customers_visited: int
    sales: tuple[SaleRecord, ...] = ()


@dataclass(slots=True)
class ShopDayEvent:
    """Base class for shop-day events."""


@dataclass(slots=True)
class DayStartedEvent(ShopDayEvent):
    day_number: int
    customer_count: int
    day_length_seconds: float


@dataclass(slots=True)
class DayEndedEvent(ShopDayEvent):
    summary: DaySummary
    next_day: int


@dataclass(slots=True)
class DayActionFailedEvent(ShopDayEvent):
    reason: str
    message: str


@dataclass(slots=True)
class _DayLedger:
    sales: List[SaleRecord] = field(default_factory=list)
    customers_visited: int = 0


def customer_count_for_day(day: int) -> int:
    """Three customers on day one, one more every second day, capped at eight."""
    return min(BASE_CUSTOMERS_PER_DAY + day // 2, MAX_CUSTOMERS_PER_DAY)


class ShopDayService:
    """Runs one shop day at a time for a session."""

    def __init__(
        self,
        *,
        session: ShopSession,
        scheduler: Scheduler,
        generator: CustomerGenerator,
        products_repo: ProductTemplatesRepository,
        palette_repo: PaletteRepository,
        settings: SimulationSettings | None = None,
        listener: ShopListener | None = None,
    ) -> None:
        self._session = session
        self._scheduler = scheduler
        self._generator = generator
        self._products_repo = products_repo
        self._palette_repo = palette_repo
        self._settings = settings or SimulationSettings()
        self._listener = listener or ShopListener()
        self._engine = PurchaseDecisionEngine(session.rng)
        self._day: ShopDayState | None = None
        self._ledger = _DayLedger()
        self._day_timer: TimerHandle | None = None
        self._spawn_timers: List[TimerHandle] = []
        self._customer_timers: Dict[str, List[TimerHandle]] = {}

    @property
    def day_state(self) -> ShopDayState | None:
        return self._day

    @property
    def in_progress(self) -> bool:
        return self._day is not None and self._day.in_progress

    @property
    def active_customers(self) -> List[Customer]:
        return list(self._day.active_customers) if self._day is not None else []

    def pending_spawn_count(self) -> int:
        return sum(1 for handle in self._spawn_timers if handle.pending)

    def start_day(self) -> List[ShopDayEvent]:
        if self.in_progress:
            return [DayActionFailedEvent(reason="day_in_progress", message="The shop is already open.")]
        if self._session.displays.filled_count() == 0:
            logger.info("Day %d not started: no products displayed", self._session.day)
            return [
                DayActionFailedEvent(
                    reason="no_products_displayed",
                    message="Put at least one product on display before opening the shop.",
                )
            ]
        self._discard_previous_day()
        settings = self._settings
        day = ShopDayState(
            day_number=self._session.day,
            day_length_seconds=settings.day_length_seconds,
            in_progress=True,
            started_at=self._scheduler.now,
        )
        self._day = day
        self._ledger = _DayLedger()
        self._session.shop_open = True

        customer_count = customer_count_for_day(day.day_number)
        day.scheduled_spawn_count = customer_count
        low, high = settings.spawn_window
        for _ in range(customer_count):
            offset = self._session.rng.uniform(low, high) * settings.day_length_seconds
            self._spawn_timers.append(self._scheduler.after(offset, self._spawn_customer))
        self._day_timer = self._scheduler.after(settings.day_length_seconds, self.end_day)

        logger.info("Day %d opened with %d customers expected", day.day_number, customer_count)
        self._listener.on_day_started(day.day_number)
        return [
            DayStartedEvent(
                day_number=day.day_number,
                customer_count=customer_count,
                day_length_seconds=settings.day_length_seconds,
            )
        ]

    def end_day(self) -> List[ShopDayEvent]:
        """Close the shop, send everyone home and roll the trend over to the next day."""
        day = self._day
        if day is None or not day.in_progress:
            return [DayActionFailedEvent(reason="day_not_in_progress", message="The shop is not open.")]
        day.in_progress = False
        self._session.shop_open = False
        self._cancel(self._day_timer)
        self._day_timer = None
        for handle in self._spawn_timers:
            handle.cancel()
        self._spawn_timers = []

        for customer in list(day.active_customers):
            if customer.state != "leaving":
                self._leave(customer, made_sale=False)

        sales = tuple(self._ledger.sales)
        summary = DaySummary(
            day_number=day.day_number,
            items_sold=len(sales),
            revenue=sum(record.price for record in sales),
            customers_visited=self._ledger.customers_visited,
            sales=sales,
        )
        session = self._session
        session.day += 1
        session.trend = session.trend.drift(
            session.rng, self._products_repo.ids(), self._palette_repo.hex_values()
        )
        logger.info(
            "Day %d closed: %d sold for %d coins, %d visitors",
            summary.day_number,
            summary.items_sold,
            summary.revenue,
            summary.customers_visited,
        )
        self._listener.on_day_ended(summary)
        return [DayEndedEvent(summary=summary, next_day=session.day)]

    def _spawn_customer(self) -> None:
        day = self._day
        if day is None or not day.in_progress:
            return
        if len(day.active_customers) >= self._settings.max_customers:
            logger.debug("Shop full, skipping arrival")
            return
        customer = self._generator.create_customer(
            self._session.rng,
            mode="typed",
            trend=self._session.trend,
            now=self._scheduler.now,
            taken_ids={entry.id for entry in day.active_customers},
        )
        customer.history.append("entering")
        day.active_customers.append(customer)
        self._ledger.customers_visited += 1
        self._listener.on_customer_state_changed(customer, None, "entering")
        self._schedule(customer, self._settings.transit_delay_seconds, self._begin_browsing, customer)

    def _begin_browsing(self, customer: Customer) -> None:
        if not self.in_progress or customer.state != "entering":
            return
        self._transition(customer, "browsing")
        eligible = [
            product
            for _, product in self._session.displays.displayed_pairs(self._session.inventory)
            if is_eligible(product, customer.preferences)
        ]
        rng = self._session.rng
        if not eligible:
            self._listener.on_customer_thought(customer, THOUGHT_NOTHING_LIKED)
            low, high = self._settings.deliberate_delay_range
            self._schedule(customer, rng.uniform(low, high), self._give_up, customer)
            return
        chosen = rng.choice(eligible)
        customer.interested_product_id = chosen.id
        self._listener.on_customer_thought(customer, f"I like this {chosen.name}!")
        low, high = self._settings.browse_delay_range
        self._schedule(customer, rng.uniform(low, high), self._decide_to_buy, customer)

    def _give_up(self, customer: Customer) -> None:
        if self.in_progress and customer.state == "browsing":
            self._leave(customer, made_sale=False)

    def _decide_to_buy(self, customer: Customer) -> None:
        if not self.in_progress or customer.state != "browsing" or customer.interested_product_id is None:
            return
        self._transition(customer, "buying")
        product = available_for_sale(self._session, customer.interested_product_id)
        if product is None:
            logger.debug("%s lost interest: %s is gone", customer.id, customer.interested_product_id)
            self._listener.on_customer_thought(customer, THOUGHT_PRODUCT_GONE)
            self._leave(customer, made_sale=False)
            return
        template = self._products_repo.get_template(product.template_id)
        if template is None:
            self._leave(customer, made_sale=False)
            return
        if not self._engine.decide("shop_floor", product, template, customer.preferences):
            self._listener.on_customer_thought(customer, THOUGHT_DECLINED)
            self._leave(customer, made_sale=False)
            return
        record = complete_sale(
            self._session, product.id, customer_id=customer.id, now=self._scheduler.now
        )
        if record is None:
            self._leave(customer, made_sale=False)
            return
        self._ledger.sales.append(record)
        customer.made_purchase = True
        self._listener.on_customer_thought(customer, THOUGHT_BUYING)
        self._listener.on_sale(product, record.price)
        self._leave(customer, made_sale=True)

    def _leave(self, customer: Customer, *, made_sale: bool) -> None:
        if customer.state == "leaving":
            return
        self._cancel_customer_timers(customer.id)
        self._transition(customer, "leaving")
        self._listener.on_customer_left(customer, made_sale)
        self._schedule(customer, self._settings.exit_delay_seconds, self._remove_customer, customer)

    def _remove_customer(self, customer: Customer) -> None:
        self._cancel_customer_timers(customer.id)
        day = self._day
        if day is not None and customer in day.active_customers:
            day.active_customers.remove(customer)

    def _transition(self, customer: Customer, new_state: CustomerStateName) -> None:
        previous = customer.state
        customer.state = new_state
        customer.history.append(new_state)
        logger.debug("%s: %s -> %s", customer.id, previous, new_state)
        self._listener.on_customer_state_changed(customer, previous, new_state)

    def _schedule(self, customer: Customer, delay: float, callback, *args) -> None:
        handle = self._scheduler.after(delay, callback, *args)
        timers = self._customer_timers.setdefault(customer.id, [])
        timers[:] = [entry for entry in timers if entry.pending]
        timers.append(handle)

    def _cancel_customer_timers(self, customer_id: str) -> None:
        for handle in self._customer_timers.pop(customer_id, []):
            handle.cancel()

    def _discard_previous_day(self) -> None:
        for customer_id in list(self._customer_timers):
            self._cancel_customer_timers(customer_id)
        if self._day is not None:
            self._day.active_customers.clear()

    @staticmethod
    def _cancel(handle: TimerHandle | None) -> None:
        if handle is not None:
            handle.cancel()
