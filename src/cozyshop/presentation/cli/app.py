"""Console-driven UI loops for Cozy Artist Shop."""
from __future__ import annotations

import logging
import secrets
from pathlib import Path
from typing import Callable, List, Sequence

from cozyshop.core.scheduler import VirtualScheduler
from cozyshop.data.repositories import CustomerTypesRepository, PaletteRepository, ProductTemplatesRepository
from cozyshop.domain.customer import Customer
from cozyshop.domain.inventory import Product
from cozyshop.domain.settings import SimulationSettings
from cozyshop.domain.state import ShopSession
from cozyshop.presentation.cli import config, render
from cozyshop.services import (
    ConfigError,
    CustomerGenerator,
    CustomerQueueService,
    DaySummary,
    InventoryService,
    ShopDayService,
    ShopListener,
)
from cozyshop.services.customer_queue_service import QueueActionFailedEvent, QueueSaleEvent
from cozyshop.services.factories import create_session
from cozyshop.services.inventory_service import InventoryActionFailedEvent, InventoryEvent
from cozyshop.services.shop_day_service import DayActionFailedEvent

logger = logging.getLogger(__name__)

_MAX_RANDOM_SEED = 2**31 - 1
# Virtual seconds that pass for waiting customers after each counter action.
QUEUE_TICK_SECONDS = 4.0


class ConsoleShopListener(ShopListener):
    """Prints simulation notifications with the virtual timestamp."""

    def __init__(self, clock: VirtualScheduler, output: Callable[[str], None] = print) -> None:
        self._clock = clock
        self._output = output

    def _say(self, text: str) -> None:
        self._output(f"[{self._clock.now:5.1f}s] {text}")

    def on_customer_state_changed(self, customer, previous, new) -> None:
        if previous is None:
            self._say(f"A {customer.customer_type} customer walks in.")

    def on_customer_thought(self, customer, text) -> None:
        self._say(f'{customer.customer_type}: "{text}"')

    def on_sale(self, product, price) -> None:
        self._say(f"Sold {product.name} for {render.format_coins(price)}!")

    def on_customer_left(self, customer, made_sale) -> None:
        mood = "happily" if made_sale else "empty-handed"
        self._say(f"The {customer.customer_type} customer leaves {mood}.")

    def on_day_started(self, day_number) -> None:
        self._say(f"Day {day_number}: the shop is open!")

    def on_day_ended(self, summary: DaySummary) -> None:
        for line in render.render_day_summary(summary):
            self._output(line)


class ShopApp:
    """Wires repositories, session and services for one interactive run."""

    def __init__(
        self,
        *,
        seed: int,
        settings: SimulationSettings,
        definitions_path: Path | str | None = None,
        output: Callable[[str], None] = print,
    ) -> None:
        self.output = output
        self.settings = settings
        self.products_repo = ProductTemplatesRepository(base_path=definitions_path)
        self.palette_repo = PaletteRepository(base_path=definitions_path)
        self.customer_types_repo = CustomerTypesRepository(
            base_path=definitions_path,
            products_repo=self.products_repo,
            palette_repo=self.palette_repo,
        )
        self.session: ShopSession = create_session(seed, settings)
        self.scheduler = VirtualScheduler()
        listener = ConsoleShopListener(self.scheduler, output)
        generator = CustomerGenerator(
            products_repo=self.products_repo,
            palette_repo=self.palette_repo,
            customer_types_repo=self.customer_types_repo,
        )
        self.inventory = InventoryService(catalog=self.products_repo, settings=settings)
        self.shop_day = ShopDayService(
            session=self.session,
            scheduler=self.scheduler,
            generator=generator,
            products_repo=self.products_repo,
            palette_repo=self.palette_repo,
            settings=settings,
            listener=listener,
        )
        self.queue = CustomerQueueService(
            session=self.session,
            scheduler=self.scheduler,
            generator=generator,
            products_repo=self.products_repo,
            settings=settings,
            listener=listener,
        )

    def run_day(self) -> bool:
        """Open the shop and play the whole day out on the virtual clock."""
        self.queue.clear()
        events = self.shop_day.start_day()
        failure = next((event for event in events if isinstance(event, DayActionFailedEvent)), None)
        if failure is not None:
            self.output(failure.message)
            return False
        self.scheduler.run_all()
        return True

    def report(self, events: Sequence[InventoryEvent]) -> None:
        for event in events:
            if isinstance(event, InventoryActionFailedEvent):
                self.output(event.message)
            else:
                self.output("Done.")

    def status_lines(self) -> List[str]:
        session = self.session
        lines = [
            f"Day {session.day} | {render.format_coins(session.wallet.coins)} | "
            f"served {session.customers_served}",
            f"Trend: {', '.join(session.trend.popular_product_types)} / {', '.join(session.trend.popular_colors)}",
        ]
        pairs = [
            (slot, session.inventory.find_by_id(slot.product_id) if slot.product_id else None)
            for slot in session.displays.slots()
        ]
        lines.extend(render.render_displays(pairs))
        return lines


def main() -> None:
    """Start the interactive CLI session."""
    render.configure_logging()
    try:
        settings = config.load_settings()
    except ConfigError as exc:
        logger.warning("Ignoring config: %s", exc)
        settings = SimulationSettings()
    app = ShopApp(seed=_prompt_seed(), settings=settings)
    print("=== Cozy Artist Shop ===")
    while True:
        print()
        for line in app.status_lines():
            print(line)
        print("1. Create Product  2. Display Product  3. Remove Display  4. Edit Price")
        print("5. Open Shop       6. Serve Customers  7. Quit")
        choice = input("Select an option: ").strip()
        if choice == "1":
            _create_product_flow(app)
        elif choice == "2":
            _display_flow(app)
        elif choice == "3":
            slot_id = input("Display id: ").strip()
            app.report(app.inventory.remove_from_display(app.session, slot_id))
        elif choice == "4":
            _edit_price_flow(app)
        elif choice == "5":
            app.run_day()
        elif choice == "6":
            _serve_flow(app)
        elif choice == "7":
            break
        else:
            print("Invalid selection. Please enter 1-7.")
    print("Goodbye!")


def _prompt_seed() -> int:
    raw = input("Seed (blank for random): ").strip()
    if raw.isdigit():
        return int(raw)
    return secrets.randbelow(_MAX_RANDOM_SEED)


def _pick(options: Sequence[str], prompt: str) -> int | None:
    for index, option in enumerate(options, start=1):
        print(f"{index}. {option}")
    raw = input(prompt).strip()
    if not raw.isdigit() or not 1 <= int(raw) <= len(options):
        print("Cancelled.")
        return None
    return int(raw) - 1


def _create_product_flow(app: ShopApp) -> None:
    templates = app.products_repo.all()
    index = _pick([f"{t.name} (base {t.base_price})" for t in templates], "Template: ")
    if index is None:
        return
    artwork = input("Artwork name: ").strip() or "untitled"
    app.report(app.inventory.create_product(app.session, templates[index].id, artwork))


def _display_flow(app: ShopApp) -> None:
    products: List[Product] = app.inventory.list_undisplayed(app.session)
    if not products:
        print("No products available. Create some in the Art Studio!")
        return
    index = _pick([f"{p.name} - {p.price}" for p in products], "Product: ")
    if index is None:
        return
    slot_id = input("Display id (e.g. display-0): ").strip()
    app.report(app.inventory.display_product(app.session, products[index].id, slot_id))


def _edit_price_flow(app: ShopApp) -> None:
    products = list(app.session.inventory)
    index = _pick([f"{p.name} - {p.price}" for p in products], "Product: ")
    if index is None:
        return
    raw = input("New price: ").strip()
    if not raw.isdigit():
        print("Price must be a whole number.")
        return
    app.report(app.inventory.set_price(app.session, products[index].id, int(raw)))


def _serve_flow(app: ShopApp) -> None:
    if not app.queue.waiting:
        app.queue.admit_customers()
    names = {template.id: template.name for template in app.products_repo.all()}
    color_names = {color.hex: color.name for color in app.palette_repo.all()}
    while app.queue.waiting:
        customers: List[Customer] = app.queue.waiting
        index = _pick([render.render_customer(c, names, color_names) for c in customers], "Customer: ")
        if index is None:
            return
        customer = customers[index]
        ranking = app.queue.rank_interest(customer.id) or []
        if not ranking:
            print("This customer doesn't see any products to buy")
            return
        choice = _pick([f"{v.product.name} - {v.product.price} (match {v.score:.1f})" for v in ranking], "Offer: ")
        if choice is not None:
            for event in app.queue.serve(customer.id, ranking[choice].product.id):
                if isinstance(event, QueueActionFailedEvent):
                    print(event.message)
                elif isinstance(event, QueueSaleEvent):
                    print(f"Wallet: {render.format_coins(event.total_coins)}")
        app.scheduler.advance(QUEUE_TICK_SECONDS)
