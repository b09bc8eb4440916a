from __future__ import annotations

from pathlib import Path

from cozyshop.core.rng import RNG
from cozyshop.core.scheduler import VirtualScheduler
from cozyshop.domain.settings import SimulationSettings
from cozyshop.domain.state import ShopSession
from cozyshop.services.listeners import RecordingListener
from cozyshop.services.shop_day_service import (
    THOUGHT_BUYING,
    THOUGHT_DECLINED,
    THOUGHT_NOTHING_LIKED,
    THOUGHT_PRODUCT_GONE,
    DayActionFailedEvent,
    DayEndedEvent,
    DayStartedEvent,
    ShopDayService,
    customer_count_for_day,
)
from tests.helpers.shop_builders import (
    ScriptedRNG,
    build_generator,
    build_repos,
    customer_types,
    make_definitions_dir,
    make_session,
    stock_product,
)


def _build_service(
    definitions_dir: Path,
    session: ShopSession,
    *,
    settings: SimulationSettings | None = None,
) -> tuple[ShopDayService, VirtualScheduler, RecordingListener]:
    products_repo, palette_repo, _ = build_repos(definitions_dir)
    scheduler = VirtualScheduler()
    listener = RecordingListener()
    service = ShopDayService(
        session=session,
        scheduler=scheduler,
        generator=build_generator(definitions_dir),
        products_repo=products_repo,
        palette_repo=palette_repo,
        settings=settings or SimulationSettings(),
        listener=listener,
    )
    return service, scheduler, listener


def _stocked_session(definitions_dir: Path, rng: RNG | None = None) -> ShopSession:
    session = make_session(rng or ScriptedRNG())
    products_repo, _, _ = build_repos(definitions_dir)
    stock_product(session, products_repo, "mug")
    return session


def test_customer_count_grows_every_second_day_and_caps() -> None:
    assert customer_count_for_day(1) == 3
    assert customer_count_for_day(4) == 5
    assert customer_count_for_day(20) == 8


def test_start_day_requires_a_displayed_product(tmp_path: Path) -> None:
    definitions_dir = make_definitions_dir(tmp_path)
    session = make_session()
    service, scheduler, listener = _build_service(definitions_dir, session)

    events = service.start_day()

    assert isinstance(events[0], DayActionFailedEvent)
    assert events[0].reason == "no_products_displayed"
    assert not service.in_progress
    assert not session.shop_open
    assert scheduler.pending_count() == 0
    assert listener.notifications == []


def test_start_day_twice_is_rejected(tmp_path: Path) -> None:
    definitions_dir = make_definitions_dir(tmp_path)
    service, _, _ = _build_service(definitions_dir, _stocked_session(definitions_dir))

    started = service.start_day()
    again = service.start_day()

    assert isinstance(started[0], DayStartedEvent)
    assert started[0].customer_count == 3
    assert isinstance(again[0], DayActionFailedEvent)
    assert again[0].reason == "day_in_progress"


def test_end_day_without_open_shop_is_rejected(tmp_path: Path) -> None:
    definitions_dir = make_definitions_dir(tmp_path)
    service, _, _ = _build_service(definitions_dir, _stocked_session(definitions_dir))

    events = service.end_day()

    assert isinstance(events[0], DayActionFailedEvent)
    assert events[0].reason == "day_not_in_progress"


def test_first_customer_buys_and_the_rest_find_it_gone(tmp_path: Path) -> None:
    definitions_dir = make_definitions_dir(tmp_path)
    session = _stocked_session(definitions_dir)
    product = next(iter(session.inventory))
    service, scheduler, listener = _build_service(definitions_dir, session)

    service.start_day()
    scheduler.run_until(6.0)
    assert len(service.active_customers) == 3
    assert all(customer.state == "entering" for customer in service.active_customers)

    scheduler.run_until(10.5)

    customers = service.active_customers
    assert [customer.state for customer in customers] == ["leaving", "leaving", "leaving"]
    assert customers[0].history == ["entering", "browsing", "buying", "leaving"]
    assert customers[0].made_purchase
    assert not customers[1].made_purchase
    assert len(session.inventory) == 0
    assert session.displays.get_slot("display-0").product_id is None
    assert session.wallet.coins == 100 + product.price
    assert session.customers_served == 1
    assert listener.of_kind("sale") == [(product.id, product.price)]
    assert listener.of_kind("left") == [
        (customers[0].id, True),
        (customers[1].id, False),
        (customers[2].id, False),
    ]
    thoughts = [text for _, text in listener.of_kind("thought")]
    assert THOUGHT_BUYING in thoughts
    assert thoughts.count(THOUGHT_PRODUCT_GONE) == 2

    scheduler.run_until(11.0)
    assert service.active_customers == []


def test_day_timer_closes_the_shop_with_a_summary(tmp_path: Path) -> None:
    definitions_dir = make_definitions_dir(tmp_path)
    session = _stocked_session(definitions_dir)
    product = next(iter(session.inventory))
    service, scheduler, listener = _build_service(definitions_dir, session)

    service.start_day()
    scheduler.run_all()

    assert scheduler.now == 60.0
    assert not service.in_progress
    assert not session.shop_open
    assert session.day == 2
    (summary,) = listener.of_kind("day_ended")[0]
    assert summary.day_number == 1
    assert summary.items_sold == 1
    assert summary.revenue == product.price
    assert summary.customers_visited == 3
    assert summary.sales[0].product_id == product.id
    assert listener.kinds()[0] == "day_started"
    assert listener.kinds()[-1] == "day_ended"
    assert scheduler.pending_count() == 0


def test_trend_drifts_when_the_day_ends(tmp_path: Path) -> None:
    definitions_dir = make_definitions_dir(tmp_path)
    session = _stocked_session(definitions_dir)
    service, scheduler, _ = _build_service(definitions_dir, session)

    service.start_day()
    scheduler.run_all()

    assert "mug" in session.trend.popular_product_types
    assert set(session.trend.popular_product_types) <= {"mug", "tote"}
    assert "#FF5252" in session.trend.popular_colors


def test_customers_can_decline(tmp_path: Path) -> None:
    definitions_dir = make_definitions_dir(tmp_path)
    session = _stocked_session(definitions_dir, ScriptedRNG(default_roll=0.95))
    service, scheduler, listener = _build_service(definitions_dir, session)

    service.start_day()
    scheduler.run_all()

    assert len(session.inventory) == 1
    assert session.displays.filled_count() == 1
    assert session.wallet.coins == 100
    assert listener.of_kind("sale") == []
    assert [text for _, text in listener.of_kind("thought")].count(THOUGHT_DECLINED) == 3
    (summary,) = listener.of_kind("day_ended")[0]
    assert summary.items_sold == 0
    assert summary.customers_visited == 3


def test_customer_without_eligible_product_leaves(tmp_path: Path) -> None:
    definitions_dir = make_definitions_dir(tmp_path, types=customer_types(product_types=["tote"]))
    session = _stocked_session(definitions_dir)
    service, scheduler, listener = _build_service(definitions_dir, session)

    service.start_day()
    scheduler.run_until(9.0)

    assert all(customer.state == "leaving" for customer in service.active_customers)
    assert all(customer.history == ["entering", "browsing", "leaving"] for customer in service.active_customers)
    assert [text for _, text in listener.of_kind("thought")] == [THOUGHT_NOTHING_LIKED] * 3
    assert all(made_sale is False for _, made_sale in listener.of_kind("left"))
    assert len(session.inventory) == 1


def test_ending_early_sends_everyone_home(tmp_path: Path) -> None:
    definitions_dir = make_definitions_dir(tmp_path)
    session = _stocked_session(definitions_dir)
    service, scheduler, listener = _build_service(definitions_dir, session)

    service.start_day()
    scheduler.run_until(7.0)
    events = service.end_day()

    assert isinstance(events[0], DayEndedEvent)
    assert events[0].next_day == 2
    assert events[0].summary.customers_visited == 3
    assert all(customer.state == "leaving" for customer in service.active_customers)
    assert service.pending_spawn_count() == 0
    assert not session.shop_open

    scheduler.run_all()

    assert service.active_customers == []
    assert listener.of_kind("sale") == []
    assert len(session.inventory) == 1
    assert listener.kinds().count("day_ended") == 1


def test_no_spawn_fires_after_the_day_ends(tmp_path: Path) -> None:
    definitions_dir = make_definitions_dir(tmp_path)
    service, scheduler, listener = _build_service(definitions_dir, _stocked_session(definitions_dir))

    service.start_day()
    scheduler.run_until(1.0)
    events = service.end_day()
    scheduler.run_all()

    assert events[0].summary.customers_visited == 0
    assert service.active_customers == []
    assert listener.of_kind("state") == []


def test_arrivals_respect_the_shop_capacity(tmp_path: Path) -> None:
    definitions_dir = make_definitions_dir(tmp_path)
    service, scheduler, _ = _build_service(
        definitions_dir,
        _stocked_session(definitions_dir),
        settings=SimulationSettings(max_customers=2),
    )

    service.start_day()
    scheduler.run_until(6.0)

    assert len(service.active_customers) == 2
    events = service.end_day()
    assert events[0].summary.customers_visited == 2


def test_next_day_expects_more_customers(tmp_path: Path) -> None:
    definitions_dir = make_definitions_dir(tmp_path)
    session = _stocked_session(definitions_dir)
    products_repo, _, _ = build_repos(definitions_dir)
    service, scheduler, _ = _build_service(definitions_dir, session)

    service.start_day()
    scheduler.run_all()
    stock_product(session, products_repo, "tote")
    events = service.start_day()

    assert isinstance(events[0], DayStartedEvent)
    assert events[0].day_number == 2
    assert events[0].customer_count == 4
    assert service.day_state is not None
    assert service.day_state.started_at == 60.0
