"""Builds fresh shop sessions."""
from __future__ import annotations

from cozyshop.core.rng import RNG
from cozyshop.domain.inventory import DisplayStore, InventoryStore, Wallet
from cozyshop.domain.settings import SimulationSettings
from cozyshop.domain.state import ShopSession, Trend


def create_session(seed: int, settings: SimulationSettings | None = None) -> ShopSession:
    """Return a day-one session with empty shelves and the starting purse."""
    settings = settings or SimulationSettings()
    return ShopSession(
        seed=seed,
        rng=RNG(seed),
        inventory=InventoryStore(),
        displays=DisplayStore(settings.display_capacity),
        wallet=Wallet(coins=settings.starting_coins),
        day=1,
        trend=Trend(),
    )
