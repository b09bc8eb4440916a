"""Shared type aliases for the core and domain layers."""
from typing import Literal

CustomerStateName = Literal["entering", "browsing", "buying", "leaving"]
GenerationMode = Literal["ad_hoc", "typed"]
PurchasePolicy = Literal["exploratory", "shop_floor"]

__all__ = ["CustomerStateName", "GenerationMode", "PurchasePolicy"]
