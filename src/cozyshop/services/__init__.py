"""Service layer exports."""

from .customer_generator import CustomerGenerator
from .customer_queue_service import CustomerQueueService
from .errors import ConfigError
from .inventory_service import InventoryService
from .listeners import RecordingListener, ShopListener
from .shop_day_service import DaySummary, ShopDayService, customer_count_for_day

__all__ = [
    "ConfigError",
    "CustomerGenerator",
    "CustomerQueueService",
    "DaySummary",
    "InventoryService",
    "RecordingListener",
    "ShopDayService",
    "ShopListener",
    "customer_count_for_day",
]
