"""Factory helpers for runtime entities."""

from .id_factory import make_instance_id
from .session_factory import create_session

__all__ = ["create_session", "make_instance_id"]
