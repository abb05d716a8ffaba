"""Shared domain types and event bus."""
from .types import Sample, GestureType, GestureFamily
from .events import EventBus, Events

__all__ = ["Sample", "GestureType", "GestureFamily", "EventBus", "Events"]
