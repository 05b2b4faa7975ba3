"""
Core module.

Exports:
- Component, register_component: Record base and registration
- EventBus, Event: Event system
"""

from litcore.core.component import (
    Component,
    register_component,
    get_component_type,
    get_all_component_types,
)
from litcore.core.events import EventBus, Event, EventHandler

__all__ = [
    "Component",
    "register_component",
    "get_component_type",
    "get_all_component_types",
    "EventBus",
    "Event",
    "EventHandler",
]
