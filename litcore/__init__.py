"""
litcore

Generic building blocks shared by the progression engine:
data-only components, a typed event bus and a schema-validated
reference database.
"""

__version__ = "0.1.0"

from litcore.core import (
    Component,
    register_component,
    get_component_type,
    EventBus,
    Event,
)
from litcore.resources import Database

__all__ = [
    "Component",
    "register_component",
    "get_component_type",
    "EventBus",
    "Event",
    "Database",
]
