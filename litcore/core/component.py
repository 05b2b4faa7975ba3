"""
Component base class for data-only records.

Components hold state and nothing else. Rules that change a
component live in the progression modules and systems, which keeps
records trivially serializable and easy to build in tests.

Usage:
    class Wallet(Component):
        credits: int = 0

    @register_component
    class Badge(Component):
        label: str
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class Component(BaseModel):
    """
    Base class for all records.

    Pydantic gives every subclass:
    - Validation on construction and on attribute assignment
    - JSON round-tripping via model_dump / model_validate
    - Declarative defaults

    Derived read-only helpers are fine. Anything that mutates
    state belongs outside the component.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        validate_assignment=True,
        extra='forbid',
    )

    # Serialization name, defaults to the class name
    _type_name: ClassVar[str] = ""

    @classmethod
    def get_type_name(cls) -> str:
        """Get the registered type name."""
        return cls._type_name or cls.__name__

    def clone(self) -> Component:
        """Deep copy, so callers can derive a new record without aliasing."""
        return self.model_copy(deep=True)


_component_registry: dict[str, type[Component]] = {}


def register_component(cls: type[Component]) -> type[Component]:
    """
    Decorator that makes a component type resolvable by name.

    Usage:
        @register_component
        class Wallet(Component):
            credits: int = 0
    """
    _component_registry[cls.get_type_name()] = cls
    return cls


def get_component_type(type_name: str) -> type[Component] | None:
    """Look up a registered component class."""
    return _component_registry.get(type_name)


def get_all_component_types() -> dict[str, type[Component]]:
    """Snapshot of the registry."""
    return dict(_component_registry)
