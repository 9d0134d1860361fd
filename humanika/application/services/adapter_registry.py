"""Entity adapter registry: resolves an entity type to its adapter."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from humanika.domain.enums import EntityType
from humanika.domain.exceptions import ValidationException

if TYPE_CHECKING:
    from humanika.application.interfaces.repositories import IEntityAdapter


def parse_entity_type(value: EntityType | str) -> EntityType:
    """Return EntityType for value (accepts enum or case-insensitive string).

    Raises:
        ValidationException: Unknown entity type.
    """
    if isinstance(value, EntityType):
        return value
    try:
        return EntityType(value.strip().upper().replace("-", "_"))
    except ValueError:
        raise ValidationException(
            f"Unknown entity type {value!r}; expected one of {', '.join(EntityType.values())}",
            field="entity_type",
        ) from None


class AdapterRegistry:
    """Holds one adapter per entity kind; the engine looks adapters up here."""

    def __init__(self, adapters: Iterable[IEntityAdapter] = ()) -> None:
        self._adapters: dict[EntityType, IEntityAdapter] = {}
        for adapter in adapters:
            self.register(adapter)

    def register(self, adapter: IEntityAdapter) -> None:
        """Register adapter for its entity_type; duplicates are rejected."""
        if adapter.entity_type in self._adapters:
            raise ValueError(f"Adapter already registered for {adapter.entity_type.value}")
        self._adapters[adapter.entity_type] = adapter

    def get(self, entity_type: EntityType | str) -> IEntityAdapter:
        """Return the adapter for entity_type.

        Raises:
            ValidationException: Unknown or unregistered entity type.
        """
        resolved = parse_entity_type(entity_type)
        adapter = self._adapters.get(resolved)
        if adapter is None:
            raise ValidationException(
                f"No approval workflow registered for {resolved.value}",
                field="entity_type",
            )
        return adapter

    def entity_types(self) -> list[EntityType]:
        return list(self._adapters)
