"""Fleet reference data available to the report use cases."""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

from fleetview.domain.entities.errors import EmptySelectionError, UnknownEntityError
from fleetview.domain.entities.fleet import Entity


class FleetCatalog:
    """Ordered, read-only collection of the tracked entities."""

    def __init__(self, entities: Iterable[Entity]) -> None:
        self._entities: List[Entity] = list(entities)
        self._by_id = {entity.entity_id: entity for entity in self._entities}

    @classmethod
    def from_config(
        cls, items: Iterable[Union[Entity, Mapping[str, Any]]]
    ) -> "FleetCatalog":
        """Build a catalog from settings entries (dicts or entities)."""
        entities = []
        for item in items:
            if isinstance(item, Entity):
                entities.append(item)
            else:
                entities.append(
                    Entity(
                        entity_id=item["entity_id"],
                        name=item.get("name") or item["entity_id"],
                        device_id=item.get("device_id"),
                    )
                )
        return cls(entities)

    @property
    def entities(self) -> List[Entity]:
        return list(self._entities)

    def __len__(self) -> int:
        return len(self._entities)

    def get(self, entity_id: str) -> Optional[Entity]:
        return self._by_id.get(entity_id)

    def resolve(self, entity_ids: Optional[Sequence[str]] = None) -> List[Entity]:
        """
        Map requested ids onto entities, keeping request order.

        ``None`` means the whole fleet. Duplicates are dropped.

        Raises:
            EmptySelectionError: If the resolved selection is empty.
            UnknownEntityError: If an id is not part of the fleet.
        """
        if entity_ids is None:
            resolved = self.entities
        else:
            unknown = [eid for eid in entity_ids if eid not in self._by_id]
            if unknown:
                raise UnknownEntityError(unknown)
            resolved = [self._by_id[eid] for eid in dict.fromkeys(entity_ids)]

        if not resolved:
            raise EmptySelectionError()
        return resolved
