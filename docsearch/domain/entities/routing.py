"""Routing information that travels with a document id."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RoutingDefinition:
    """Parent id and/or routing key used to route a document to its shard.

    Child documents in a parent-child index must be fetched with their
    parent id (or an explicit routing key); both are rendered as query
    parameters on the request URL.
    """

    parent_id: Any = None
    routing_id: Any = None

    @property
    def is_empty(self) -> bool:
        return self.parent_id is None and self.routing_id is None


@dataclass
class EntityContextInfo:
    """Describes a pending document mutation: id, types, routing and payload."""

    id: Any = None
    entity_type: type | None = None
    parent_entity_type: type | None = None
    routing_definition: RoutingDefinition = field(default_factory=RoutingDefinition)
    delete_document: bool = False
    document: Any = None
