"""Entity type to index mapping (explicit registry).

Each entity type that can be fetched is registered once at configuration
time with its index name, document-type name and a parse function that turns
a `_source` fragment into an instance of the type.

Example:
    registry = MappingRegistry()
    registry.register(Order)                       # index "orders", doc type "order"
    registry.register(Invoice, index="billing", doc_type="invoice")
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

from pydantic import TypeAdapter

from docsearch.domain.exceptions import MappingNotFoundException

ParseFunction = Callable[[Any], Any]


@dataclass(frozen=True)
class DocumentMapping:
    """Index, document type and parse function for one entity type."""

    entity_type: type
    index: str
    doc_type: str
    parse: ParseFunction

    def parse_entity(self, fragment: Any) -> Any:
        return self.parse(fragment)


class MappingResolver(Protocol):
    """Protocol for resolving entity types to their document mapping."""

    def resolve(self, entity_type: type) -> DocumentMapping:
        """Return the mapping for entity_type or raise MappingNotFoundException."""
        ...

    def parse_entity(self, fragment: Any, entity_type: type) -> Any:
        """Deserialize a JSON fragment into an instance of entity_type."""
        ...


def _default_doc_type(entity_type: type) -> str:
    return entity_type.__name__.lower()


def _default_parse(entity_type: type) -> ParseFunction:
    """Validate fragments with pydantic (BaseModel, dataclass, TypedDict, ...)."""
    adapter = TypeAdapter(entity_type)
    return adapter.validate_python


class MappingRegistry:
    """In-memory MappingResolver populated at startup. Safe for concurrent reads."""

    def __init__(self) -> None:
        self._mappings: dict[type, DocumentMapping] = {}
        self._lock = threading.Lock()

    def register(
        self,
        entity_type: type,
        *,
        index: str | None = None,
        doc_type: str | None = None,
        parse: ParseFunction | None = None,
    ) -> DocumentMapping:
        """Register (or replace) the mapping for entity_type.

        Args:
            entity_type: Type returned by fetches against this mapping.
            index: Index name; defaults to the lower-case type name plus "s".
            doc_type: Document type name; defaults to the lower-case type name.
            parse: Fragment parser; defaults to pydantic validation into entity_type.

        Returns:
            The stored DocumentMapping.
        """
        name = doc_type or _default_doc_type(entity_type)
        mapping = DocumentMapping(
            entity_type=entity_type,
            index=index or f"{_default_doc_type(entity_type)}s",
            doc_type=name,
            parse=parse or _default_parse(entity_type),
        )
        with self._lock:
            self._mappings[entity_type] = mapping
        return mapping

    def is_registered(self, entity_type: type) -> bool:
        return entity_type in self._mappings

    def resolve(self, entity_type: type) -> DocumentMapping:
        try:
            return self._mappings[entity_type]
        except KeyError:
            raise MappingNotFoundException(entity_type) from None

    def parse_entity(self, fragment: Any, entity_type: type) -> Any:
        return self.resolve(entity_type).parse_entity(fragment)
