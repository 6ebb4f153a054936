"""Wire schemas for generic get/search responses returned by the document service."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ShardsInfo(BaseModel):
    """Shard statistics reported with a search response (_shards)."""

    model_config = ConfigDict(extra="allow")

    total: int = 0
    successful: int = 0
    skipped: int = 0
    failed: int = 0


class Hit(BaseModel):
    """Single hit of a search response."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    index: str | None = Field(default=None, alias="_index")
    type: str | None = Field(default=None, alias="_type")
    id: str | None = Field(default=None, alias="_id")
    score: float | None = Field(default=None, alias="_score")
    source: dict[str, Any] | None = Field(default=None, alias="_source")


class HitsInfo(BaseModel):
    """The hits section of a search response."""

    model_config = ConfigDict(extra="allow")

    total: int = 0
    max_score: float | None = None
    hits: list[Hit] = Field(default_factory=list)

    @field_validator("total", mode="before")
    @classmethod
    def unwrap_total(cls, value: Any) -> Any:
        """Accept both `"total": 3` and `"total": {"value": 3, "relation": "eq"}`."""
        if isinstance(value, dict):
            return value.get("value", 0)
        return value


class GetResult(BaseModel):
    """Generic response shape for raw-URI fetches.

    Covers both a single-document get response (_index, _id, found, _source)
    and a search response (took, _shards, hits). Keys the service adds are
    kept as extra attributes.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    index: str | None = Field(default=None, alias="_index")
    type: str | None = Field(default=None, alias="_type")
    id: str | None = Field(default=None, alias="_id")
    version: int | None = Field(default=None, alias="_version")
    found: bool | None = None
    source: dict[str, Any] | None = Field(default=None, alias="_source")
    took: int | None = None
    timed_out: bool | None = None
    shards: ShardsInfo | None = Field(default=None, alias="_shards")
    hits: HitsInfo | None = None

    @property
    def hit_count(self) -> int:
        """Total number of matching documents, 0 when the response has no hits section."""
        return self.hits.total if self.hits else 0

    def sources(self) -> list[dict[str, Any]]:
        """Return the _source fragment of every hit that carries one."""
        if not self.hits:
            return []
        return [hit.source for hit in self.hits.hits if hit.source is not None]
