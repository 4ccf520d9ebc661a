"""Parameter types for paging configuration.

Params define how a query is paged (key names, page size, sort order),
while contexts carry runtime state (cursors, tokens).
"""

from enum import StrEnum
from typing import Self

from pydantic import BaseModel, Field, field_validator, model_validator


class SortOrder(StrEnum):
    """Order in which pages present items."""

    ASCENDING = "ascending"
    DESCENDING = "descending"


class KeyDescriptor(BaseModel, frozen=True):
    """Names of the key attributes a paged query works with.

    The partition key is always required. The sort key is required if the
    table has one. Index key names are required when querying an index; the
    index sort key only if that index has a sort key.
    """

    partition_key_name: str = Field(min_length=1)
    """Name of the table's partition key."""

    sort_key_name: str | None = None
    """Name of the table's sort key."""

    index_partition_key_name: str | None = None
    """Name of the queried index's partition key."""

    index_sort_key_name: str | None = None
    """Name of the queried index's sort key."""

    @field_validator(
        "sort_key_name",
        "index_partition_key_name",
        "index_sort_key_name",
        mode="before",
    )
    @classmethod
    def _blank_as_none(cls, value: object) -> object:
        if value == "":
            return None
        return value

    @model_validator(mode="after")
    def _index_sort_needs_index_partition(self) -> Self:
        if self.index_sort_key_name and not self.index_partition_key_name:
            msg = "index_sort_key_name requires index_partition_key_name"
            raise ValueError(msg)
        return self

    @property
    def names(self) -> tuple[str, ...]:
        """All configured key attribute names, table keys first."""
        return tuple(
            name
            for name in (
                self.partition_key_name,
                self.sort_key_name,
                self.index_partition_key_name,
                self.index_sort_key_name,
            )
            if name
        )


class QueryParams(BaseModel, frozen=True):
    """Common parameters for paged query operations."""

    table: str
    """Target table name."""

    keys: KeyDescriptor
    """Key attribute names of the table and, if queried, the index."""

    index_name: str | None = None
    """Secondary index to query. If None, the table itself is queried."""

    page_size: int = Field(default=25, ge=1)
    """Maximum number of items per page."""

    sort_order: SortOrder = SortOrder.ASCENDING
    """Default sort order for paged reads."""
