"""Context types for paging operations.

Contexts carry the state needed to resume a query from a specific position.
They only track *where* to resume, not *how much* to read (that's in Params).
"""

from enum import StrEnum
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field


class Direction(StrEnum):
    """Direction a cursor moves through the result set."""

    FORWARD = "forward"
    """Toward the end of the result set in the requested sort order."""

    BACKWARD = "backward"
    """Toward the beginning of the result set in the requested sort order."""


class Cursor(BaseModel):
    """Directional position inside a query result.

    Holds the key values of the item the next query starts after, plus the
    direction to travel from there. Only string-typed keys are supported.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    direction: Direction
    """Direction to travel from this position."""

    partition_value: str = Field(alias="pk")
    """Table partition key value."""

    sort_value: str | None = Field(default=None, alias="sk")
    """Table sort key value."""

    index_partition_value: str | None = Field(default=None, alias="gsiPk")
    """Index partition key value."""

    index_sort_value: str | None = Field(default=None, alias="gsiSk")
    """Index sort key value."""

    @property
    def forward(self) -> bool:
        """Whether this cursor moves toward the end of the result set."""
        return self.direction == Direction.FORWARD

    def retag(self, direction: Direction) -> Self:
        """Return a copy of this cursor pointing in `direction`."""
        if direction == self.direction:
            return self
        return self.model_copy(update={"direction": direction})


class PageContext(BaseModel, frozen=True):
    """Context for resumable reads through a paged query.

    `token` is an encoded cursor; a reader started from it continues right
    after the item the token was produced for.
    """

    query: dict[str, Any] = Field(default_factory=dict)
    """Query arguments (KeyConditionExpression, ExpressionAttributeValues, ...)."""

    token: str | None = None
    """Encoded cursor to resume from, or None to start at the beginning."""
