"""Data types for paged queries.

These types represent the data that flows through the pager:
- `Item` for a DynamoDB item in low-level attribute value form
- `QueryRequest` / `QueryResponse` for the store's query call
- `PageInfo` and `Page` for one page of results
"""

from typing import Any, TypeAlias

from pydantic import BaseModel, Field

# Low-level attribute value (matches the boto3 client shape, e.g. {"S": "abc"}).
AttributeValue: TypeAlias = dict[str, Any]

# A single item, keyed by attribute name.
Item: TypeAlias = dict[str, AttributeValue]

# Keyword arguments of the store's query call (TableName, KeyConditionExpression, ...).
QueryRequest: TypeAlias = dict[str, Any]

# Raw query response (Items, LastEvaluatedKey, Count, ...).
QueryResponse: TypeAlias = dict[str, Any]


class PageInfo(BaseModel, frozen=True):
    """Tokens for moving away from a page.

    A token of None means there are no further items in that direction.
    """

    reverse_token: str | None = None
    """Token for the page before this one, in the requested sort order."""

    forward_token: str | None = None
    """Token for the page after this one, in the requested sort order."""


class Page(BaseModel, frozen=True):
    """A page of items with the tokens to reach its neighbours.

    Always returned, even when empty. An empty page with both tokens None
    means the result set is exhausted in the direction travelled.
    """

    items: list[Item] = Field(default_factory=list)
    """Items of the page, in the requested sort order."""

    page_info: PageInfo = Field(default_factory=PageInfo)
    """Tokens for the previous and next pages."""

    @property
    def has_next(self) -> bool:
        return self.page_info.forward_token is not None

    @property
    def has_previous(self) -> bool:
        return self.page_info.reverse_token is not None
