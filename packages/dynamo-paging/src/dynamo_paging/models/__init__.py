"""Value types shared by the codec, the pager and the providers."""

from dynamo_paging.models.contexts import Cursor, Direction, PageContext
from dynamo_paging.models.datatypes import (
    AttributeValue,
    Item,
    Page,
    PageInfo,
    QueryRequest,
    QueryResponse,
)
from dynamo_paging.models.params import KeyDescriptor, QueryParams, SortOrder

__all__ = [
    # Contexts (runtime state)
    "Cursor",
    "Direction",
    "PageContext",
    # Params (configuration)
    "KeyDescriptor",
    "QueryParams",
    "SortOrder",
    # Data types
    "AttributeValue",
    "Item",
    "Page",
    "PageInfo",
    "QueryRequest",
    "QueryResponse",
]
