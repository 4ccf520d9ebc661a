"""Cursor-based bidirectional paging for DynamoDB queries."""

from dynamo_paging.cursor import decode_cursor, encode_cursor
from dynamo_paging.errors import (
    ConfigurationMismatchError,
    DalError,
    ErrorKind,
    MalformedCursorError,
)
from dynamo_paging.models import (
    Cursor,
    Direction,
    KeyDescriptor,
    Page,
    PageContext,
    PageInfo,
    QueryParams,
    SortOrder,
)
from dynamo_paging.paging import query_all, query_page, scan_index_forward
from dynamo_paging.protocols import DataInput, Provider, QueryFn

__all__ = [
    "ConfigurationMismatchError",
    "Cursor",
    "DalError",
    "DataInput",
    "Direction",
    "ErrorKind",
    "KeyDescriptor",
    "MalformedCursorError",
    "Page",
    "PageContext",
    "PageInfo",
    "Provider",
    "QueryFn",
    "QueryParams",
    "SortOrder",
    "decode_cursor",
    "encode_cursor",
    "query_all",
    "query_page",
    "scan_index_forward",
]
