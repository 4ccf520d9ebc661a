"""Cursor-based paging over DynamoDB style range queries.

`query_page` returns one page plus the tokens for the pages before and after
it. `query_all` drains a query by following the store's continuation key.

Both functions are pure apart from the `query` callable they are given, which
executes a single store query and returns the raw response.
"""

import logging

from dynamo_paging.cursor import decode_cursor, encode_cursor
from dynamo_paging.errors import ConfigurationMismatchError, MalformedCursorError
from dynamo_paging.models.contexts import Cursor, Direction
from dynamo_paging.models.datatypes import (
    Item,
    Page,
    PageInfo,
    QueryRequest,
    QueryResponse,
)
from dynamo_paging.models.params import KeyDescriptor, SortOrder
from dynamo_paging.protocols import QueryFn

logger = logging.getLogger(__name__)


def scan_index_forward(direction: Direction, sort_order: SortOrder) -> bool:
    """Return the store scan direction for a cursor direction and sort order.

    Walking forward through an ascending result scans the index forward.
    Descending order, or walking backward, flips it; doing both flips it back.
    """
    forward = direction == Direction.FORWARD
    if sort_order == SortOrder.DESCENDING:
        return not forward
    return forward


def build_start_key(cursor: Cursor | None, keys: KeyDescriptor) -> Item | None:
    """Build the store's exclusive start key from a cursor.

    Optional components are only emitted when `keys` names them.

    Raises:
        MalformedCursorError: If the cursor lacks a value for a key `keys` names.
    """
    if cursor is None:
        return None

    parts = (
        (keys.partition_key_name, cursor.partition_value),
        (keys.sort_key_name, cursor.sort_value),
        (keys.index_partition_key_name, cursor.index_partition_value),
        (keys.index_sort_key_name, cursor.index_sort_value),
    )
    start_key: Item = {}
    for name, value in parts:
        if not name:
            continue
        if value is None:
            msg = f"Page token has no value for key attribute '{name}'"
            raise MalformedCursorError(msg)
        start_key[name] = {"S": value}
    return start_key


def _string_value(key: Item, name: str) -> str:
    try:
        return key[name]["S"]
    except (KeyError, TypeError) as e:
        msg = f"Key attribute '{name}' is missing or not a string in {sorted(key)}"
        raise ConfigurationMismatchError(msg, source=e) from e


def cursor_from_key(key: Item, keys: KeyDescriptor, direction: Direction) -> Cursor:
    """Build a cursor from an item or a continuation key.

    Raises:
        ConfigurationMismatchError: If an attribute named in `keys` is absent
            from `key` or is not string-typed.
    """
    return Cursor(
        direction=direction,
        partition_value=_string_value(key, keys.partition_key_name),
        sort_value=_string_value(key, keys.sort_key_name) if keys.sort_key_name else None,
        index_partition_value=(
            _string_value(key, keys.index_partition_key_name)
            if keys.index_partition_key_name
            else None
        ),
        index_sort_value=(
            _string_value(key, keys.index_sort_key_name) if keys.index_sort_key_name else None
        ),
    )


def _encode(cursor: Cursor | None) -> str | None:
    return None if cursor is None else encode_cursor(cursor)


async def query_page(
    query: QueryFn,
    request: QueryRequest,
    page_key: str | None,
    sort_order: SortOrder,
    keys: KeyDescriptor,
) -> Page:
    """Query one page of items.

    `request` holds the store query arguments, including the page size as
    `Limit`. It must stay the same for every call of a paging sequence; only
    `ExclusiveStartKey` and `ScanIndexForward` are overridden here, on a copy.

    `page_key` is None for the first page. After that, pass one of the tokens
    from the previous page's `page_info`:
    - `forward_token` gives the page after it, in `sort_order`;
    - `reverse_token` gives the page before it, also in `sort_order`.

    Without a sort key in the query the order is whatever the store returns.

    Raises:
        MalformedCursorError: If `page_key` cannot be decoded or lacks a key
            value `keys` names.
        ConfigurationMismatchError: If `keys` does not match the returned keys.
    """
    cursor = decode_cursor(page_key)
    direction = Direction.FORWARD if cursor is None else cursor.direction

    paged_request = {**request, "ScanIndexForward": scan_index_forward(direction, sort_order)}
    start_key = build_start_key(cursor, keys)
    if start_key is None:
        paged_request.pop("ExclusiveStartKey", None)
    else:
        paged_request["ExclusiveStartKey"] = start_key

    logger.debug(
        "Querying page: direction=%s sort_order=%s scan_forward=%s start_key=%s",
        direction,
        sort_order,
        paged_request["ScanIndexForward"],
        start_key is not None,
    )
    response: QueryResponse = await query(paged_request)

    items: list[Item] = list(response.get("Items") or [])
    last_key: Item | None = response.get("LastEvaluatedKey") or None

    # Boundaries are taken in scan order, before any reordering.
    start = cursor_from_key(items[0], keys, Direction.BACKWARD) if items else None
    end = cursor_from_key(last_key, keys, Direction.FORWARD) if last_key else None

    if cursor is not None and not cursor.forward:
        items.reverse()
        start, end = (
            end.retag(Direction.BACKWARD) if end else None,
            start.retag(Direction.FORWARD) if start else None,
        )

    logger.debug(
        "Page fetched: items=%d has_reverse=%s has_forward=%s",
        len(items),
        start is not None,
        end is not None,
    )
    return Page(
        items=items,
        page_info=PageInfo(reverse_token=_encode(start), forward_token=_encode(end)),
    )


async def query_all(query: QueryFn, request: QueryRequest) -> list[Item]:
    """Query every item matching `request`.

    Any `Limit` in the request is dropped and the store's continuation key is
    followed until it runs out. All items are held in memory at once.
    """
    drain_request = {k: v for k, v in request.items() if k not in ("Limit", "ExclusiveStartKey")}
    items: list[Item] = []

    while True:
        response: QueryResponse = await query(drain_request)
        batch = response.get("Items") or []
        items.extend(batch)

        last_key = response.get("LastEvaluatedKey")
        logger.debug(
            "Drained batch: items=%d total=%d more=%s", len(batch), len(items), bool(last_key)
        )
        if not last_key:
            return items
        drain_request = {**drain_request, "ExclusiveStartKey": last_key}
