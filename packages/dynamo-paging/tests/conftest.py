"""Pytest configuration and shared fixtures for the dynamo-paging tests."""

import hashlib
import logging
from typing import Any, Dict, List, Optional, Tuple

import pytest

from dynamo_paging.models import KeyDescriptor, Page


logging.getLogger("botocore").setLevel(logging.WARNING)


class FakeDynamoDB:
    """In-memory stand-in for the boto3 DynamoDB client.

    Every stored item is treated as matching the key condition. Supports
    ExclusiveStartKey, ScanIndexForward, Limit and IndexName the way DynamoDB
    does: LastEvaluatedKey is returned whenever a call stops at its limit,
    even if nothing is left, and it carries the table and index keys.
    Indexes without a sort key return items in a hash-based order.
    """

    def __init__(
        self,
        items: List[Dict[str, Any]],
        table_keys: Tuple[str, Optional[str]] = ("pk", "sk"),
        index_keys: Tuple[str, Optional[str]] = ("gsi1_pk", "gsi1_sk"),
        max_batch: Optional[int] = None,
    ):
        self.items = items
        self.table_keys = table_keys
        self.index_keys = index_keys
        self.max_batch = max_batch
        self.requests: List[Dict[str, Any]] = []
        self.closed = False

    def _position(self, key: Dict[str, Any], range_key: Optional[str]) -> Tuple[str, ...]:
        table_values = tuple(key[name]["S"] for name in self.table_keys if name)
        if range_key:
            return (key[range_key]["S"], *table_values)
        digest = hashlib.md5("|".join(table_values).encode(), usedforsecurity=False).hexdigest()
        return (digest, *table_values)

    def query(self, **request: Any) -> Dict[str, Any]:
        self.requests.append(request)
        if "ExclusiveStartKey" in request and not isinstance(request["ExclusiveStartKey"], dict):
            raise ValueError("ExclusiveStartKey must be a map")

        on_index = bool(request.get("IndexName"))
        hash_key, range_key = self.index_keys if on_index else self.table_keys
        forward = request.get("ScanIndexForward", True)

        candidates = [item for item in self.items if hash_key in item]
        ordered = sorted(candidates, key=lambda i: self._position(i, range_key), reverse=not forward)

        start = request.get("ExclusiveStartKey")
        if start is not None:
            after = self._position(start, range_key)
            ordered = [
                item
                for item in ordered
                if (self._position(item, range_key) > after if forward
                    else self._position(item, range_key) < after)
            ]

        caps = [cap for cap in (request.get("Limit"), self.max_batch) if cap]
        cap = min(caps) if caps else None
        batch = ordered[:cap] if cap else ordered

        response: Dict[str, Any] = {"Items": [dict(item) for item in batch], "Count": len(batch)}
        if cap and len(batch) == cap:
            names = [n for n in self.table_keys if n]
            if on_index:
                names += [n for n in self.index_keys if n]
            response["LastEvaluatedKey"] = {name: batch[-1][name] for name in names}
        return response

    def close(self) -> None:
        self.closed = True


def make_item(x: int, with_index: bool = True) -> Dict[str, Any]:
    """Build the test item number `x`."""
    item = {
        "pk": {"S": "partition"},
        "sk": {"S": f"sort|{x:03d}"},
        "x": {"N": str(x)},
    }
    if with_index:
        item["gsi1_pk"] = {"S": "index"}
        item["gsi1_sk"] = {"S": f"index|{x:03d}"}
    return item


def values(page: Page) -> List[int]:
    """Return the `x` numbers of a page's items, in page order."""
    return [int(item["x"]["N"]) for item in page.items]


@pytest.fixture
def items() -> List[Dict[str, Any]]:
    """51 items: two full pages of 25 and one single-item page."""
    return [make_item(x) for x in range(51)]


@pytest.fixture
def store(items) -> FakeDynamoDB:
    """Fake DynamoDB holding the sample items."""
    return FakeDynamoDB(items)


@pytest.fixture
def query(store):
    """QueryFn backed by the fake store."""

    async def _query(request: Dict[str, Any]) -> Dict[str, Any]:
        return store.query(**request)

    return _query


@pytest.fixture
def table_keys() -> KeyDescriptor:
    return KeyDescriptor(partition_key_name="pk", sort_key_name="sk")


@pytest.fixture
def index_keys() -> KeyDescriptor:
    return KeyDescriptor(
        partition_key_name="pk",
        sort_key_name="sk",
        index_partition_key_name="gsi1_pk",
        index_sort_key_name="gsi1_sk",
    )


@pytest.fixture
def table_request() -> Dict[str, Any]:
    return {
        "TableName": "paging-with-sk",
        "KeyConditionExpression": "pk = :pk AND begins_with(sk, :sk)",
        "ExpressionAttributeValues": {":pk": {"S": "partition"}, ":sk": {"S": "sort|"}},
        "Limit": 25,
    }


@pytest.fixture
def index_request() -> Dict[str, Any]:
    return {
        "TableName": "paging-with-sk",
        "IndexName": "gsi1",
        "KeyConditionExpression": "gsi1_pk = :pk AND begins_with(gsi1_sk, :sk)",
        "ExpressionAttributeValues": {":pk": {"S": "index"}, ":sk": {"S": "index|"}},
        "Limit": 25,
    }
