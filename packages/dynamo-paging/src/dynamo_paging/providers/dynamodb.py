"""DynamoDB provider using boto3."""

import logging
from collections.abc import AsyncIterator, Sequence
from typing import TYPE_CHECKING, Any, ClassVar, Self

from pydantic import BaseModel

from dynamo_paging.cursor import encode_cursor
from dynamo_paging.errors import ConfigurationMismatchError, DalError, ErrorKind
from dynamo_paging.models.contexts import Direction, PageContext
from dynamo_paging.models.datatypes import Item, Page, QueryRequest, QueryResponse
from dynamo_paging.models.params import QueryParams, SortOrder
from dynamo_paging.paging import cursor_from_key, query_all, query_page

if TYPE_CHECKING:
    from mypy_boto3_dynamodb import DynamoDBClient

try:
    import boto3
    from botocore.exceptions import BotoCoreError, ClientError
except ImportError as e:
    _msg = "boto3 is required for DynamoDB support. Install with: uv add 'dynamo-paging[dynamodb]'"
    raise ImportError(_msg) from e

logger = logging.getLogger(__name__)


class DynamoDBCredentials(BaseModel, frozen=True):
    """Credentials for DynamoDB connection.

    Access keys may be left unset to use the default boto3 credential chain.
    """

    region: str = "us-east-1"
    endpoint_url: str | None = None
    """Override endpoint, e.g. 'http://localhost:8000' for DynamoDB Local."""

    access_key_id: str | None = None
    secret_access_key: str | None = None


class DynamoDBParams(QueryParams, frozen=True):
    """Parameters for DynamoDB operations.

    Inherits `table`, `keys`, `index_name`, `page_size` and `sort_order`
    from QueryParams.
    """

    consistent_read: bool = False
    """Request strongly consistent reads (not supported on global indexes)."""


def _key_names(schema: Sequence[dict[str, Any]]) -> tuple[str | None, str | None]:
    """Return the (HASH, RANGE) attribute names of a key schema."""
    by_type = {element["KeyType"]: element["AttributeName"] for element in schema}
    return by_type.get("HASH"), by_type.get("RANGE")


def _check_key_schema(table: dict[str, Any], params: DynamoDBParams) -> None:
    """Check the configured key names against a DescribeTable result."""
    keys = params.keys
    expected = (keys.partition_key_name, keys.sort_key_name)
    actual = _key_names(table["KeySchema"])
    if expected != actual:
        msg = f"Table '{params.table}' has key schema {actual}, configured {expected}"
        raise ConfigurationMismatchError(msg)

    if params.index_name:
        indexes = [
            *table.get("GlobalSecondaryIndexes", []),
            *table.get("LocalSecondaryIndexes", []),
        ]
        index = next((i for i in indexes if i["IndexName"] == params.index_name), None)
        if index is None:
            msg = f"Index '{params.index_name}' not found on table '{params.table}'"
            raise DalError(msg, kind=ErrorKind.NOT_FOUND)

        expected = (keys.index_partition_key_name, keys.index_sort_key_name)
        actual = _key_names(index["KeySchema"])
        if expected != actual:
            msg = f"Index '{params.index_name}' has key schema {actual}, configured {expected}"
            raise ConfigurationMismatchError(msg)

    types = {d["AttributeName"]: d["AttributeType"] for d in table.get("AttributeDefinitions", [])}
    for name in keys.names:
        if types.get(name, "S") != "S":
            msg = f"Key attribute '{name}' has type {types[name]}; only string keys are supported"
            raise ConfigurationMismatchError(msg)


class DynamoDBProvider:
    """DynamoDB provider for paged query operations.

    Implements Provider[DynamoDBCredentials, DynamoDBParams] and
    DataInput[Item, PageContext].
    """

    __slots__: ClassVar[tuple[str, str]] = ("_client", "_params")

    _client: "DynamoDBClient"
    _params: DynamoDBParams

    def __init__(self, client: "DynamoDBClient", params: DynamoDBParams) -> None:
        self._client = client
        self._params = params

    @classmethod
    async def connect(cls, credentials: DynamoDBCredentials, params: DynamoDBParams) -> Self:
        """Create DynamoDB client and verify the table's key schema."""
        try:
            client: DynamoDBClient = boto3.client(  # pyright: ignore[reportUnknownMemberType]
                "dynamodb",
                aws_access_key_id=credentials.access_key_id,
                aws_secret_access_key=credentials.secret_access_key,
                region_name=credentials.region,
                endpoint_url=credentials.endpoint_url,
            )
            # Verify connection by describing the table
            table = client.describe_table(TableName=params.table)["Table"]
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code == "ResourceNotFoundException":
                msg = f"Table '{params.table}' not found"
                raise DalError(msg, kind=ErrorKind.NOT_FOUND, source=e) from e
            msg = f"Failed to connect to DynamoDB: {e}"
            raise DalError(msg, kind=ErrorKind.CONNECTION, source=e) from e
        except BotoCoreError as e:
            msg = f"Failed to connect to DynamoDB: {e}"
            raise DalError(msg, kind=ErrorKind.CONNECTION, source=e) from e

        _check_key_schema(table, params)
        logger.debug("Connected to DynamoDB table %s (index=%s)", params.table, params.index_name)
        return cls(client, params)

    async def disconnect(self) -> None:
        """Close the DynamoDB client."""
        self._client.close()
        logger.debug("Disconnected from DynamoDB table %s", self._params.table)

    async def query_page(
        self,
        request: QueryRequest,
        page_key: str | None = None,
        sort_order: SortOrder | None = None,
    ) -> Page:
        """Query one page of items.

        See `dynamo_paging.paging.query_page`. Table, index, consistency and
        page size come from params unless `request` sets them.
        """
        return await query_page(
            self._query,
            self._prepare(request),
            page_key,
            sort_order or self._params.sort_order,
            self._params.keys,
        )

    async def query_all(self, request: QueryRequest) -> list[Item]:
        """Query every item matching `request`, ignoring the page size."""
        return await query_all(self._query, self._prepare(request))

    async def read(self, ctx: PageContext) -> AsyncIterator[tuple[Item, PageContext]]:
        """Read items page by page in the configured sort order.

        Yields tuples of (item, context) where context can be used to resume
        reading right after that item if the stream is interrupted.
        """
        token = ctx.token
        while True:
            page = await self.query_page(dict(ctx.query), token)
            for item in page.items:
                resume = cursor_from_key(item, self._params.keys, Direction.FORWARD)
                yield (item, ctx.model_copy(update={"token": encode_cursor(resume)}))

            token = page.page_info.forward_token
            if token is None:
                break

    def _prepare(self, request: QueryRequest) -> QueryRequest:
        """Fill in request defaults from params."""
        prepared: QueryRequest = {"TableName": self._params.table, "Limit": self._params.page_size}
        if self._params.index_name:
            prepared["IndexName"] = self._params.index_name
        if self._params.consistent_read:
            prepared["ConsistentRead"] = True
        return {**prepared, **request}

    async def _query(self, request: QueryRequest) -> QueryResponse:
        return self._client.query(**request)


Provider = DynamoDBProvider
