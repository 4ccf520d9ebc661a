"""Core protocols for paged data access."""

from collections.abc import AsyncIterator
from typing import Protocol, Self, TypeVar, runtime_checkable

from dynamo_paging.models.datatypes import QueryRequest, QueryResponse

T_co = TypeVar("T_co", covariant=True)
Ctx = TypeVar("Ctx")  # Invariant: used in both parameter and return positions
Cred_contra = TypeVar("Cred_contra", contravariant=True)
Params_contra = TypeVar("Params_contra", contravariant=True)


@runtime_checkable
class QueryFn(Protocol):
    """A single range query against the store.

    Receives the query arguments and returns the raw response, which carries
    `Items` and, when the store has more to give, `LastEvaluatedKey`.
    Failures are raised as-is by the implementation.
    """

    async def __call__(self, request: QueryRequest) -> QueryResponse: ...


@runtime_checkable
class DataInput(Protocol[T_co, Ctx]):
    """Protocol for reading data from external sources."""

    def read(self, ctx: Ctx) -> AsyncIterator[tuple[T_co, Ctx]]:
        """Yield (item, context) tuples from the source.

        Each yielded context can be used to resume reading from
        the next item if the stream is interrupted.
        """
        ...


@runtime_checkable
class Provider(Protocol[Cred_contra, Params_contra]):
    """Protocol for provider lifecycle management."""

    @classmethod
    async def connect(cls, credentials: Cred_contra, params: Params_contra) -> Self:
        """Establish connection to the external service."""
        ...

    async def disconnect(self) -> None:
        """Release resources and close connections."""
        ...
