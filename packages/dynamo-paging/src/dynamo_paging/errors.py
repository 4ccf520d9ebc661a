"""Error types for paging operations."""

from enum import StrEnum


class ErrorKind(StrEnum):
    """Classification of paging errors."""

    CONNECTION = "connection"
    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"
    TIMEOUT = "timeout"
    PROVIDER = "provider"
    MALFORMED_CURSOR = "malformed_cursor"
    CONFIGURATION = "configuration"


class DalError(Exception):
    """Base error for all paging and provider operations.

    Failures of the underlying store query are not wrapped in this type; they
    reach the caller exactly as the store client raised them.
    """

    __slots__ = ("kind", "message", "source")

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.PROVIDER,
        source: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.source = source

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, kind={self.kind!r})"


class MalformedCursorError(DalError):
    """The page token could not be decoded.

    Not retryable: the caller has to restart pagination without a token.
    """

    def __init__(self, message: str, source: BaseException | None = None) -> None:
        super().__init__(message, kind=ErrorKind.MALFORMED_CURSOR, source=source)


class ConfigurationMismatchError(DalError):
    """The configured key names do not match the table or index key schema."""

    def __init__(self, message: str, source: BaseException | None = None) -> None:
        super().__init__(message, kind=ErrorKind.CONFIGURATION, source=source)
