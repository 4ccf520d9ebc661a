"""Encoding and decoding of page tokens.

A token is the compact JSON form of a `Cursor` (absent fields omitted),
UTF-8 encoded and wrapped in URL-safe base64 without padding, so it can travel
in URLs, headers and JSON bodies untouched.
"""

import base64
import binascii
import json

from pydantic import ValidationError

from dynamo_paging.errors import MalformedCursorError
from dynamo_paging.models.contexts import Cursor

# Lower-cased wire field name -> canonical wire field name.
_WIRE_FIELDS = {
    "direction": "direction",
    "pk": "pk",
    "sk": "sk",
    "gsipk": "gsiPk",
    "gsisk": "gsiSk",
}


def encode_cursor(cursor: Cursor) -> str:
    """Encode a cursor into an opaque token."""
    payload = cursor.model_dump_json(by_alias=True, exclude_none=True)
    return base64.urlsafe_b64encode(payload.encode("utf-8")).decode("ascii").rstrip("=")


def decode_cursor(token: str | None) -> Cursor | None:
    """Decode a token produced by `encode_cursor`.

    Returns None for a None token (first page). Field names and the direction
    value are matched case-insensitively.

    Raises:
        MalformedCursorError: If the token is not base64, not a JSON object,
            or lacks the direction or partition value.
    """
    if token is None:
        return None

    try:
        padded = token + "=" * (-len(token) % 4)
        raw = base64.b64decode(padded, altchars=b"-_", validate=True)
        data = json.loads(raw.decode("utf-8"))
    except (binascii.Error, ValueError) as e:
        msg = f"Invalid page token: {e}"
        raise MalformedCursorError(msg, source=e) from e

    if not isinstance(data, dict):
        msg = "Invalid page token: expected a JSON object"
        raise MalformedCursorError(msg)

    fields = {_WIRE_FIELDS.get(str(k).lower(), k): v for k, v in data.items()}
    if isinstance(fields.get("direction"), str):
        fields["direction"] = fields["direction"].lower()

    try:
        return Cursor.model_validate(fields)
    except ValidationError as e:
        msg = f"Invalid page token: {e}"
        raise MalformedCursorError(msg, source=e) from e
