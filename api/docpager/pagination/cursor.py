"""Cursor-based pagination utilities: identifiers, filters, sorts and cursor tokens."""

import base64
import binascii
import datetime
from typing import Optional, Dict, Any, List, Tuple, Callable, Sequence
from urllib.parse import urlencode

from bson import Decimal128, ObjectId
from bson import json_util
from bson.errors import BSONError
from bson.json_util import CANONICAL_JSON_OPTIONS
from pymongo import ASCENDING

from ..errors.exceptions import MalformedIdentifierError, InvalidLimitError


DEFAULT_LIMIT = 10
ID_FIELD = "_id"

SortSpec = List[Tuple[str, int]]

# Values a cursor may carry. Documents, arrays and regexes would act as query operators.
CURSOR_VALUE_TYPES = (bool, int, float, str, ObjectId, datetime.datetime, Decimal128)


def parse_object_id(value: Any) -> ObjectId:
    """Parse an ObjectId from its native form or its 24 character hex string.

    Raises:
        MalformedIdentifierError: If the value is not a valid ObjectId
    """
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    raise MalformedIdentifierError(value, "expected a 24 character hex ObjectId")


def parse_int_id(value: Any) -> int:
    """Parse an integer identifier from an int or a decimal string."""
    if isinstance(value, bool):
        raise MalformedIdentifierError(value, "expected an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise MalformedIdentifierError(value, "expected an integer")


def parse_str_id(value: Any) -> str:
    """Accept any non-empty string as an identifier."""
    if isinstance(value, str) and value:
        return value
    raise MalformedIdentifierError(value, "expected a non-empty string")


IDENTIFIER_PARSERS: Dict[str, Callable[[Any], Any]] = {
    "objectid": parse_object_id,
    "int": parse_int_id,
    "str": parse_str_id,
}


def get_identifier_parser(identifier_type: str) -> Callable[[Any], Any]:
    """Look up the parser for a configured identifier type."""
    try:
        return IDENTIFIER_PARSERS[identifier_type]
    except KeyError:
        raise ValueError(
            f"Unknown identifier type {identifier_type!r}, expected one of {sorted(IDENTIFIER_PARSERS)}"
        )


def validate_limit(limit: Any, max_limit: Optional[int] = None) -> int:
    """Check that a page size is a positive integer, optionally bounded.

    Raises:
        InvalidLimitError: If the limit is not an int, is below 1 or above max_limit
    """
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise InvalidLimitError(limit, max_limit)
    if limit < 1:
        raise InvalidLimitError(limit, max_limit)
    if max_limit is not None and limit > max_limit:
        raise InvalidLimitError(limit, max_limit)
    return limit


def build_id_filter(after_id: Optional[Any], field: str = ID_FIELD) -> Dict[str, Any]:
    """Build the exclusive lower-bound filter for identifier pagination."""
    if after_id is None:
        return {}
    return {field: {"$gt": after_id}}


def build_id_sort(field: str = ID_FIELD) -> SortSpec:
    """Ascending sort on the identifier field."""
    return [(field, ASCENDING)]


def build_keyset_filter(
    sort_field: str,
    after_value: Optional[Any] = None,
    after_id: Optional[Any] = None,
    tie_breaker: str = ID_FIELD
) -> Dict[str, Any]:
    """Build the seek filter for a non-unique sort key with a tie-breaker.

    For ascending order: field > value OR (field = value AND _id > id)

    Null and missing values sort first and never satisfy $gt, so after a
    null cursor every non-null value counts as greater.
    """
    if after_id is None:
        return {}
    if after_value is None:
        greater = {sort_field: {"$ne": None}}
    else:
        greater = {sort_field: {"$gt": after_value}}
    return {
        "$or": [
            greater,
            {sort_field: after_value, tie_breaker: {"$gt": after_id}},
        ]
    }


def build_keyset_sort(sort_field: str, tie_breaker: str = ID_FIELD) -> SortSpec:
    """Ascending sort on the sort key, then on the tie-breaker."""
    return [(sort_field, ASCENDING), (tie_breaker, ASCENDING)]


def encode_cursor(value: Any, item_id: Any) -> str:
    """Encode a keyset cursor as URL-safe base64 of canonical Extended JSON.

    Canonical Extended JSON keeps BSON types (ObjectId, datetime, Int64)
    intact across the round trip.
    """
    cursor_json = json_util.dumps({"value": value, "id": item_id}, json_options=CANONICAL_JSON_OPTIONS)
    return base64.urlsafe_b64encode(cursor_json.encode("utf-8")).decode("ascii")


def decode_cursor(cursor: str) -> Tuple[Any, Any]:
    """Decode a keyset cursor into its (value, id) pair.

    Raises:
        MalformedIdentifierError: If the cursor is empty, cannot be decoded or
            carries something other than a plain scalar
    """
    if not isinstance(cursor, str) or not cursor:
        raise MalformedIdentifierError(cursor, "empty cursor")

    try:
        cursor_bytes = base64.urlsafe_b64decode(cursor.encode("ascii"))
        cursor_data = json_util.loads(cursor_bytes.decode("utf-8"))
        value, item_id = cursor_data["value"], cursor_data["id"]
    except (binascii.Error, ValueError, TypeError, KeyError, BSONError) as e:
        raise MalformedIdentifierError(cursor, f"invalid cursor format: {e}")

    if value is not None and not isinstance(value, CURSOR_VALUE_TYPES):
        raise MalformedIdentifierError(cursor, f"unsupported cursor value type {type(value).__name__}")
    if not isinstance(item_id, CURSOR_VALUE_TYPES):
        raise MalformedIdentifierError(cursor, f"unsupported cursor id type {type(item_id).__name__}")
    return value, item_id


def is_last_page(page: Sequence[Any], limit: int) -> bool:
    """A page shorter than the requested limit means the collection is exhausted."""
    return len(page) < limit


def last_identifier(page: Sequence[Dict[str, Any]], field: str = ID_FIELD) -> Optional[Any]:
    """Identifier of the last record in a page, or None for an empty page."""
    if not page:
        return None
    return page[-1][field]


def create_link_header(
    base_url: str,
    params: Dict[str, Any],
    next_cursor: Optional[str] = None,
    cursor_param: str = "after_id"
) -> Optional[str]:
    """Create Link header for pagination as per RFC 8288.

    Args:
        base_url: Base URL for the resource
        params: Current query parameters
        next_cursor: Cursor value for the next page
        cursor_param: Query parameter name carrying the cursor

    Returns:
        Link header value or None if there is no next page
    """
    if not next_cursor:
        return None

    next_params = {**params, cursor_param: next_cursor}
    return f'<{base_url}?{urlencode(next_params)}>; rel="next"'
