"""Pagination module for cursor-based pagination."""

from .cursor import (
    DEFAULT_LIMIT,
    ID_FIELD,
    parse_object_id,
    parse_int_id,
    parse_str_id,
    get_identifier_parser,
    validate_limit,
    build_id_filter,
    build_id_sort,
    build_keyset_filter,
    build_keyset_sort,
    encode_cursor,
    decode_cursor,
    is_last_page,
    last_identifier,
    create_link_header
)
from .pager import Pager, KeysetPager

__all__ = [
    "DEFAULT_LIMIT",
    "ID_FIELD",
    "parse_object_id",
    "parse_int_id",
    "parse_str_id",
    "get_identifier_parser",
    "validate_limit",
    "build_id_filter",
    "build_id_sort",
    "build_keyset_filter",
    "build_keyset_sort",
    "encode_cursor",
    "decode_cursor",
    "is_last_page",
    "last_identifier",
    "create_link_header",
    "Pager",
    "KeysetPager"
]
