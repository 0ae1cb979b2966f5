"""Cursor-based pagination over a document store collection."""

import logging
from typing import Any, AsyncIterator, Dict, List, Optional

from ..config import Settings
from ..store.client import Document, DocumentStore
from .cursor import (
    DEFAULT_LIMIT, ID_FIELD, SortSpec,
    get_identifier_parser, validate_limit,
    build_id_filter, build_id_sort,
    build_keyset_filter, build_keyset_sort,
    encode_cursor, decode_cursor,
    is_last_page, last_identifier
)


logger = logging.getLogger(__name__)


class Pager:
    """Reads ordered pages of a collection using the last seen identifier as cursor.

    Each call issues one range query: identifier strictly greater than
    ``after_id``, sorted ascending on the identifier, capped at ``limit``.
    No server-side cursor survives between calls, so pages can be requested
    from any process holding the last identifier.

    The identifier field must be unique, totally ordered and immutable. For
    non-unique sort keys use :class:`KeysetPager`.

    Consecutive pages are only guaranteed to be gap-free and disjoint while
    nobody inserts or deletes records below the cursor between calls.

    The store is borrowed: the pager never closes it.
    """

    def __init__(
        self,
        store: DocumentStore,
        collection_name: str,
        identifier_field: str = ID_FIELD,
        identifier_type: str = "objectid",
        default_limit: int = DEFAULT_LIMIT,
        max_limit: Optional[int] = None
    ):
        self.store = store
        self.collection_name = collection_name
        self.identifier_field = identifier_field
        self.parse_identifier = get_identifier_parser(identifier_type)
        self.max_limit = max_limit
        self.default_limit = validate_limit(default_limit, max_limit)

    @classmethod
    def from_settings(cls, store: DocumentStore, settings: Settings, **kwargs: Any) -> "Pager":
        """Build a pager for the configured collection."""
        kwargs.setdefault("identifier_type", settings.identifier_type)
        kwargs.setdefault("default_limit", settings.default_page_size)
        kwargs.setdefault("max_limit", settings.max_page_size)
        return cls(store, settings.mongodb_collection, **kwargs)

    def resolve_limit(self, limit: Optional[int]) -> int:
        if limit is None:
            return self.default_limit
        return validate_limit(limit, self.max_limit)

    def build_filter(self, after: Optional[Any]) -> Dict[str, Any]:
        if after is None:
            return {}
        return build_id_filter(self.parse_identifier(after), self.identifier_field)

    def build_sort(self) -> SortSpec:
        return build_id_sort(self.identifier_field)

    async def paginate(self, after_id: Optional[Any] = None, limit: Optional[int] = None) -> List[Document]:
        """Fetch the page that follows ``after_id``.

        Args:
            after_id: Identifier of the last record already seen, or None for the first page
            limit: Maximum number of records to return, defaults to ``default_limit``

        Returns:
            Up to ``limit`` records sorted ascending by identifier

        Raises:
            MalformedIdentifierError: If ``after_id`` is not a valid identifier
            InvalidLimitError: If ``limit`` is not a positive integer within bounds
            StoreConnectionError: If the store cannot be reached
            QueryError: If the store rejects the query
        """
        limit = self.resolve_limit(limit)
        filter = self.build_filter(after_id)

        documents = await self.store.query(self.collection_name, filter, self.build_sort(), limit)

        logger.debug(
            f"Fetched {len(documents)} documents from '{self.collection_name}' "
            f"after {after_id!r} (limit {limit})"
        )
        return documents

    def next_after(self, page: List[Document]) -> Optional[Any]:
        """Cursor to pass as ``after_id`` to fetch the page following ``page``."""
        return last_identifier(page, self.identifier_field)

    async def iter_pages(
        self,
        limit: Optional[int] = None,
        after_id: Optional[Any] = None
    ) -> AsyncIterator[List[Document]]:
        """Yield successive non-empty pages until the collection is exhausted.

        A page shorter than ``limit`` ends the iteration.
        """
        limit = self.resolve_limit(limit)
        after = after_id
        while True:
            page = await self.paginate(after, limit)
            if not page:
                return
            yield page
            if is_last_page(page, limit):
                return
            after = self.next_after(page)


class KeysetPager(Pager):
    """Pager ordered by a possibly non-unique field, with ``_id`` as tie-breaker.

    The cursor is an opaque token carrying both the sort value and the
    identifier of the last record, see :func:`cursor_for`.
    """

    def __init__(
        self,
        store: DocumentStore,
        collection_name: str,
        sort_field: str,
        tie_breaker: str = ID_FIELD,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: Optional[int] = None
    ):
        if sort_field == tie_breaker:
            raise ValueError("sort_field must differ from the tie-breaker, use Pager instead")
        super().__init__(
            store,
            collection_name,
            identifier_field=tie_breaker,
            default_limit=default_limit,
            max_limit=max_limit
        )
        self.sort_field = sort_field

    def build_filter(self, after: Optional[Any]) -> Dict[str, Any]:
        if after is None:
            return {}
        after_value, after_id = decode_cursor(after)
        return build_keyset_filter(self.sort_field, after_value, after_id, self.identifier_field)

    def build_sort(self) -> SortSpec:
        return build_keyset_sort(self.sort_field, self.identifier_field)

    def cursor_for(self, document: Document) -> str:
        """Encode the cursor pointing just past ``document``."""
        return encode_cursor(document.get(self.sort_field), document[self.identifier_field])

    def next_after(self, page: List[Document]) -> Optional[str]:
        if not page:
            return None
        return self.cursor_for(page[-1])
