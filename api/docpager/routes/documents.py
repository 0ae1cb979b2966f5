"""Documents API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from ..config import Settings, get_settings
from ..models.documents import DocumentPage
from ..pagination import Pager, create_link_header
from ..store import DocumentStore, get_store


logger = logging.getLogger(__name__)

documents_router = APIRouter(
    prefix="/documents",
    tags=["Documents"],
    responses={
        400: {"description": "Bad Request - Malformed identifier or invalid limit"},
        502: {"description": "Bad Gateway - The document store rejected the query"},
        503: {"description": "Service Unavailable - The document store is unreachable"}
    }
)


def get_pager(
    store: Annotated[DocumentStore, Depends(get_store)],
    settings: Annotated[Settings, Depends(get_settings)]
) -> Pager:
    """Pager over the configured collection, borrowing the shared store."""
    return Pager.from_settings(store, settings)


@documents_router.get(
    "",
    response_model=DocumentPage,
    summary="List documents",
    description="List documents sorted by identifier using the last seen identifier as cursor.",
    responses={
        200: {"description": "Documents retrieved successfully"}
    }
)
async def list_documents(
    request: Request,
    response: Response,
    pager: Annotated[Pager, Depends(get_pager)],
    after_id: Annotated[str | None, Query(description="Identifier of the last document already seen")] = None,
    limit: Annotated[int | None, Query(description="Number of documents per page")] = None
) -> DocumentPage:
    """List one page of documents.

    Documents are returned in ascending identifier order. Pass the
    ``last_id`` of a page as ``after_id`` to get the next one; a page with
    fewer documents than ``limit`` is the last page.

    Pages are read independently, so documents inserted or deleted below the
    cursor between two requests can be skipped or repeated.
    """
    effective_limit = pager.resolve_limit(limit)
    documents = await pager.paginate(after_id, effective_limit)

    page = DocumentPage.from_documents(documents, effective_limit, pager.identifier_field)

    if page.has_more:
        link_header = create_link_header(
            base_url=str(request.url.replace(query="")),
            params={"limit": effective_limit},
            next_cursor=page.last_id
        )
        if link_header:
            response.headers["Link"] = link_header

    logger.info(f"Served {page.count} documents from '{pager.collection_name}' after {after_id!r}")
    return page
