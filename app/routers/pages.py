"""Page authoring endpoints: create, read, update, status and related pages."""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Request, Response

from app.config import settings
from app.models.draft import PageDraft
from app.models.page import Page, PageSummary, PageUpdate, StatusUpdate
from app.models.related import RelatedLink, RelatedLinksRequest
from app.models.response import AssembleResponse, PageResponse
from app.routers.assemble import limiter
from app.services.assembler import assemble_document
from app.services.reconstructor import reconstruct_document
from app.services.related import resolve_related_links
from app.services.store import (
    DuplicateHandleError,
    InvalidTransitionError,
    PageNotFoundError,
    page_from_draft,
    store,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pages", tags=["pages"])


@router.post("", response_model=PageResponse, status_code=201, summary="Assemble and store a new page")
@limiter.limit(settings.ASSEMBLE_RATE_LIMIT)
async def create_page(request: Request, body: PageDraft) -> PageResponse:
    """Assemble *body* and persist it as a ``draft`` page.

    The stored ``content`` keeps image placeholders and no banners; images and
    banners are merged in again whenever the page is viewed.
    """
    logger.info("Create page request received", extra={"handle": body.handle})
    document = assemble_document(body)
    try:
        page = store.create(page_from_draft(store.new_id(), body, document.content))
    except DuplicateHandleError as exc:
        logger.warning("Duplicate handle: %s", body.handle)
        raise HTTPException(status_code=409, detail=str(exc))
    return PageResponse(page=page, html=document.html, warnings=document.warnings)


@router.get("", response_model=List[PageSummary], summary="List stored pages")
async def list_pages() -> List[PageSummary]:
    return [
        PageSummary(
            id=page.id,
            handle=page.handle,
            main_keyword=page.main_keyword,
            status=page.status,
            updated_at=page.updated_at,
        )
        for page in store.list_pages()
    ]


@router.get("/{page_id}", response_model=Page, summary="Get a stored page")
async def get_page(page_id: str) -> Page:
    return _get_or_404(page_id)


@router.patch("/{page_id}", response_model=Page, summary="Update stored page fields")
async def update_page(page_id: str, body: PageUpdate) -> Page:
    try:
        return store.update(page_id, body)
    except PageNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))


@router.delete("/{page_id}", status_code=204, summary="Delete a page")
async def delete_page(page_id: str) -> Response:
    try:
        store.delete(page_id)
    except PageNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return Response(status_code=204)


@router.put("/{page_id}/status", response_model=Page, summary="Move a page through draft → published → archived")
async def set_status(page_id: str, body: StatusUpdate) -> Page:
    try:
        return store.set_status(page_id, body.status)
    except PageNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except InvalidTransitionError as exc:
        logger.warning("Rejected status change for %s: %s", page_id, exc)
        raise HTTPException(status_code=409, detail=str(exc))


@router.put("/{page_id}/related", response_model=List[RelatedLink], summary="Replace the related pages")
async def set_related(page_id: str, body: RelatedLinksRequest) -> List[RelatedLink]:
    if page_id in body.related_page_ids:
        raise HTTPException(status_code=400, detail="A page cannot be related to itself.")
    try:
        store.set_related(page_id, body.related_page_ids)
    except PageNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return resolve_related_links(page_id, store)


@router.get("/{page_id}/related", response_model=List[RelatedLink], summary="List the related pages")
async def get_related(page_id: str) -> List[RelatedLink]:
    _get_or_404(page_id)
    return resolve_related_links(page_id, store)


@router.get("/{page_id}/render", response_model=AssembleResponse, summary="Rebuild a page's HTML with warnings")
async def render_page(page_id: str) -> AssembleResponse:
    page = _get_or_404(page_id)
    document = reconstruct_document(page, resolve_related_links(page.id, store))
    return AssembleResponse(html=document.html, warnings=document.warnings)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _get_or_404(page_id: str) -> Page:
    try:
        return store.get(page_id)
    except PageNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
