import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import HTMLResponse

from app.services.reconstructor import reconstruct_view
from app.services.related import resolve_related_links
from app.services.store import PageNotFoundError, store

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{handle}", response_class=HTMLResponse, summary="Serve a landing page")
async def view_page(handle: str) -> HTMLResponse:
    """Rebuild the page stored under *handle* from its persisted fields."""
    try:
        page = store.get_by_handle(handle)
    except PageNotFoundError:
        logger.info("View request for unknown handle %s", handle)
        raise HTTPException(status_code=404, detail="Page not found")

    html = reconstruct_view(page, resolve_related_links(page.id, store))
    return HTMLResponse(content=html)
