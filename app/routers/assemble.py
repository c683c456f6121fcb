import logging

from fastapi import APIRouter, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import settings
from app.models.draft import PageDraft
from app.models.response import AssembleResponse
from app.services.assembler import assemble_document

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter()


@router.post(
    "/assemble",
    response_model=AssembleResponse,
    summary="Preview the HTML document for a page draft",
    description=(
        "Lays out the generated sections, assigns content images, inserts banner "
        "ads and fills the landing template.  Nothing is stored.  Problems with "
        "optional assets are reported in `warnings`; the document is always complete."
    ),
)
@limiter.limit(settings.ASSEMBLE_RATE_LIMIT)
async def assemble(request: Request, body: PageDraft) -> AssembleResponse:
    logger.info("Assemble request received", extra={"handle": body.handle, "sections": len(body.sections)})
    document = assemble_document(body)
    return AssembleResponse(html=document.html, warnings=document.warnings)
