from fastapi import APIRouter
from fastapi.responses import PlainTextResponse, Response

from app.config import settings
from app.services.sitemap import build_robots, build_sitemap
from app.services.store import store

router = APIRouter()


@router.get("/sitemap.xml", summary="Sitemap of published pages")
async def sitemap() -> Response:
    return Response(
        content=build_sitemap(settings.SITE_URL, store.list_pages()),
        media_type="application/xml",
        headers={"Cache-Control": "public, max-age=3600"},
    )


@router.get("/robots.txt", response_class=PlainTextResponse, summary="robots.txt")
async def robots() -> str:
    return build_robots(settings.SITE_URL, store.list_pages())
