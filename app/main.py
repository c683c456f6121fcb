import logging
import logging.config

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.config import logging_config, settings
from app.routers.assemble import limiter, router as assemble_router
from app.routers.images import router as images_router
from app.routers.pages import router as pages_router
from app.routers.seo import router as seo_router
from app.routers.view import router as view_router

logging.config.dictConfig(logging_config(settings.LOG_LEVEL))

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Landing Page Composer API",
    description="Assembles SEO landing pages from generated content and serves them from stored fields.",
    version="1.0.0",
)

# Rate-limiting state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception for %s", request.url)
    return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred."})


@app.get("/", summary="Health check")
async def root() -> dict:
    return {"message": "Hello from the landing page composer"}


app.include_router(assemble_router)
app.include_router(pages_router)
app.include_router(images_router)
app.include_router(seo_router)
# Catch-all /{handle}: must stay last
app.include_router(view_router)
