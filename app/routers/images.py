import logging
from typing import List

import httpx
from fastapi import APIRouter, HTTPException

from app.models.assets import ImageAsset
from app.models.request import ImageSearchRequest
from app.services.image_search import search_images

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/search-images", response_model=List[ImageAsset], summary="Search Pexels for content images")
async def search(body: ImageSearchRequest) -> List[ImageAsset]:
    logger.info("Image search request received", extra={"query": body.query, "count": body.count})
    try:
        return await search_images(body.query, body.count)
    except ValueError as exc:
        logger.warning("Image search rejected: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))
    except httpx.TimeoutException:
        logger.error("Timeout searching images for %r", body.query)
        raise HTTPException(status_code=504, detail="The image search provider timed out.")
    except httpx.HTTPStatusError as exc:
        logger.error("Image search HTTP error: %s", exc)
        raise HTTPException(
            status_code=502, detail=f"Image search returned HTTP {exc.response.status_code}."
        )
    except httpx.RequestError as exc:
        logger.error("Image search request error: %s", exc)
        raise HTTPException(status_code=502, detail=str(exc))
