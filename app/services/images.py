"""Content image assignment.

Images are handed out cyclically: section ``i`` receives ``pool[i % len(pool)]``.
The result depends only on the section index and the pool, so the authoring
pipeline and the view reconstruction always agree on which image goes where.
"""

import logging
from typing import Iterable, List, NamedTuple, Optional

from app.models.assets import CompositionWarning, ImageAsset
from app.models.section import ContentSection

logger = logging.getLogger(__name__)

_ALLOWED_PREFIXES = ("data:image/", "http://", "https://")


class ImageAssignment(NamedTuple):
    sections: List[ContentSection]
    excess_count: int
    warnings: List[CompositionWarning]


def is_valid_image_url(url: Optional[str]) -> bool:
    """Return True for data-URIs, absolute http(s) URLs and root-relative paths."""
    if not url or not url.strip():
        return False
    url = url.strip()
    if url.startswith("//"):
        # Protocol-relative URLs are neither absolute nor root-relative
        return False
    return url.lower().startswith(_ALLOWED_PREFIXES) or url.startswith("/")


def content_pool(images: Iterable[ImageAsset]) -> List[ImageAsset]:
    """Return the ``content`` images ordered by ``sort_order`` (stable)."""
    return sorted((img for img in images if img.type == "content"), key=lambda img: img.sort_order)


def excess_image_count(pool_size: int, h2_count: int) -> int:
    return max(0, pool_size - h2_count)


def with_alt_text(image: ImageAsset, main_keyword: str) -> ImageAsset:
    """Return *image* with its alt text defaulted to *main_keyword*."""
    if image.alt_text and image.alt_text.strip():
        return image
    return image.model_copy(update={"alt_text": main_keyword})


def assign_images(
    sections: List[ContentSection],
    pool: List[ImageAsset],
    main_keyword: str,
) -> ImageAssignment:
    """Attach one pool image to every section that does not carry one yet.

    Sections that already hold a valid image (parsed from stored, merged
    content) keep it.  Pool images whose URL is not usable are skipped: the
    section keeps its placeholder and one warning is recorded per bad pool
    entry.  Returns new section objects; *sections* is left untouched.
    """
    warnings: List[CompositionWarning] = []
    h2_count = sum(1 for s in sections if s.heading_level == "h2")
    excess = excess_image_count(len(pool), h2_count)

    if excess:
        warnings.append(
            CompositionWarning(
                code="excess_images",
                message=(
                    f"{len(pool)} content images for {h2_count} H2 sections; "
                    f"{excess} image(s) will not be shown."
                ),
            )
        )

    if not pool and sections:
        warnings.append(
            CompositionWarning(
                code="no_content_images",
                message="No content images available; image placeholders are left in place.",
            )
        )

    invalid = {i for i, img in enumerate(pool) if not is_valid_image_url(img.url)}
    for i in sorted(invalid):
        warnings.append(
            CompositionWarning(
                code="image_invalid_url",
                message=f"Content image {i + 1} has an unusable URL and is skipped.",
                index=i,
            )
        )

    assigned: List[ContentSection] = []
    for index, section in enumerate(sections):
        image = section.image
        if image is not None and not is_valid_image_url(image.url):
            warnings.append(
                CompositionWarning(
                    code="image_invalid_url",
                    message=f"Embedded image in section {index + 1} has an unusable URL and is dropped.",
                    index=index,
                )
            )
            image = None

        if image is None and pool:
            pool_index = index % len(pool)
            if pool_index not in invalid:
                image = pool[pool_index]

        if image is not None:
            image = with_alt_text(image, main_keyword)
        assigned.append(section.model_copy(update={"image": image}))

    for warning in warnings:
        logger.warning("Image assignment: %s", warning.message)

    return ImageAssignment(sections=assigned, excess_count=excess, warnings=warnings)
