"""Banner ad placement between content sections."""

from typing import List, NamedTuple

from app.models.assets import BannerAd
from app.models.section import ContentSection

DEFAULT_INTERVAL = 2


class BannerPlacement(NamedTuple):
    after_section: int  # 1-based position of the section the banner follows
    banner_index: int
    banner: BannerAd


def place_banners(
    sections: List[ContentSection],
    banner_ads: List[BannerAd],
    interval: int = DEFAULT_INTERVAL,
) -> List[BannerPlacement]:
    """Return the banner insertion points for *sections*.

    A banner follows every *interval*-th section until the banner list runs
    out.  Banners are never repeated and leftover sections simply render
    without one, so the number of placements is at most
    ``min(len(banner_ads), len(sections) // interval)``.
    """
    if interval < 1:
        raise ValueError("Banner interval must be at least 1.")

    placements: List[BannerPlacement] = []
    banner_index = 0
    for position in range(1, len(sections) + 1):
        if banner_index >= len(banner_ads):
            break
        if position % interval == 0:
            placements.append(BannerPlacement(position, banner_index, banner_ads[banner_index]))
            banner_index += 1
    return placements
