"""Tests for app.services.banners.place_banners."""

import pytest

from app.models.assets import BannerAd
from app.models.section import SectionInput
from app.services.banners import place_banners
from app.services.composer import compose_sections


def _sections(count: int) -> list:
    return compose_sections([SectionInput(keyword=f"k{i}", generated_text="t") for i in range(count)])


def _banners(count: int) -> list:
    return [BannerAd(title=f"Banner {i}", description="d", cta="Go") for i in range(count)]


class TestPlaceBanners:
    def test_single_banner_seven_sections(self):
        placements = place_banners(_sections(7), _banners(1), interval=2)
        assert [p.after_section for p in placements] == [2]

    def test_banner_after_every_interval(self):
        placements = place_banners(_sections(6), _banners(3), interval=2)
        assert [p.after_section for p in placements] == [2, 4, 6]
        assert [p.banner_index for p in placements] == [0, 1, 2]

    def test_banners_consumed_in_order(self):
        banners = _banners(2)
        placements = place_banners(_sections(4), banners, interval=2)
        assert [p.banner for p in placements] == banners

    def test_never_more_than_interval_allows(self):
        placements = place_banners(_sections(5), _banners(10), interval=2)
        assert len(placements) == 2

    def test_no_banners(self):
        assert place_banners(_sections(4), [], interval=2) == []

    def test_no_sections(self):
        assert place_banners([], _banners(2), interval=2) == []

    def test_interval_three(self):
        placements = place_banners(_sections(9), _banners(5), interval=3)
        assert [p.after_section for p in placements] == [3, 6, 9]

    def test_interval_one(self):
        placements = place_banners(_sections(3), _banners(2), interval=1)
        assert [p.after_section for p in placements] == [1, 2]

    def test_default_interval_is_two(self):
        placements = place_banners(_sections(4), _banners(2))
        assert [p.after_section for p in placements] == [2, 4]

    @pytest.mark.parametrize("sections,banners,interval", [(7, 1, 2), (10, 3, 3), (1, 4, 1), (0, 2, 2), (8, 8, 2)])
    def test_bound(self, sections, banners, interval):
        placements = place_banners(_sections(sections), _banners(banners), interval=interval)
        assert len(placements) == min(banners, sections // interval)

    def test_invalid_interval(self):
        with pytest.raises(ValueError):
            place_banners(_sections(2), _banners(1), interval=0)
