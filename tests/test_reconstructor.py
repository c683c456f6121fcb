"""Tests for app.services.reconstructor."""

from app.models.assets import BannerAd, HeroSection, ImageAsset
from app.models.draft import PageDraft
from app.models.page import Page
from app.models.section import SectionInput
from app.services.assembler import assemble_document
from app.services.banners import place_banners
from app.services.composer import compose_sections
from app.services.images import assign_images, content_pool
from app.services.reconstructor import parse_sections, reconstruct_document, reconstruct_view
from app.services.renderer import render_body
from app.services.store import page_from_draft


def _draft(**kwargs) -> PageDraft:
    values = {
        "handle": "coffee-beans",
        "main_keyword": "coffee beans",
        "sections": [
            SectionInput(keyword="arabica beans", generated_text="Smooth and sweet."),
            SectionInput(keyword="robusta beans", generated_text="Strong & bitter."),
            SectionInput(keyword="roast levels", generated_text="Light, medium, dark.", heading_level="h3"),
            SectionInput(keyword="storage tips", generated_text=""),
        ],
        "images": [ImageAsset(url="/img/a.jpg"), ImageAsset(url="/img/b.jpg", sort_order=1)],
        "banner_ads": [BannerAd(title="Subscribe", description="Fresh beans monthly", cta="Join")],
        "hero_section": HeroSection(h1="Coffee Beans", slogan="Freshly roasted"),
        "faq_content": "<div class=\"faq\"><p>Q and A</p></div>",
        "faq_schema": '{"@type": "FAQPage", "mainEntity": []}',
        "meta_title": "Coffee Beans",
        "meta_description": "Everything about beans",
        "canonical": True,
    }
    values.update(kwargs)
    return PageDraft(**values)


def _stored(draft: PageDraft) -> Page:
    return page_from_draft("page-1", draft, assemble_document(draft).content)


def _merged_content(draft: PageDraft) -> str:
    """Render the body the way a page saved after merging would store it."""
    assignment = assign_images(compose_sections(draft.sections), content_pool(draft.images), draft.main_keyword)
    placements = place_banners(assignment.sections, draft.banner_ads, draft.banner_interval)
    body, _ = render_body(assignment.sections, placements, draft.main_keyword)
    return body


class TestParseSections:
    def test_pre_merge_rows(self):
        sections = parse_sections(assemble_document(_draft()).content)
        assert [s.keyword for s in sections] == ["Arabica Beans", "Robusta Beans", "Roast Levels", "Storage Tips"]
        assert [s.heading_level for s in sections] == ["h2", "h2", "h3", "h2"]
        assert sections[1].body_text == "Strong & bitter."
        assert sections[3].body_text == ""
        assert all(s.image is None for s in sections)

    def test_post_merge_rows_keep_images_and_drop_banners(self):
        sections = parse_sections(_merged_content(_draft()))
        assert len(sections) == 4
        assert [s.image.url for s in sections] == ["/img/a.jpg", "/img/b.jpg", "/img/a.jpg", "/img/b.jpg"]
        assert all("Subscribe" not in s.keyword for s in sections)

    def test_raw_headings_and_paragraphs(self):
        content = (
            "<p>Intro without a heading.</p>"
            "<h2>Grinding</h2><p>Use a burr grinder.</p><p>Grind fresh.</p>"
            '<h3>Water</h3><img src="/img/water.jpg" alt="water"><p>Filtered.</p>'
        )
        sections = parse_sections(content)
        assert [s.keyword for s in sections] == ["Grinding", "Water"]
        assert sections[0].body_text == "Use a burr grinder. Grind fresh."
        assert sections[0].image is None
        assert sections[1].image.url == "/img/water.jpg"
        assert [s.layout_side for s in sections] == ["left", "right"]

    def test_legacy_rows_without_content_row_class(self):
        content = (
            '<div class="row mb-4"><div class="col-lg-4"></div>'
            '<div class="col-lg-8"><h2>Old One</h2><p>Old text.</p></div></div>'
            '<div class="row mb-4"><div class="col-lg-8"><h2>Old Two</h2></div></div>'
        )
        sections = parse_sections(content)
        assert [s.keyword for s in sections] == ["Old One", "Old Two"]
        assert [s.sort_order for s in sections] == [0, 1]

    def test_empty_content(self):
        assert parse_sections("") == []
        assert parse_sections("   ") == []

    def test_rows_without_heading_ignored(self):
        content = '<div class="row mb-4 content-row"><p>No heading here.</p></div>'
        assert parse_sections(content) == []


class TestReconstructView:
    def test_matches_assembly(self):
        draft = _draft()
        assert reconstruct_view(_stored(draft)) == assemble_document(draft).html

    def test_matches_assembly_with_non_ascii_headings(self):
        sections = [
            SectionInput(keyword="ßtraße guide", generated_text="Cobbled streets."),
            SectionInput(keyword="ﬁeld trips", generated_text="Outdoor days."),
            SectionInput(keyword="crème brûlée", generated_text="Dessert."),
        ]
        draft = _draft(sections=sections)
        document = assemble_document(draft)
        assert "Sstraße Guide" in document.html
        assert reconstruct_view(page_from_draft("page-1", draft, document.content)) == document.html

    def test_post_merge_content_matches_pre_merge(self):
        draft = _draft()
        merged_page = page_from_draft("page-1", draft, _merged_content(draft))
        assert reconstruct_view(merged_page) == reconstruct_view(_stored(draft))

    def test_repeatable(self):
        page = _stored(_draft())
        assert reconstruct_view(page) == reconstruct_view(page)

    def test_page_not_modified(self):
        page = _stored(_draft())
        before = page.model_dump()
        reconstruct_view(page)
        assert page.model_dump() == before

    def test_banner_placed_from_page_fields(self):
        page = _stored(_draft(banner_ads=[]))
        assert "banner-ad-container" not in reconstruct_view(page)
        page = page.model_copy(update={"banner_ads": [BannerAd(title="New offer")]})
        assert reconstruct_view(page).count('class="banner-ad-container"') == 1

    def test_image_changes_apply_on_view(self):
        page = _stored(_draft())
        page = page.model_copy(update={"images": [ImageAsset(url="/img/new.jpg")]})
        html = reconstruct_view(page)
        assert html.count('src="/img/new.jpg"') == 4
        assert "/img/a.jpg" not in html

    def test_warnings_reported(self):
        page = _stored(_draft(faq_schema="not json"))
        document = reconstruct_document(page)
        assert "faq_schema_invalid" in [w.code for w in document.warnings]
        assert "application/ld+json" not in document.html
