"""Section composition: generated prose → ordered, alternating content sections."""

from typing import Iterable, List

from app.models.section import ContentSection, LayoutSide, SectionInput
from app.services.normalizer import collapse_whitespace
from app.services.sanitizer import strip_markup


def layout_side_for(sort_order: int) -> LayoutSide:
    """Even positions put the image on the left, odd positions on the right."""
    return "left" if sort_order % 2 == 0 else "right"


def compose_sections(inputs: Iterable[SectionInput]) -> List[ContentSection]:
    """Turn generator output into :class:`ContentSection` records.

    Every input entry yields exactly one section, in input order.  Empty
    generated text is kept as an empty body; the renderer then emits the
    heading alone.
    """
    sections: List[ContentSection] = []
    for index, item in enumerate(inputs):
        sections.append(
            ContentSection(
                keyword=collapse_whitespace(item.keyword),
                heading_level=item.heading_level,
                body_text=collapse_whitespace(strip_markup(item.generated_text)),
                layout_side=layout_side_for(index),
                sort_order=index,
            )
        )
    return sections


def renumber(sections: Iterable[ContentSection]) -> List[ContentSection]:
    """Return copies of *sections* with contiguous sort orders and layout sides.

    Used when sections come from parsed stored content rather than from the
    composer, so the same invariants hold on both paths.
    """
    return [
        section.model_copy(update={"sort_order": index, "layout_side": layout_side_for(index)})
        for index, section in enumerate(sections)
    ]
