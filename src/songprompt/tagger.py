"""Automatic structure-tag insertion for untagged lyrics."""

from dataclasses import dataclass, field

from .models import SectionType, StructureTemplate
from .parser import has_tags, split_paragraphs


@dataclass
class TagResult:
    text: str
    optimizations: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)


def auto_tag(text: str, template: StructureTemplate | None = None) -> TagResult:
    """Insert ``[Tag]`` markers in front of each paragraph of *text*.

    Text that already carries bracketed tags is returned unchanged.  With a
    *template*, paragraph ``i`` takes the template's ``i``-th section type and
    paragraphs past the end of the template are dropped.  Without one, a
    positional guess is made (see :func:`guess_section_type`).
    """
    if has_tags(text):
        return TagResult(text=text)

    paragraphs = split_paragraphs(text)

    if template is not None:
        count = min(len(paragraphs), len(template.sections))
        types = list(template.sections[:count])
        return TagResult(
            text=_join(types, paragraphs[:count]),
            optimizations=[f"Inserted tags based on the {template.name} template"],
        )

    n = len(paragraphs)
    types = [guess_section_type(i, n) for i in range(n)]
    return TagResult(
        text=_join(types, paragraphs),
        optimizations=["Analyzed lyrics structure and inserted tags automatically"],
        suggestions=["Review the inserted tags and adjust them by hand for a more accurate structure"],
    )


def guess_section_type(index: int, count: int) -> SectionType:
    """Guess the section type of paragraph *index* out of *count*.

    Rules are checked in order: first paragraph, last paragraph, odd index,
    the ~70% mark, everything else.
    """
    if index == 0:
        return SectionType.INTRO if count > 3 else SectionType.VERSE
    if index == count - 1 and count > 3:
        return SectionType.OUTRO
    if index % 2 == 1:
        return SectionType.CHORUS
    if index == int(count * 0.7) and count > 4:
        return SectionType.BRIDGE
    return SectionType.VERSE


def _join(types: list[SectionType], paragraphs: list[str]) -> str:
    return "\n\n".join(f"[{t.tag_name}]\n{p}" for t, p in zip(types, paragraphs))
