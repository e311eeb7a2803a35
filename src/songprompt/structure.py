"""Lyrics structure value object and structural analysis.

A :class:`LyricsStructure` is an immutable, ordered list of sections plus the
template it was built against (or matched to).  Editing operations return a
new instance.

Two ways in:

* :meth:`LyricsStructure.create`: from an explicit section list, validated.
* :meth:`LyricsStructure.from_text`: parsed from tagged text, not validated,
  so untagged text yields an empty structure rather than an error.
"""

from collections import Counter
from dataclasses import dataclass, field

from . import rules
from .exceptions import StructureError
from .models import Section, SectionType, StructureTemplate
from .parser import parse_sections
from .templates import BUILTIN_TEMPLATES, get_template


@dataclass(frozen=True)
class StructureAnalysis:
    total_sections: int
    section_type_counts: dict[SectionType, int]
    estimated_duration_seconds: int
    matched_template: StructureTemplate | None = None
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "totalSections": self.total_sections,
            "sectionTypes": {t.value: n for t, n in self.section_type_counts.items()},
            "estimatedDuration": self.estimated_duration_seconds,
            "template": self.matched_template.to_dict() if self.matched_template else None,
            "warnings": list(self.warnings),
        }


class LyricsStructure:
    """Ordered sections of a song, optionally tied to a template."""

    __slots__ = ("_sections", "_template")

    def __init__(self, sections, template: StructureTemplate | None = None):
        self._sections: tuple[Section, ...] = tuple(sections)
        self._template = template

    # --- Construction ---

    @classmethod
    def create(cls, sections, template: StructureTemplate | None = None) -> "LyricsStructure":
        """Build a structure from *sections*, enforcing the structure invariants.

        Raises StructureError if the list is empty, has neither a verse nor a
        chorus, or contains a section whose line range is inverted or overlaps
        the previous section.
        """
        sections = tuple(sections)
        _validate(sections)
        return cls(sections, template)

    @classmethod
    def from_text(cls, text: str) -> "LyricsStructure":
        sections = parse_sections(text)
        return cls(sections, detect_template([s.type for s in sections]))

    @classmethod
    def from_dict(cls, data: dict) -> "LyricsStructure":
        """Rebuild a structure from the output of :meth:`to_dict`."""
        sections = [Section.from_dict(item) for item in data.get("sections", [])]
        return cls(sections, _template_from_dict(data.get("template")))

    # --- Accessors ---

    @property
    def sections(self) -> tuple[Section, ...]:
        return self._sections

    @property
    def template(self) -> StructureTemplate | None:
        return self._template

    def __len__(self) -> int:
        return len(self._sections)

    def __eq__(self, other) -> bool:
        if not isinstance(other, LyricsStructure):
            return NotImplemented
        return [(s.type, s.content) for s in self._sections] == [
            (s.type, s.content) for s in other._sections
        ]

    def __hash__(self) -> int:
        return hash(tuple((s.type, s.content) for s in self._sections))

    def __repr__(self) -> str:
        kinds = ", ".join(s.type.value for s in self._sections)
        return f"LyricsStructure([{kinds}])"

    # --- Editing ---

    def add_section(self, section: Section) -> "LyricsStructure":
        return LyricsStructure.create([*self._sections, section], self._template)

    def remove_section(self, index: int) -> "LyricsStructure":
        self._check_index(index)
        remaining = [s for i, s in enumerate(self._sections) if i != index]
        return LyricsStructure.create(remaining, self._template)

    def reorder_section(self, from_index: int, to_index: int) -> "LyricsStructure":
        """Move one section and renumber every section's lines from 1."""
        self._check_index(from_index)
        self._check_index(to_index)

        reordered = list(self._sections)
        reordered.insert(to_index, reordered.pop(from_index))

        renumbered = []
        line = 1
        for section in reordered:
            end = line + len(section.content.split("\n")) - 1
            renumbered.append(section.model_copy(update={"start_line": line, "end_line": end}))
            line = end + 1
        return LyricsStructure(renumbered, self._template)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._sections):
            raise StructureError(f"Invalid section index: {index}")

    # --- Rendering ---

    def format_with_tags(self) -> str:
        return "\n\n".join(f"[{s.type.tag_name}]\n{s.content}" for s in self._sections)

    def format_plain_text(self) -> str:
        return "\n\n".join(s.content for s in self._sections)

    def to_dict(self) -> dict:
        return {
            "sections": [s.to_dict() for s in self._sections],
            "template": self._template.to_dict() if self._template else None,
        }

    # --- Analysis ---

    def analyze(self) -> StructureAnalysis:
        types = [s.type for s in self._sections]
        duration = sum(
            rules.SECTION_DURATIONS.get(t.value, rules.DEFAULT_SECTION_DURATION) for t in types
        )
        return StructureAnalysis(
            total_sections=len(types),
            section_type_counts=dict(Counter(types)),
            estimated_duration_seconds=duration,
            matched_template=self._template,
            warnings=structure_warnings(types),
        )


# ---------------------------------------------------------------------------
# Template matching
# ---------------------------------------------------------------------------


def similarity(template: tuple[SectionType, ...], actual: list[SectionType]) -> float:
    """Fraction of positions where both sequences hold the same type.

    The denominator is the longer sequence's length, so trailing extras count
    against the match.  Two empty sequences are identical (1.0).
    """
    longest = max(len(template), len(actual))
    if longest == 0:
        return 1.0
    matches = sum(1 for a, b in zip(template, actual) if a == b)
    return matches / longest


def detect_template(types: list[SectionType]) -> StructureTemplate | None:
    """Return the built-in template matching *types*, exactly or at >= 80%."""
    for template in BUILTIN_TEMPLATES:
        if list(template.sections) == list(types):
            return template
    for template in BUILTIN_TEMPLATES:
        if similarity(template.sections, types) >= rules.TEMPLATE_SIMILARITY_THRESHOLD:
            return template
    return None


# ---------------------------------------------------------------------------
# Warnings and validation
# ---------------------------------------------------------------------------


def structure_warnings(types: list[SectionType]) -> list[str]:
    warnings: list[str] = []
    if SectionType.CHORUS not in types and SectionType.HOOK not in types:
        warnings.append("No chorus or hook section")
    if len(types) > rules.MAX_RECOMMENDED_SECTIONS:
        warnings.append(
            f"Too many sections (recommended: {rules.MAX_RECOMMENDED_SECTIONS} or fewer)"
        )
    if len(types) < rules.MIN_RECOMMENDED_SECTIONS:
        warnings.append(
            f"Too few sections (recommended: {rules.MIN_RECOMMENDED_SECTIONS} or more)"
        )
    for previous, current in zip(types, types[1:]):
        if previous == current == SectionType.VERSE:
            warnings.append("Consecutive verse sections")
            break
    return warnings


def _validate(sections: tuple[Section, ...]) -> None:
    if not sections:
        raise StructureError("A lyrics structure needs at least one section")

    types = {s.type for s in sections}
    if SectionType.VERSE not in types and SectionType.CHORUS not in types:
        raise StructureError("A lyrics structure needs a verse or a chorus")

    for i, section in enumerate(sections):
        if section.start_line > section.end_line:
            raise StructureError(f"Section {section.type.value} has an invalid line range")
        if i > 0 and section.start_line <= sections[i - 1].end_line:
            raise StructureError(f"Section {section.type.value} overlaps the previous section")


def _template_from_dict(data: dict | None) -> StructureTemplate | None:
    if not data:
        return None
    builtin = get_template(data.get("name", ""))
    if builtin is not None:
        return builtin
    return StructureTemplate.from_dict(data)
