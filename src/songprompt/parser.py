"""Lyrics section parsing.

Turns raw lyrics text into an ordered list of
:class:`~songprompt.models.Section` objects:

  1. is_tag_line(): does the whole trimmed line read ``[label]``?
  2. normalize_section_type(): map a tag label onto a :class:`SectionType`
  3. parse_sections(): raw text → list[Section]
  4. split_paragraphs(): blank-line delimited blocks, for untagged text

Text without any tag lines parses to an empty list.  That is the "no
structure detected" signal, not an error: callers treat it as untagged text.
"""

import re

from . import rules
from .models import Section, SectionType

# ---------------------------------------------------------------------------
# Regexes
# ---------------------------------------------------------------------------

# A whole line that is a single bracketed label: [Verse 1], [Chorus]
TAG_LINE_RE = re.compile(r"^\[([^\]]+)\]$")

_WHITESPACE_RUN_RE = re.compile(r"\s+")


# ---------------------------------------------------------------------------
# Line helpers
# ---------------------------------------------------------------------------


def is_tag_line(line: str) -> bool:
    return bool(TAG_LINE_RE.match(line.strip()))


def has_tags(text: str) -> bool:
    """Return True if *text* contains an opening and a closing bracket.

    Looser than :func:`is_tag_line`: any bracketed text at all counts, and
    automatic tagging then leaves the text alone.
    """
    return "[" in text and "]" in text


def normalize_section_type(label: str) -> SectionType:
    """Map a tag label such as ``"Verse 2"`` or ``"Refrain"`` to a section type.

    The label is lower-cased and whitespace runs become hyphens before the
    synonym lookup.  Unknown labels fall back to a verse.
    """
    key = _WHITESPACE_RUN_RE.sub("-", label.strip().lower())
    return SectionType(rules.SECTION_SYNONYMS.get(key, rules.DEFAULT_SECTION_TYPE))


# ---------------------------------------------------------------------------
# Full parser
# ---------------------------------------------------------------------------


def parse_sections(text: str) -> list[Section]:
    """Parse tagged lyrics into sections.

    Algorithm
    ---------
    1. Split *text* on ``\\n``; line numbers start at 1.
    2. A tag line closes the open section (its end line is the line before
       the tag) and opens a new one starting at the tag line.
    3. Non-blank lines are trimmed and appended to the open section.  Lines
       before the first tag belong to no section and are dropped.
    4. At end of input the open section ends on the last line.
    5. Sections without content are not emitted.

    Returns:
        Sections in increasing, non-overlapping line order.
    """
    lines = text.split("\n")
    sections: list[Section] = []

    current_type: SectionType | None = None
    current_start = 0
    current_lines: list[str] = []

    def close(end_line: int) -> None:
        if current_type is not None and current_lines:
            sections.append(
                Section(
                    type=current_type,
                    content="\n".join(current_lines).strip(),
                    start_line=current_start,
                    end_line=end_line,
                )
            )

    for number, line in enumerate(lines, start=1):
        stripped = line.strip()
        m = TAG_LINE_RE.match(stripped)
        if m:
            close(number - 1)
            current_type = normalize_section_type(m.group(1))
            current_start = number
            current_lines = []
            continue
        if current_type is not None and stripped:
            current_lines.append(stripped)

    close(len(lines))
    return sections


def split_paragraphs(text: str) -> list[str]:
    """Split *text* into paragraphs: maximal runs of non-blank lines.

    Each line is trimmed; paragraphs are returned newline-joined.
    """
    paragraphs: list[str] = []
    current: list[str] = []
    for line in text.split("\n"):
        stripped = line.strip()
        if stripped:
            current.append(stripped)
        elif current:
            paragraphs.append("\n".join(current))
            current = []
    if current:
        paragraphs.append("\n".join(current))
    return paragraphs
