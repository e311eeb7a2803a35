import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from . import rules
from .parser import parse_sections
from .style import StyleField


_KANJI_RUN_RE = re.compile(rf"[\u4e00-\u9faf]{{{rules.KANJI_RUN_LENGTH},}}")
_BLANK_RUN_RE = re.compile(r"\n\n+")


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class LyricsStats:
    total_characters: int
    total_lines: int  # non-blank lines only
    section_count: int
    average_line_length: int
    has_structure_tags: bool


@dataclass
class LyricsValidation:
    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass
class Prompt:
    """A generated style prompt, ready to be saved."""

    title: str
    genres: list[str]
    language: str
    style_field: StyleField
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=_now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "genres": list(self.genres),
            "language": self.language,
            "styleField": self.style_field.value,
            "createdAt": self.created_at.isoformat(),
        }


@dataclass
class Lyrics:
    """Optimised lyrics text, ready to be saved."""

    title: str
    content: str
    language: str
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=_now)

    def stats(self) -> LyricsStats:
        lines = [line for line in self.content.split("\n") if line.strip()]
        sections = parse_sections(self.content)
        average = round(sum(len(line) for line in lines) / len(lines)) if lines else 0
        return LyricsStats(
            total_characters=len(self.content),
            total_lines=len(lines),
            section_count=len(sections),
            average_line_length=average,
            has_structure_tags=bool(sections),
        )

    def validate(self) -> LyricsValidation:
        """Check the lyrics against the platform's hard and soft limits."""
        stats = self.stats()
        errors: list[str] = []
        warnings: list[str] = []

        if stats.total_characters > rules.LYRICS_HARD_LIMIT:
            errors.append(f"Lyrics exceed {rules.LYRICS_HARD_LIMIT:,} characters")
        if not stats.has_structure_tags:
            warnings.append("Structure tags such as [Verse] and [Chorus] are recommended")
        if self.language == "ja" and _KANJI_RUN_RE.search(self.content):
            warnings.append("Long runs of kanji may be mispronounced")
        if stats.average_line_length > rules.LONG_LINE_LENGTH:
            warnings.append("Lines may be too long; consider splitting them")

        return LyricsValidation(is_valid=not errors, errors=errors, warnings=warnings)

    def optimization_suggestions(self) -> list[str]:
        stats = self.stats()
        suggestions: list[str] = []
        if not stats.has_structure_tags:
            suggestions.append("Add [Verse] and [Chorus] tags to make the section structure clear")
        if stats.total_characters > rules.LYRICS_SOFT_LIMIT:
            suggestions.append("The lyrics may be too long; focus on the most important parts")
        if stats.average_line_length > rules.LONG_LINE_LENGTH:
            suggestions.append("Shorter lines are easier to sing")
        return suggestions or ["The lyrics are already well optimized"]

    def format_for_platform(self) -> str:
        """Return the content with blank-line runs collapsed and edges trimmed.

        Text over the hard limit is cut back to whole sections; when not even
        the first section fits, the text is cut at the limit.
        """
        formatted = _BLANK_RUN_RE.sub("\n\n", self.content).strip()
        if len(formatted) <= rules.LYRICS_HARD_LIMIT:
            return formatted

        kept = ""
        for section in parse_sections(self.content):
            block = f"[{section.type.tag_name}]\n{section.content}\n\n"
            if len(kept) + len(block) > rules.LYRICS_HARD_LIMIT:
                break
            kept += block
        return kept.strip() or formatted[: rules.LYRICS_HARD_LIMIT]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "language": self.language,
            "createdAt": self.created_at.isoformat(),
        }
