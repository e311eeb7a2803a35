"""Read-only metrics over a piece of lyrics text.

Used by the ``check`` command to describe lyrics before (or instead of)
running the optimisation pipeline.

Complexity score (0-100)
------------------------

====================  =====================================
sections              4+: 30, 2-3: 20, otherwise 10
non-blank lines       20+: 25, 10+: 20, 5+: 15, otherwise 10
structure tags        present: 25, absent: 10
average line length   50+: 20, 30+: 15, 15+: 10, otherwise 5
====================  =====================================
"""

import re
from dataclasses import dataclass

from . import rules
from .entities import Lyrics, LyricsStats
from .parser import parse_sections

_HIRAGANA_RE = re.compile(r"[\u3040-\u309f]")
_KATAKANA_RE = re.compile(r"[\u30a0-\u30ff]")
_KANJI_RE = re.compile(r"[\u4e00-\u9faf]")


@dataclass(frozen=True)
class LyricsAnalytics:
    language: str
    stats: LyricsStats
    word_count: int
    dominant_language_pattern: str
    complexity_score: int
    has_required_structure: bool

    @classmethod
    def analyze(cls, content: str, language: str = rules.DEFAULT_LANGUAGE) -> "LyricsAnalytics":
        lyrics = Lyrics(title="analysis", content=content, language=language)
        stats = lyrics.stats()
        types = [s.type.value for s in parse_sections(content)]
        return cls(
            language=language,
            stats=stats,
            word_count=word_count(content, language),
            dominant_language_pattern=language_pattern(content, language),
            complexity_score=complexity_score(stats),
            has_required_structure=(
                any("verse" in t for t in types) and any("chorus" in t for t in types)
            ),
        )

    def to_dict(self) -> dict:
        return {
            "language": self.language,
            "totalCharacters": self.stats.total_characters,
            "totalLines": self.stats.total_lines,
            "sectionCount": self.stats.section_count,
            "averageLineLength": self.stats.average_line_length,
            "hasStructureTags": self.stats.has_structure_tags,
            "wordCount": self.word_count,
            "dominantLanguagePattern": self.dominant_language_pattern,
            "complexityScore": self.complexity_score,
            "hasRequiredStructure": self.has_required_structure,
        }


def word_count(content: str, language: str) -> int:
    # Japanese has no word separators, so estimate from the character count.
    if language == "ja":
        return round(len(content) * rules.JAPANESE_WORDS_PER_CHARACTER)
    return len(content.split())


def language_pattern(content: str, language: str) -> str:
    """Name the script mix of *content*.

    Only Japanese is inspected; every other language is ``"alphabetic"``.
    """
    if language != "ja":
        return "alphabetic"

    hiragana = len(_HIRAGANA_RE.findall(content))
    katakana = len(_KATAKANA_RE.findall(content))
    kanji = len(_KANJI_RE.findall(content))
    total = hiragana + katakana + kanji
    if total == 0:
        return "mixed"
    if hiragana / total > 0.5:
        return "hiragana-dominant"
    if katakana / total > 0.3:
        return "katakana-heavy"
    if kanji / total > 0.3:
        return "kanji-heavy"
    return "balanced"


def complexity_score(stats: LyricsStats) -> int:
    score = 0

    if stats.section_count >= 4:
        score += 30
    elif stats.section_count >= 2:
        score += 20
    else:
        score += 10

    if stats.total_lines >= 20:
        score += 25
    elif stats.total_lines >= 10:
        score += 20
    elif stats.total_lines >= 5:
        score += 15
    else:
        score += 10

    score += 25 if stats.has_structure_tags else 10

    if stats.average_line_length >= 50:
        score += 20
    elif stats.average_line_length >= 30:
        score += 15
    elif stats.average_line_length >= 15:
        score += 10
    else:
        score += 5

    return min(rules.QUALITY_SCORE_MAX, score)
