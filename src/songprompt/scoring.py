"""Heuristic quality scores for generated prompts and optimised lyrics.

Both scorers are pure functions of their arguments.

Prompt score (base 50, clamped to 0-100)
----------------------------------------

+----------------------------------------------+-----------+
| Signal                                       | Points    |
+==============================================+===========+
| exactly one genre / two or three / more      | +20/+15/+5|
+----------------------------------------------+-----------+
| style field within 120 characters            | +20 (else |
|                                              | -10)      |
+----------------------------------------------+-----------+
| any mood / any instrument                    | +10 each  |
+----------------------------------------------+-----------+
| each defined parameter dial                  | +3        |
+----------------------------------------------+-----------+
| all four dials set, total deviation from 5   | +10       |
| no more than 8                               |           |
+----------------------------------------------+-----------+

Lyrics score (base 100, floored at 0)
-------------------------------------

-20 each when character count, non-blank line count or section count falls
outside its recommended range; -15 without both a verse and a chorus; -2 per
warning (at most -10); +15 when any optimisation was applied.

Refinement score (base 100, clamped to 0-100)
---------------------------------------------

+20 when the style field shrank by more than 10%, a further +10 past 20%;
+10 when any optimisation was applied; plus 30% of the predicted success
score; -5 per warning (at most -30).
"""

from . import rules
from .entities import Lyrics
from .models import PromptRequest, SectionType
from .structure import LyricsStructure
from .style import StyleField


def score_prompt(request: PromptRequest, style_field: StyleField) -> int:
    score = 50

    genre_count = len(request.genres)
    if genre_count == 1:
        score += 20
    elif genre_count <= 3:
        score += 15
    else:
        score += 5

    if len(style_field.value) <= rules.STYLE_FIELD_MAX_LENGTH:
        score += 20
    else:
        score -= 10

    if request.moods:
        score += 10
    if request.instruments:
        score += 10

    defined = request.parameters.defined()
    score += 3 * len(defined)
    if len(defined) == 4 and is_balanced(defined.values()):
        score += 10

    return max(rules.QUALITY_SCORE_MIN, min(rules.QUALITY_SCORE_MAX, score))


def is_balanced(values) -> bool:
    deviation = sum(abs(v - rules.PARAMETER_NEUTRAL) for v in values)
    return deviation <= rules.BALANCED_DEVIATION_LIMIT


def score_lyrics(
    lyrics: Lyrics,
    structure: LyricsStructure,
    has_optimizations: bool,
    warning_count: int,
) -> int:
    score = 100
    stats = lyrics.stats()
    analysis = structure.analyze()

    if not _within(stats.total_characters, rules.LYRICS_CHARACTER_RANGE):
        score -= 20
    if not _within(stats.total_lines, rules.LYRICS_LINE_RANGE):
        score -= 20
    if not _within(analysis.total_sections, rules.LYRICS_SECTION_RANGE):
        score -= 20

    counts = analysis.section_type_counts
    if not (counts.get(SectionType.VERSE) and counts.get(SectionType.CHORUS)):
        score -= 15

    score -= min(warning_count * 2, 10)

    if has_optimizations:
        score += 15

    return round(max(score, rules.QUALITY_SCORE_MIN))


def score_refinement(
    original_length: int,
    optimized_length: int,
    optimization_count: int,
    warning_count: int,
    success_score: float,
) -> int:
    score = 100.0

    reduction = (original_length - optimized_length) / original_length if original_length else 0
    if reduction > 0.1:
        score += 20
    if reduction > 0.2:
        score += 10
    if optimization_count:
        score += 10

    score += success_score * 0.3
    score -= min(warning_count * 5, 30)

    return round(max(rules.QUALITY_SCORE_MIN, min(rules.QUALITY_SCORE_MAX, score)))


def quality_level(score: int) -> str:
    """Bucket a score into ``"high"``, ``"medium"`` or ``"low"``."""
    if score >= rules.QUALITY_HIGH_THRESHOLD:
        return "high"
    if score >= rules.QUALITY_MEDIUM_THRESHOLD:
        return "medium"
    return "low"


def _within(value: int, bounds: tuple[int, int]) -> bool:
    low, high = bounds
    return low <= value <= high
