"""Built-in prompt optimizers.

:class:`BasicPromptOptimizer` only reports; it is the default after a prompt
is generated.  :class:`StylePromptOptimizer` rewrites the style field to a
target length and predicts how well the result will generate.

Style rewriting stops as soon as the text fits:

  1. drop repeated words (only when there are any)
  2. drop filler words ("very", "really", ...)
  3. swap long words for shorter synonyms while still over the target
  4. cut the tail and mark it with "..."
"""

import re

from .. import rules
from ..entities import Prompt
from ..models import PromptRequest
from ..style import StyleField
from .base import OptimizationNotes, PromptOptimizer, SuccessPrediction

_WORD_SPLIT_RE = re.compile(r"[,\s]+")
_PLAIN_STYLE_RE = re.compile(r"^[a-zA-Z0-9\s,.-]+$")


class BasicPromptOptimizer(PromptOptimizer):
    """Fallback used when no prompt optimizer is injected."""

    def optimize(self, prompt: Prompt, request: PromptRequest | None = None) -> OptimizationNotes:
        notes = OptimizationNotes(optimizations=["Applied basic optimization"])
        if not prompt.style_field.is_recommended_complexity():
            notes.warnings.append(
                f"Style field has {prompt.style_field.element_count} elements; "
                f"{rules.STYLE_FIELD_MIN_ELEMENTS} to {rules.STYLE_FIELD_MAX_ELEMENTS} usually work best"
            )
        return notes


class StylePromptOptimizer(PromptOptimizer):
    """Shortens the style field to *target_length* and reviews the prompt."""

    def __init__(self, target_length: int = rules.DEFAULT_TARGET_LENGTH):
        self.target_length = target_length

    def optimize(self, prompt: Prompt, request: PromptRequest | None = None) -> OptimizationNotes:
        notes = OptimizationNotes()

        for first, second, reason, suggestion in genre_conflicts(prompt.genres):
            notes.warnings.append(f"Genre conflict: {first} and {second} ({reason})")
            notes.suggestions.append(suggestion)

        value, changes = shorten_style(prompt.style_field.value, self.target_length)
        notes.optimizations.extend(changes)
        notes.style_field = StyleField(value) if changes else prompt.style_field

        warnings, suggestions = check_prompt_tags(prompt)
        notes.warnings.extend(warnings)
        notes.suggestions.extend(suggestions)

        notes.success = predict_success(prompt.genres, notes.style_field)
        notes.suggestions.extend(notes.success.improvements)
        return notes

    def __repr__(self) -> str:
        return f"StylePromptOptimizer(target_length={self.target_length})"


# ---------------------------------------------------------------------------
# Genre conflicts
# ---------------------------------------------------------------------------


def genre_conflicts(genres: list[str]) -> list[tuple[str, str, str, str]]:
    """Return ``(genre, clashing genre, reason, suggestion)`` per clashing pair.

    Each pair is reported once, led by the genre whose table entry names the
    other.
    """
    found = []
    for i, first in enumerate(genres):
        for second in genres[i + 1:]:
            for a, b in ((first, second), (second, first)):
                entry = rules.GENRE_CONFLICTS.get(a)
                if entry and b in entry[0]:
                    found.append((a, b, entry[1], entry[2]))
                    break
    return found


# ---------------------------------------------------------------------------
# Style shortening
# ---------------------------------------------------------------------------


def shorten_style(value: str, target_length: int) -> tuple[str, list[str]]:
    """Return *value* fitted to *target_length* plus a note per change made."""
    changes: list[str] = []
    if len(value) <= target_length:
        return value, changes

    words = [w for w in _WORD_SPLIT_RE.split(value) if w]
    unique = list(dict.fromkeys(words))
    if len(unique) < len(words):
        value = rules.STYLE_FIELD_SEPARATOR.join(unique)
        changes.append(f"Removed {len(words) - len(unique)} repeated word(s)")

    for term in rules.FILLER_WORDS:
        pattern = re.compile(rf"\b{term}\s+", re.IGNORECASE)
        if pattern.search(value):
            value = pattern.sub("", value)
            changes.append(f'Removed filler word "{term}"')

    for long, short in rules.STYLE_SYNONYMS.items():
        if len(value) <= target_length:
            break
        pattern = re.compile(rf"\b{long}\b", re.IGNORECASE)
        if pattern.search(value):
            value = pattern.sub(short, value)
            changes.append(f'Shortened "{long}" to "{short}"')

    if len(value) > target_length:
        cut = len(value) - target_length + 3
        value = value[: target_length - 3] + "..."
        changes.append(f"Cut the end to fit the target length ({cut} characters removed)")

    return value, changes


# ---------------------------------------------------------------------------
# Tag checks
# ---------------------------------------------------------------------------


def check_prompt_tags(prompt: Prompt) -> tuple[list[str], list[str]]:
    """Flag crowded genre lists, crowded style fields and copyright terms."""
    warnings: list[str] = []
    suggestions: list[str] = []

    if len(prompt.genres) > rules.MAX_PROMPT_GENRES:
        warnings.append(f"Too many genres ({len(prompt.genres)})")
        suggestions.append(f"Keep to 1-{rules.MAX_PROMPT_GENRES} genres")

    element_count = len(prompt.style_field.value.split(","))
    if element_count > rules.MAX_STYLE_ELEMENTS:
        warnings.append(f"Too many style elements ({element_count})")
        suggestions.append(f"Keep the style to {rules.MAX_STYLE_ELEMENTS} elements or fewer")

    lowered = prompt.style_field.value.lower()
    for term in rules.COPYRIGHT_TERMS:
        if term in lowered:
            warnings.append(f'Possible copyright issue: "{term}"')
            suggestions.append("Avoid naming specific artists or songs")

    return warnings, suggestions


# ---------------------------------------------------------------------------
# Success prediction
# ---------------------------------------------------------------------------


def predict_success(genres: list[str], style_field: StyleField) -> SuccessPrediction:
    genre_score = genre_compatibility(len(genres))
    cohesion = style_cohesion(style_field.value)
    length_score = length_optimality(len(style_field))
    technical = technical_correctness(style_field.value)

    improvements: list[str] = []
    if genre_score < 70:
        improvements.append("Rethink the genre combination")
    if cohesion < 70:
        improvements.append("Make the style elements more consistent with each other")
    if length_score < 80:
        improvements.append("Adjust the length of the style field")
    if technical < 80:
        improvements.append("Check the style field's spelling and punctuation")

    return SuccessPrediction(
        overall_score=(genre_score + cohesion + length_score + technical) / 4,
        genre_compatibility=genre_score,
        style_cohesion=cohesion,
        length_optimality=length_score,
        technical_correctness=technical,
        improvements=improvements,
    )


def genre_compatibility(genre_count: int) -> int:
    if genre_count == 1:
        return 100
    if genre_count <= 3:
        return 85
    if genre_count <= 5:
        return 65
    return 40


def style_cohesion(value: str) -> float:
    """Share of elements (0-100) backed by at least one related element."""
    elements = [e.strip().lower() for e in value.split(",")]
    score = 0.0
    for group in rules.COHESION_GROUPS:
        matching = [e for e in elements if any(keyword in e for keyword in group)]
        if len(matching) > 1:
            score += len(matching) / len(elements)
    return min(100.0, score * 100)


def length_optimality(length: int) -> int:
    for low, high, score in rules.LENGTH_OPTIMALITY_BANDS:
        if low <= length <= high:
            return score
    return rules.LENGTH_OPTIMALITY_FLOOR


def technical_correctness(value: str) -> int:
    score = 100
    if "  " in value:
        score -= 5
    if value.startswith(",") or value.endswith(","):
        score -= 10
    if ",," in value:
        score -= 10
    if not _PLAIN_STYLE_RE.match(value):
        score -= 15
    # Words in mixed case, e.g. "Rock" or "HipHop".
    mixed_case = [
        w for w in _WORD_SPLIT_RE.split(value)
        if len(w) > 1 and w != w.lower() and w != w.upper()
    ]
    score -= 5 * len(mixed_case)
    return max(0, score)
