"""Style field value object and the builder that assembles it from selections.

The style field is the single comma-separated keyword string sent to the
generation service, e.g.::

    Rock, melancholic, electric guitar, high energy, intense, 90s grunge
"""

from dataclasses import dataclass, field

from . import rules
from .exceptions import StyleFieldError
from .models import MusicParameters, PromptRequest

_GENRES = frozenset(g.lower() for g in rules.SUPPORTED_GENRES)


@dataclass(frozen=True)
class StyleStats:
    length: int
    element_count: int
    average_element_length: int
    genre_count: int
    instrument_count: int
    mood_count: int


@dataclass
class StructuredStyle:
    genres: list[str] = field(default_factory=list)
    instruments: list[str] = field(default_factory=list)
    moods: list[str] = field(default_factory=list)
    other: list[str] = field(default_factory=list)


class StyleField:
    """A trimmed keyword string between 1 and 120 characters long."""

    __slots__ = ("_value",)

    def __init__(self, value: str):
        value = value.strip()
        if len(value) < rules.STYLE_FIELD_MIN_LENGTH:
            raise StyleFieldError(value, "Style field cannot be empty")
        if len(value) > rules.STYLE_FIELD_MAX_LENGTH:
            raise StyleFieldError(
                value,
                f"Style field must be {rules.STYLE_FIELD_MAX_LENGTH} characters or fewer "
                f"(got {len(value)})",
            )
        self._value = value

    @property
    def value(self) -> str:
        return self._value

    def __str__(self) -> str:
        return self._value

    def __len__(self) -> int:
        return len(self._value)

    def __repr__(self) -> str:
        return f"StyleField({self._value!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, StyleField):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def elements(self) -> list[str]:
        """Split into trimmed, non-empty comma-separated elements."""
        return [e.strip() for e in self._value.split(",") if e.strip()]

    @property
    def element_count(self) -> int:
        return len(self.elements())

    def is_recommended_complexity(self) -> bool:
        return rules.STYLE_FIELD_MIN_ELEMENTS <= self.element_count <= rules.STYLE_FIELD_MAX_ELEMENTS

    def remove_duplicates(self) -> "StyleField":
        """Return a copy with repeated elements dropped (first occurrence wins)."""
        unique = list(dict.fromkeys(self.elements()))
        return StyleField(rules.STYLE_FIELD_SEPARATOR.join(unique))

    # --- Element categories ---

    def extract_genres(self) -> list[str]:
        """Elements naming a known genre, or containing a core genre word."""
        found = []
        for element in self.elements():
            lowered = element.lower()
            if lowered in _GENRES or any(word in lowered for word in rules.GENRE_WORDS):
                found.append(element)
        return found

    def extract_instruments(self) -> list[str]:
        return [e for e in self.elements() if _mentions(e, rules.KNOWN_INSTRUMENTS)]

    def extract_moods(self) -> list[str]:
        return [e for e in self.elements() if _mentions(e, rules.KNOWN_MOODS)]

    def structured(self) -> StructuredStyle:
        """Sort elements into categories.

        An element may land in more than one category; ``other`` holds the
        elements that matched none.
        """
        genres = self.extract_genres()
        instruments = self.extract_instruments()
        moods = self.extract_moods()
        categorized = {*genres, *instruments, *moods}
        other = [e for e in self.elements() if e not in categorized]
        return StructuredStyle(genres=genres, instruments=instruments, moods=moods, other=other)

    def stats(self) -> StyleStats:
        elements = self.elements()
        structured = self.structured()
        average = round(sum(len(e) for e in elements) / len(elements)) if elements else 0
        return StyleStats(
            length=len(self._value),
            element_count=len(elements),
            average_element_length=average,
            genre_count=len(structured.genres),
            instrument_count=len(structured.instruments),
            mood_count=len(structured.moods),
        )

    # --- Diagnostics ---

    def validation_issues(self) -> list[str]:
        stats = self.stats()
        issues: list[str] = []
        if stats.element_count < rules.STYLE_FIELD_MIN_ELEMENTS:
            issues.append(
                f"Too few style elements (at least {rules.STYLE_FIELD_MIN_ELEMENTS} recommended)"
            )
        if stats.element_count > rules.STYLE_FIELD_MAX_ELEMENTS:
            issues.append(
                f"Too many style elements (at most {rules.STYLE_FIELD_MAX_ELEMENTS} recommended)"
            )
        if stats.genre_count == 0:
            issues.append("No genre element")
        return issues

    def optimization_suggestions(self) -> list[str]:
        if not self.validation_issues():
            return ["The style field is already well optimized"]

        stats = self.stats()
        suggestions: list[str] = []
        if stats.element_count < rules.STYLE_FIELD_MIN_ELEMENTS:
            suggestions.append("Add mood or instrument elements for a more detailed style")
        if stats.element_count > rules.STYLE_FIELD_MAX_ELEMENTS:
            suggestions.append("Narrow the style down to its most important elements")
        if stats.genre_count == 0:
            suggestions.append("Add a genre element to set the overall direction")
        if stats.genre_count > rules.STYLE_FIELD_MAX_GENRE_ELEMENTS:
            suggestions.append(
                f"Keep genre elements to {rules.STYLE_FIELD_MAX_GENRE_ELEMENTS} or fewer"
            )
        return suggestions


def _mentions(element: str, keywords) -> bool:
    lowered = element.lower()
    return any(keyword in lowered for keyword in keywords)


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


def parameter_keywords(parameters: MusicParameters) -> list[str]:
    """Translate the defined dials into style keywords.

    Dials are evaluated independently in the order energy, complexity,
    tempo, emotional intensity.
    """
    keywords: list[str] = []
    for name, value in parameters.defined().items():
        for threshold, words in rules.PARAMETER_KEYWORDS[name]:
            if value >= threshold:
                keywords.extend(words)
                break
    return keywords


def build_style_field(request: PromptRequest) -> StyleField:
    """Assemble a :class:`StyleField` from the user's selections.

    Order: genres, moods, instruments, parameter keywords, custom style.

    Raises StyleFieldError if the joined string is empty or too long.
    """
    parts: list[str] = list(request.genres)
    parts.extend(request.moods)
    parts.extend(request.instruments)
    parts.extend(parameter_keywords(request.parameters))
    if request.custom_style and request.custom_style.strip():
        parts.append(request.custom_style.strip())
    return StyleField(rules.STYLE_FIELD_SEPARATOR.join(parts))
