from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Literal

from ..entities import Prompt
from ..models import PromptRequest
from ..style import StyleField

Recommendation = Literal["strong", "moderate", "optional"]


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TextChange:
    original: str
    optimized: str
    reason: str


@dataclass
class PronunciationResult:
    optimized_text: str
    changes: list[TextChange] = field(default_factory=list)


@dataclass(frozen=True)
class HiraganaSuggestion:
    kanji: str
    hiragana: str
    position: int
    recommendation: Recommendation


@dataclass
class PlatformValidation:
    is_valid: bool
    issues: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)


@dataclass
class LengthOptimization:
    optimized_content: str
    changes: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SuccessPrediction:
    """Estimated chance (0-100) that a prompt generates well, with its factors."""

    overall_score: float
    genre_compatibility: int
    style_cohesion: float
    length_optimality: int
    technical_correctness: int
    improvements: list[str] = field(default_factory=list)


@dataclass
class OptimizationNotes:
    optimizations: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    # Set only by optimizers that rewrite the style field.
    style_field: StyleField | None = None
    success: SuccessPrediction | None = None


# ---------------------------------------------------------------------------
# Collaborator interfaces
# ---------------------------------------------------------------------------


class LanguageOptimizer(ABC):
    """Language-specific lyric rewriting (pronunciation, script choice)."""

    #: Language codes this optimizer is registered for.
    languages: frozenset[str] = frozenset()

    #: Note recorded when the optimizer runs as the built-in fallback.
    basic_note: str | None = None

    @classmethod
    def can_handle(cls, language: str) -> bool:
        return language in cls.languages

    @abstractmethod
    def optimize_for_pronunciation(self, text: str) -> PronunciationResult:
        """Return *text* rewritten so the generator pronounces it better."""

    @abstractmethod
    def suggest_hiragana_usage(self, text: str) -> list[HiraganaSuggestion]:
        """Return kanji in *text* that would sing better written in hiragana."""


class PlatformOptimizer(ABC):
    """Checks and adjustments specific to the generation platform."""

    @abstractmethod
    def validate(self, content: str) -> PlatformValidation:
        """Report problems the platform would have with *content*."""

    @abstractmethod
    def optimize_length(self, content: str) -> LengthOptimization:
        """Return *content* adjusted to the platform's length preferences."""


class PromptOptimizer(ABC):
    """Post-processing applied to a freshly built prompt."""

    @abstractmethod
    def optimize(self, prompt: Prompt, request: PromptRequest | None = None) -> OptimizationNotes:
        """Return notes describing what was (or should be) optimised.

        *request* is the form the prompt was built from, when there is one.
        """
