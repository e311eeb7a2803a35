"""Prompt generation, prompt refinement and lyrics optimisation pipelines.

Each call is one sequential run with no shared mutable state.  Validation
errors abort before any work is done.  A failure inside an optional
collaborator (prompt, language or platform optimizer) is logged and turned
into a warning; the run carries on with the text it had.  Repository errors
propagate.

Lyrics pipeline
---------------

  1. validate input
  2. auto-tag untagged text                     (tagger.auto_tag)
  3. parse + analyse structure                  (LyricsStructure.from_text)
  4. language pass                              (injected LanguageOptimizer,
                                                 else the built-in one)
  5. shorten when over ``max_length``           (shortener.shorten)
  6. platform pass                              (PlatformOptimizer)
  7. score, save, return
"""

import logging
from dataclasses import dataclass, field
from datetime import date

from . import rules
from .entities import Lyrics, Prompt
from .models import PromptRequest, StructureTemplate
from .optimizers.base import LanguageOptimizer, PlatformOptimizer, PromptOptimizer
from .optimizers.platform import BasicPlatformOptimizer
from .optimizers.prompt import BasicPromptOptimizer, StylePromptOptimizer
from .registry import get_language_optimizer
from .repository import Repository
from .scoring import quality_level, score_lyrics, score_prompt, score_refinement
from .shortener import shorten
from .structure import LyricsStructure, StructureAnalysis
from .style import build_style_field
from .tagger import auto_tag
from .validation import (
    validate_language,
    validate_lyrics_text,
    validate_max_length,
    validate_prompt_request,
    validate_target_length,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Prompt generation
# ---------------------------------------------------------------------------


@dataclass
class PromptResult:
    prompt: Prompt
    quality_score: int
    optimizations: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "prompt": self.prompt.to_dict(),
            "qualityScore": self.quality_score,
            "qualityLevel": quality_level(self.quality_score),
            "optimizations": list(self.optimizations),
            "warnings": list(self.warnings),
        }


class PromptGenerator:
    def __init__(self, repository: Repository, optimizer: PromptOptimizer | None = None):
        self.repository = repository
        self.optimizer = optimizer or BasicPromptOptimizer()

    def generate(self, request: PromptRequest) -> PromptResult:
        validate_prompt_request(request)

        style_field = build_style_field(request)
        prompt = Prompt(
            title=f"{request.genres[0]} Prompt - {date.today().isoformat()}",
            genres=list(request.genres),
            language=request.language,
            style_field=style_field,
        )
        logger.debug("Built style field %r", style_field.value)

        optimizations: list[str] = []
        warnings: list[str] = []
        try:
            notes = self.optimizer.optimize(prompt, request)
        except Exception:
            logger.warning("Prompt optimizer %r failed", self.optimizer, exc_info=True)
            warnings.append("Prompt optimization failed")
        else:
            optimizations.extend(notes.optimizations)
            warnings.extend(notes.warnings)

        score = score_prompt(request, style_field)
        self.repository.save(prompt)
        logger.debug("Generated prompt %s (score %d)", prompt.id, score)

        return PromptResult(
            prompt=prompt,
            quality_score=score,
            optimizations=optimizations,
            warnings=warnings,
        )


# ---------------------------------------------------------------------------
# Prompt refinement
# ---------------------------------------------------------------------------


@dataclass
class RefineResult:
    prompt: Prompt
    original_length: int
    optimized_length: int
    quality_score: int
    optimizations: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    @property
    def compression_ratio(self) -> float:
        if not self.original_length:
            return 1.0
        return self.optimized_length / self.original_length

    def to_dict(self) -> dict:
        return {
            "prompt": self.prompt.to_dict(),
            "originalLength": self.original_length,
            "optimizedLength": self.optimized_length,
            "compressionRatio": round(self.compression_ratio, 3),
            "qualityScore": self.quality_score,
            "qualityLevel": quality_level(self.quality_score),
            "optimizations": list(self.optimizations),
            "warnings": list(self.warnings),
            "suggestions": list(self.suggestions),
        }


class PromptRefiner:
    """Fit an existing prompt's style field to a target length.

    The refined prompt is saved as a new prompt titled ``<title>_optimized``;
    the original is left as it was.
    """

    def __init__(self, repository: Repository, optimizer: PromptOptimizer | None = None):
        self.repository = repository
        self.optimizer = optimizer

    def refine(self, prompt: Prompt, target_length: int = rules.DEFAULT_TARGET_LENGTH) -> RefineResult:
        validate_target_length(target_length)
        optimizer = self.optimizer or StylePromptOptimizer(target_length)

        optimizations: list[str] = []
        warnings: list[str] = []
        suggestions: list[str] = []
        style_field = prompt.style_field
        success_score = 0.0
        try:
            notes = optimizer.optimize(prompt)
        except Exception:
            logger.warning("Prompt optimizer %r failed", optimizer, exc_info=True)
            warnings.append("Prompt refinement failed")
        else:
            optimizations.extend(notes.optimizations)
            warnings.extend(notes.warnings)
            suggestions.extend(notes.suggestions)
            style_field = notes.style_field or style_field
            if notes.success is not None:
                success_score = notes.success.overall_score

        refined = Prompt(
            title=f"{prompt.title}_optimized",
            genres=list(prompt.genres),
            language=prompt.language,
            style_field=style_field,
        )
        original_length = len(prompt.style_field)
        score = score_refinement(
            original_length,
            len(style_field),
            optimization_count=len(optimizations),
            warning_count=len(warnings),
            success_score=success_score,
        )
        self.repository.save(refined)
        logger.debug(
            "Refined prompt %s -> %s (%d -> %d characters, score %d)",
            prompt.id, refined.id, original_length, len(style_field), score,
        )

        return RefineResult(
            prompt=refined,
            original_length=original_length,
            optimized_length=len(style_field),
            quality_score=score,
            optimizations=optimizations,
            warnings=warnings,
            suggestions=suggestions,
        )


# ---------------------------------------------------------------------------
# Lyrics optimisation
# ---------------------------------------------------------------------------


@dataclass
class LyricsOptions:
    auto_insert_tags: bool = True
    # None: run the language pass whenever an optimizer exists for the language.
    optimize_for_language: bool | None = None
    optimize_for_platform: bool = True
    max_length: int = rules.DEFAULT_LYRICS_MAX_LENGTH


@dataclass
class LyricsRequest:
    lyrics: str
    language: str = rules.DEFAULT_LANGUAGE
    target_template: StructureTemplate | None = None
    options: LyricsOptions = field(default_factory=LyricsOptions)


@dataclass
class LyricsResult:
    lyrics: Lyrics
    structure: LyricsStructure
    analysis: StructureAnalysis
    quality_score: int
    optimizations: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    @property
    def content(self) -> str:
        return self.lyrics.content

    def to_dict(self) -> dict:
        return {
            "lyrics": self.lyrics.to_dict(),
            "structure": self.structure.to_dict(),
            "analysis": self.analysis.to_dict(),
            "qualityScore": self.quality_score,
            "qualityLevel": quality_level(self.quality_score),
            "optimizations": list(self.optimizations),
            "warnings": list(self.warnings),
            "suggestions": list(self.suggestions),
        }


class LyricsOptimizer:
    def __init__(
        self,
        repository: Repository,
        language_optimizer: LanguageOptimizer | None = None,
        platform_optimizer: PlatformOptimizer | None = None,
    ):
        self.repository = repository
        self.language_optimizer = language_optimizer
        self.platform_optimizer = platform_optimizer or BasicPlatformOptimizer()

    def optimize(self, request: LyricsRequest) -> LyricsResult:
        validate_lyrics_text(request.lyrics)
        validate_language(request.language)
        options = request.options
        validate_max_length(options.max_length)

        injected = self.language_optimizer is not None
        language_optimizer = self.language_optimizer or get_language_optimizer(request.language)
        run_language_pass = (
            options.optimize_for_language
            if options.optimize_for_language is not None
            else language_optimizer is not None
        )

        optimizations: list[str] = []
        warnings: list[str] = []
        suggestions: list[str] = []
        text = request.lyrics

        # --- Structure tags ---
        if options.auto_insert_tags:
            tagged = auto_tag(text, request.target_template)
            text = tagged.text
            optimizations.extend(tagged.optimizations)
            suggestions.extend(tagged.suggestions)

        # --- Structure analysis ---
        structure = LyricsStructure.from_text(text)
        analysis = structure.analyze()
        warnings.extend(analysis.warnings)
        logger.debug(
            "Parsed %d sections, template=%s",
            analysis.total_sections,
            analysis.matched_template.name if analysis.matched_template else None,
        )

        # --- Language pass ---
        if run_language_pass and language_optimizer is not None:
            try:
                if injected:
                    text = self._language_pass(language_optimizer, text, optimizations, suggestions)
                else:
                    text = self._basic_language_pass(language_optimizer, text, optimizations)
            except Exception:
                logger.warning("Language optimizer %r failed", language_optimizer, exc_info=True)
                warnings.append("Language optimization failed")

        # --- Length limit ---
        if len(text) > options.max_length:
            warnings.append(f"Lyrics exceed the length limit ({len(text)}/{options.max_length} characters)")
            shortened = shorten(text, options.max_length)
            text = shortened.text
            optimizations.extend(shortened.optimizations)

        lyrics = Lyrics(
            title=f"optimized_lyrics_{date.today().isoformat()}",
            content=text,
            language=request.language,
        )

        # --- Platform pass ---
        if options.optimize_for_platform:
            try:
                lyrics = self._platform_pass(lyrics, optimizations, warnings, suggestions)
            except Exception:
                logger.warning("Platform optimizer %r failed", self.platform_optimizer, exc_info=True)
                warnings.append("Platform optimization failed")

        score = score_lyrics(
            lyrics,
            structure,
            has_optimizations=bool(optimizations),
            warning_count=len(warnings),
        )
        self.repository.save(lyrics)
        logger.debug("Optimized lyrics %s (score %d, %d warnings)", lyrics.id, score, len(warnings))

        return LyricsResult(
            lyrics=lyrics,
            structure=structure,
            analysis=analysis,
            quality_score=score,
            optimizations=optimizations,
            warnings=warnings,
            suggestions=suggestions,
        )

    def _language_pass(self, optimizer, text, optimizations, suggestions) -> str:
        # Notes are only recorded once both calls succeed.
        result = optimizer.optimize_for_pronunciation(text)
        hints = optimizer.suggest_hiragana_usage(result.optimized_text)

        if result.changes:
            optimizations.append(f"Optimized pronunciation: {len(result.changes)} change(s)")
        strong = [h.kanji for h in hints if h.recommendation == "strong"]
        if strong:
            suggestions.append(f"Strongly recommend writing these in hiragana: {', '.join(strong)}")
        return result.optimized_text

    def _basic_language_pass(self, optimizer, text, optimizations) -> str:
        """Rewrite with a built-in optimizer and record its summary note only."""
        result = optimizer.optimize_for_pronunciation(text)
        if optimizer.basic_note:
            optimizations.append(optimizer.basic_note)
        return result.optimized_text

    def _platform_pass(self, lyrics, optimizations, warnings, suggestions) -> Lyrics:
        validation = self.platform_optimizer.validate(lyrics.content)
        adjusted = self.platform_optimizer.optimize_length(lyrics.content)

        warnings.extend(validation.issues)
        suggestions.extend(validation.suggestions)
        optimizations.extend(adjusted.changes)
        if adjusted.optimized_content == lyrics.content:
            return lyrics
        return Lyrics(
            title=lyrics.title,
            content=adjusted.optimized_content,
            language=lyrics.language,
            id=lyrics.id,
            created_at=lyrics.created_at,
        )
