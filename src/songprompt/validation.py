"""Request validation.

Every check runs before any processing and raises
:class:`~songprompt.exceptions.ValidationError` with the rule it broke.
"""

from . import rules
from .exceptions import ValidationError
from .models import PromptRequest


def validate_genres(genres: list[str]) -> None:
    if not genres:
        raise ValidationError("genres_required", "Select at least one genre")
    if len(genres) > rules.MAX_GENRE_SELECTION:
        raise ValidationError(
            "genres_max",
            f"You can select a maximum {rules.MAX_GENRE_SELECTION} genres (got {len(genres)})",
        )
    if len(set(genres)) != len(genres):
        raise ValidationError("genres_duplicate", "The same genre cannot be selected twice")
    unsupported = [g for g in genres if g not in rules.SUPPORTED_GENRES]
    if unsupported:
        raise ValidationError("genre_unsupported", f"Unsupported genre: {', '.join(unsupported)}")


def validate_language(language: str | None) -> None:
    if not language:
        raise ValidationError("language_required", "Select a language")
    if language not in rules.SUPPORTED_LANGUAGES:
        raise ValidationError("language_unsupported", f"Unsupported language: {language}")


def validate_prompt_request(request: PromptRequest) -> None:
    validate_genres(request.genres)
    validate_language(request.language)


def validate_lyrics_text(lyrics: str | None) -> None:
    if not lyrics or not lyrics.strip():
        raise ValidationError("lyrics_required", "Enter some lyrics")
    if len(lyrics) > rules.MAX_LYRICS_INPUT_LENGTH:
        raise ValidationError(
            "lyrics_too_long",
            f"Lyrics are too long (maximum {rules.MAX_LYRICS_INPUT_LENGTH:,} characters)",
        )


def validate_max_length(max_length: int) -> None:
    # Room for at least one character plus the truncation ellipsis.
    if max_length < 4:
        raise ValidationError("max_length_range", f"Maximum length must be at least 4 (got {max_length})")


def validate_target_length(target_length: int) -> None:
    low, high = rules.TARGET_LENGTH_RANGE
    if not low <= target_length <= high:
        raise ValidationError(
            "target_length_range",
            f"Target length must be between {low} and {high} characters (got {target_length})",
        )
