from enum import Enum

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_serializer

from . import rules
from .exceptions import StructureError, ValidationError


class SectionType(Enum):
    INTRO = "intro"
    VERSE = "verse"
    CHORUS = "chorus"
    BRIDGE = "bridge"
    OUTRO = "outro"
    PRE_CHORUS = "pre-chorus"
    POST_CHORUS = "post-chorus"
    INSTRUMENTAL = "instrumental"
    AD_LIB = "ad-lib"
    HOOK = "hook"

    @property
    def tag_name(self) -> str:
        """Display name used inside a ``[Tag]`` marker, e.g. ``"Pre-Chorus"``."""
        return rules.SECTION_TAG_NAMES[self.value]


class Section(BaseModel):
    """A labelled block of lyrics.

    Line numbers are 1-based and refer to the text the section was parsed
    from (the tag line itself is ``start_line``).
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    type: SectionType
    content: str
    start_line: int = Field(..., alias="startLine")
    end_line: int = Field(..., alias="endLine")
    is_optional: bool | None = Field(None, alias="isOptional")

    @classmethod
    def from_dict(cls, data: dict) -> "Section":
        try:
            return cls.model_validate(data)
        except pydantic.ValidationError as exc:
            raise StructureError(f"Invalid section: {_first_error(exc)}") from exc

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class StructureTemplate(BaseModel):
    """A named, ordered pattern of section types."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    name: str
    description: str = ""
    sections: tuple[SectionType, ...]
    is_popular: bool = Field(False, alias="isPopular")
    genres: frozenset[str] = Field(frozenset(), alias="genre")

    @field_serializer("genres")
    def _sorted_genres(self, genres: frozenset[str]) -> list[str]:
        return sorted(genres)

    @classmethod
    def from_dict(cls, data: dict) -> "StructureTemplate":
        try:
            return cls.model_validate(data)
        except pydantic.ValidationError as exc:
            raise StructureError(
                f"Template {data.get('name')!r} is invalid: {_first_error(exc)}"
            ) from exc

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class MusicParameters(BaseModel):
    """Four optional 1-10 dials describing the feel of a track."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    energy: int | None = Field(None, ge=rules.PARAMETER_MIN, le=rules.PARAMETER_MAX)
    complexity: int | None = Field(None, ge=rules.PARAMETER_MIN, le=rules.PARAMETER_MAX)
    tempo: int | None = Field(None, ge=rules.PARAMETER_MIN, le=rules.PARAMETER_MAX)
    emotional_intensity: int | None = Field(
        None, ge=rules.PARAMETER_MIN, le=rules.PARAMETER_MAX
    )

    def __init__(self, **data):
        try:
            super().__init__(**data)
        except pydantic.ValidationError as exc:
            error = exc.errors()[0]
            if error["type"] not in ("greater_than_equal", "less_than_equal"):
                raise ValidationError("parameter_invalid", _first_error(exc)) from exc
            name = ".".join(str(part) for part in error["loc"])
            raise ValidationError(
                "parameter_range",
                f"{name} must be between {rules.PARAMETER_MIN} and "
                f"{rules.PARAMETER_MAX} (got {error['input']!r})",
            ) from exc

    def defined(self) -> dict[str, int]:
        """Return the dials that have a value, in declaration order."""
        return {
            name: getattr(self, name)
            for name in type(self).model_fields
            if getattr(self, name) is not None
        }


DEFAULT_MUSIC_PARAMETERS = MusicParameters(
    energy=rules.PARAMETER_NEUTRAL,
    complexity=rules.PARAMETER_NEUTRAL,
    tempo=rules.PARAMETER_NEUTRAL,
    emotional_intensity=rules.PARAMETER_NEUTRAL,
)


class PromptRequest(BaseModel):
    """Selections made by the user on the prompt form."""

    model_config = ConfigDict(extra="forbid")

    genres: list[str]
    language: str = rules.DEFAULT_LANGUAGE
    moods: list[str] = Field(default_factory=list)
    instruments: list[str] = Field(default_factory=list)
    parameters: MusicParameters = Field(default_factory=MusicParameters)
    custom_style: str | None = None


def _first_error(exc: pydantic.ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error["loc"]) or "value"
    return f"{location}: {error['msg']}"
