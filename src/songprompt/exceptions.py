class SongPromptError(Exception):
    """Base exception for songprompt."""


class ValidationError(SongPromptError):
    """Raised when a request breaks an input rule.

    ``rule`` is a stable identifier for the violated rule (``"genres_max"``,
    ``"lyrics_too_long"``, ...) so callers can branch without parsing the
    message.
    """

    def __init__(self, rule: str, message: str):
        self.rule = rule
        super().__init__(message)


class StyleFieldError(ValidationError):
    """Raised when a style field falls outside its length bounds."""

    def __init__(self, value: str, message: str):
        self.value = value
        super().__init__("style_field_length", message)


class StructureError(SongPromptError):
    """Raised when a lyrics structure would break its invariants."""


class FetchError(SongPromptError):
    """Raised when an HTTP request for lyrics text fails."""

    def __init__(self, url: str, status_code: int):
        self.url = url
        self.status_code = status_code
        super().__init__(f"HTTP {status_code} fetching {url}")


class SourceError(SongPromptError):
    """Raised when lyrics text cannot be read from a source."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot read lyrics from {source}: {reason}")
