"""Built-in platform checks applied to finished lyrics."""

from .. import rules
from ..parser import has_tags
from .base import LengthOptimization, PlatformOptimizer, PlatformValidation


class BasicPlatformOptimizer(PlatformOptimizer):
    """Flags missing structure tags and over-long lines; never rewrites."""

    def __init__(self, long_line_length: int = rules.LONG_LINE_LENGTH):
        self.long_line_length = long_line_length

    def validate(self, content: str) -> PlatformValidation:
        issues: list[str] = []
        suggestions: list[str] = []

        if not has_tags(content):
            issues.append("Missing structure tags")
            suggestions.append("Add [Verse] and [Chorus] tags so the generator follows the structure")

        long_lines = [line for line in content.split("\n") if len(line) > self.long_line_length]
        if long_lines:
            issues.append(f"Lines too long ({len(long_lines)} lines)")
            suggestions.append(
                f"Split lines longer than {self.long_line_length} characters for better phrasing"
            )

        return PlatformValidation(is_valid=not issues, issues=issues, suggestions=suggestions)

    def optimize_length(self, content: str) -> LengthOptimization:
        return LengthOptimization(optimized_content=content)
