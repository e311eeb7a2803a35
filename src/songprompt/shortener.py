"""Staged length reduction for formatted lyrics.

Stages run in order and stop as soon as the text fits:

  1. Collapse runs of blank lines down to a single blank line.
  2. If there are three or more ``[Chorus]`` blocks, keep the first one and
     replace the body of every later one with ``(Repeat)``.
  3. Hard-truncate to ``max_length - 3`` characters and append ``...``.

A chorus block runs from a ``[Chorus]`` tag line up to the next tag line or
the end of the text.  Only the stage that makes the text fit (or the final
truncation) adds a note to ``optimizations``.
"""

import re
from dataclasses import dataclass, field

from .parser import is_tag_line

REPEAT_PLACEHOLDER = "(Repeat)"
ELLIPSIS = "..."

# Three or more newlines with nothing but whitespace between them.
_EXTRA_BLANK_LINES_RE = re.compile(r"\n\s*\n\s*\n")

_CHORUS_TAG_RE = re.compile(r"^\[chorus\]$", re.IGNORECASE)


@dataclass
class ShortenResult:
    text: str
    optimizations: list[str] = field(default_factory=list)


def shorten(text: str, max_length: int) -> ShortenResult:
    """Reduce *text* to at most *max_length* characters.

    Text already within the limit is returned verbatim.

    Raises:
        ValueError: *max_length* is too small to hold the ellipsis marker.
    """
    if max_length <= len(ELLIPSIS):
        raise ValueError(f"max_length must be greater than {len(ELLIPSIS)}, got {max_length}")

    if len(text) <= max_length:
        return ShortenResult(text=text)

    shortened = collapse_blank_lines(text)
    if len(shortened) <= max_length:
        return ShortenResult(shortened, ["Removed extra blank lines"])

    collapsed, count = collapse_repeated_choruses(shortened)
    if count:
        shortened = collapsed
        if len(shortened) <= max_length:
            return ShortenResult(shortened, ["Duplicate chorus simplified"])

    truncated = shortened[: max_length - len(ELLIPSIS)] + ELLIPSIS
    return ShortenResult(truncated, ["Truncated lyrics to fit the length limit"])


def collapse_blank_lines(text: str) -> str:
    return _EXTRA_BLANK_LINES_RE.sub("\n\n", text)


def collapse_repeated_choruses(text: str) -> tuple[str, int]:
    """Replace the body of every chorus after the first with a placeholder.

    Nothing changes unless the text holds at least three chorus blocks.
    Trailing blank lines of a collapsed block are kept so that the block
    stays separated from whatever follows it.

    Returns:
        ``(text, collapsed_block_count)``
    """
    lines = text.split("\n")
    chorus_starts = [i for i, line in enumerate(lines) if _CHORUS_TAG_RE.match(line.strip())]
    if len(chorus_starts) < 3:
        return text, 0

    result: list[str] = []
    i = 0
    seen_chorus = False
    while i < len(lines):
        line = lines[i]
        result.append(line)
        i += 1
        if not _CHORUS_TAG_RE.match(line.strip()):
            continue
        if not seen_chorus:
            seen_chorus = True
            continue

        # Later chorus: swallow its body up to the next tag line.
        body_end = i
        while body_end < len(lines) and not is_tag_line(lines[body_end]):
            body_end += 1
        body = lines[i:body_end]
        trailing_blanks = 0
        while trailing_blanks < len(body) and not body[-1 - trailing_blanks].strip():
            trailing_blanks += 1
        result.append(REPEAT_PLACEHOLDER)
        result.extend([""] * trailing_blanks)
        i = body_end

    return "\n".join(result), len(chorus_starts) - 1
