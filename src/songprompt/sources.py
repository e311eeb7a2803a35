"""Load raw lyrics text from a file, stdin or a web page.

Sources:

  ``-``                 read standard input
  ``http(s)://...``     fetch the page and extract its visible text
  anything else         a path to a UTF-8 text file

For web pages, ``<br>`` becomes a line break and every ``<p>`` becomes a
paragraph separated by a blank line, which is how most lyric sites lay out
verses.  Pages without ``<p>`` blocks fall back to the text of the whole
body, one line per block element.
"""

import sys
from pathlib import Path

import httpx
from bs4 import BeautifulSoup

from .exceptions import FetchError, SourceError

# Elements that never hold lyrics.
_NOISE_TAGS = ["script", "style", "noscript", "nav", "header", "footer", "form"]


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def load_lyrics(source: str) -> str:
    """Return the raw lyrics text named by *source*.

    Raises FetchError on HTTP-level failures and SourceError when the source
    cannot be read or holds no text.
    """
    if source == "-":
        return sys.stdin.read()
    if is_url(source):
        return extract_text(fetch(source), source)

    path = Path(source)
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SourceError(source, "file not found") from exc
    except OSError as exc:
        raise SourceError(source, exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise SourceError(source, "file is not UTF-8 text") from exc


def fetch(url: str) -> str:
    try:
        resp = httpx.get(url, follow_redirects=True, timeout=15)
    except httpx.RequestError as exc:
        raise FetchError(url, 0) from exc
    if resp.status_code != 200:
        raise FetchError(url, resp.status_code)
    return resp.text


def extract_text(html: str, url: str) -> str:
    """Pull the visible lyric text out of an HTML page."""
    soup = BeautifulSoup(html, "html.parser")

    for tag in soup.find_all(_NOISE_TAGS):
        tag.decompose()
    for br in soup.find_all("br"):
        br.replace_with("\n")

    paragraphs = [_clean(p.get_text(), keep_blank=False) for p in soup.find_all("p")]
    paragraphs = [p for p in paragraphs if p]
    if paragraphs:
        return "\n\n".join(paragraphs)

    root = soup.body or soup
    text = _clean(root.get_text("\n"))
    if not text:
        raise SourceError(url, "no text found on page")
    return text


def _clean(text: str, keep_blank: bool = True) -> str:
    """Trim every line and drop leading/trailing blank lines."""
    lines = [line.strip() for line in text.strip().split("\n")]
    if not keep_blank:
        lines = [line for line in lines if line]
    return "\n".join(lines)
