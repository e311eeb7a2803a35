import io
from unittest.mock import MagicMock, patch

import httpx
import pytest

from songprompt.exceptions import FetchError, SourceError
from songprompt.sources import extract_text, fetch, is_url, load_lyrics

PAGE = """
<html>
<head><title>Song</title><script>var x = 1;</script></head>
<body>
  <nav>Home | Artists</nav>
  <p>First line<br>
     second line</p>
  <p>Chorus line<br>another one</p>
  <footer>copyright</footer>
</body>
</html>
"""


def _response(status_code=200, text=PAGE) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    return resp


# ---------------------------------------------------------------------------
# is_url
# ---------------------------------------------------------------------------


def test_is_url():
    assert is_url("https://example.com/song")
    assert is_url("http://example.com/song")
    assert not is_url("lyrics.txt")
    assert not is_url("-")


# ---------------------------------------------------------------------------
# extract_text
# ---------------------------------------------------------------------------


def test_extract_paragraphs_and_line_breaks():
    assert extract_text(PAGE, "https://example.com") == (
        "First line\nsecond line\n\nChorus line\nanother one"
    )


def test_extract_drops_noise():
    text = extract_text(PAGE, "https://example.com")
    assert "Home" not in text
    assert "copyright" not in text
    assert "var x" not in text


def test_extract_falls_back_to_body_text():
    html = "<html><body><div>one</div><div>two</div></body></html>"
    assert extract_text(html, "https://example.com") == "one\ntwo"


def test_extract_empty_page_raises():
    with pytest.raises(SourceError):
        extract_text("<html><body><script>x</script></body></html>", "https://example.com")


# ---------------------------------------------------------------------------
# fetch
# ---------------------------------------------------------------------------


def test_fetch_returns_body():
    with patch("songprompt.sources.httpx.get", return_value=_response()) as mock_get:
        assert fetch("https://example.com/song") == PAGE
    mock_get.assert_called_once()


def test_fetch_http_error():
    with patch("songprompt.sources.httpx.get", return_value=_response(404)):
        with pytest.raises(FetchError) as excinfo:
            fetch("https://example.com/missing")
    assert excinfo.value.status_code == 404
    assert excinfo.value.url == "https://example.com/missing"


def test_fetch_connection_error():
    error = httpx.ConnectError("refused")
    with patch("songprompt.sources.httpx.get", side_effect=error):
        with pytest.raises(FetchError) as excinfo:
            fetch("https://example.com/song")
    assert excinfo.value.status_code == 0


# ---------------------------------------------------------------------------
# load_lyrics
# ---------------------------------------------------------------------------


def test_load_from_file(tmp_path):
    path = tmp_path / "song.txt"
    path.write_text("[Verse]\nhello", encoding="utf-8")
    assert load_lyrics(str(path)) == "[Verse]\nhello"


def test_load_missing_file(tmp_path):
    with pytest.raises(SourceError, match="file not found"):
        load_lyrics(str(tmp_path / "nope.txt"))


def test_load_non_utf8_file(tmp_path):
    path = tmp_path / "song.txt"
    path.write_bytes(b"\xff\xfe\xfa")
    with pytest.raises(SourceError, match="not UTF-8"):
        load_lyrics(str(path))


def test_load_directory_raises_source_error(tmp_path):
    with pytest.raises(SourceError) as excinfo:
        load_lyrics(str(tmp_path))
    assert excinfo.value.source == str(tmp_path)
    assert excinfo.value.reason


def test_load_from_stdin(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("from stdin"))
    assert load_lyrics("-") == "from stdin"


def test_load_from_url():
    with patch("songprompt.sources.httpx.get", return_value=_response()):
        text = load_lyrics("https://example.com/song")
    assert text.startswith("First line\nsecond line")
