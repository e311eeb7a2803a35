import json
from unittest.mock import patch

from click.testing import CliRunner

from songprompt.cli import main
from songprompt.exceptions import FetchError

LYRICS = "[Verse]\nhello there\n\n[Chorus]\nsing along\n\n[Verse]\ngoodbye now"

# ---------------------------------------------------------------------------
# --help
# ---------------------------------------------------------------------------


def test_help_output():
    result = CliRunner().invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "Build style prompts" in result.output
    for command in ("prompt", "lyrics", "check", "style", "templates"):
        assert command in result.output


# ---------------------------------------------------------------------------
# prompt
# ---------------------------------------------------------------------------


def test_prompt_prints_style_and_score():
    result = CliRunner().invoke(main, ["prompt", "-g", "Rock", "-m", "dark"])
    assert result.exit_code == 0
    assert "Style: Rock, dark" in result.output
    assert "Score: 100 (high)" in result.output
    assert "Applied basic optimization" in result.output


def test_prompt_parameters():
    result = CliRunner().invoke(main, ["prompt", "-g", "Rock", "--energy", "9", "--style", "90s vibe"])
    assert result.exit_code == 0
    assert "Style: Rock, high energy, intense, 90s vibe" in result.output


def test_prompt_json():
    result = CliRunner().invoke(main, ["prompt", "-g", "Jazz", "-g", "Blues", "--json"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["prompt"]["genres"] == ["Jazz", "Blues"]
    assert data["qualityScore"] == 85


def test_prompt_unsupported_genre_exits_nonzero():
    result = CliRunner().invoke(main, ["prompt", "-g", "Not A Genre"])
    assert result.exit_code == 1
    assert "Error: Unsupported genre: Not A Genre" in result.output


def test_prompt_parameter_out_of_range():
    result = CliRunner().invoke(main, ["prompt", "-g", "Rock", "--energy", "11"])
    assert result.exit_code == 2


def test_prompt_requires_genre():
    result = CliRunner().invoke(main, ["prompt"])
    assert result.exit_code == 2


def test_prompt_target_length_refines_style():
    result = CliRunner().invoke(
        main, ["prompt", "-g", "Rock", "--energy", "9", "--style", "90s vibe", "--target-length", "20"]
    )
    assert result.exit_code == 0
    assert "Style: Rock, high energy, intense, 90s vibe" in result.output
    assert "Refined style: Rock, high energy..." in result.output
    assert "Length: 36 -> 20 (56%)" in result.output
    assert "Refinements:" in result.output


def test_prompt_target_length_json():
    result = CliRunner().invoke(main, ["prompt", "-g", "Rock", "-m", "dark", "--target-length", "20", "--json"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["refined"]["prompt"]["styleField"] == "Rock, dark"
    assert data["refined"]["prompt"]["title"].endswith("_optimized")
    assert data["refined"]["optimizations"] == []


def test_prompt_target_length_out_of_range():
    result = CliRunner().invoke(main, ["prompt", "-g", "Rock", "--target-length", "10"])
    assert result.exit_code == 1
    assert "Target length must be between 20 and 500" in result.output


# ---------------------------------------------------------------------------
# lyrics
# ---------------------------------------------------------------------------


def test_lyrics_from_file(tmp_path):
    src = tmp_path / "song.txt"
    src.write_text(LYRICS, encoding="utf-8")
    result = CliRunner().invoke(main, ["lyrics", str(src)])
    assert result.exit_code == 0
    assert LYRICS in result.output
    assert "Sections: 3, estimated duration: 85s" in result.output
    assert "Score:" in result.output


def test_lyrics_from_stdin_inserts_tags():
    result = CliRunner().invoke(main, ["lyrics", "-"], input="one\n\ntwo\n\nthree\n")
    assert result.exit_code == 0
    assert "[Verse]\none\n\n[Chorus]\ntwo\n\n[Verse]\nthree" in result.output
    assert "Optimizations:" in result.output


def test_lyrics_with_template():
    result = CliRunner().invoke(main, ["lyrics", "-", "-t", "pop standard"], input="one\n\ntwo")
    assert result.exit_code == 0
    assert "[Intro]\none\n\n[Verse]\ntwo" in result.output


def test_lyrics_unknown_template():
    result = CliRunner().invoke(main, ["lyrics", "-", "-t", "Nope"], input="one")
    assert result.exit_code == 1
    assert "Unknown template: Nope" in result.output


def test_lyrics_no_tags_warns():
    result = CliRunner().invoke(main, ["lyrics", "-", "--no-tags"], input="one\n\ntwo")
    assert result.exit_code == 0
    assert "Missing structure tags" in result.output


def test_lyrics_written_to_file(tmp_path):
    out_file = tmp_path / "out.txt"
    result = CliRunner().invoke(main, ["lyrics", "-", "-o", str(out_file)], input=LYRICS)
    assert result.exit_code == 0
    assert "Written to" in result.output
    assert out_file.read_text(encoding="utf-8") == LYRICS + "\n"


def test_lyrics_json_also_written_to_file(tmp_path):
    out_file = tmp_path / "out.txt"
    result = CliRunner().invoke(main, ["lyrics", "-", "-o", str(out_file), "--json"], input=LYRICS)
    assert result.exit_code == 0
    assert out_file.read_text(encoding="utf-8") == LYRICS + "\n"
    data = json.loads(result.output)
    assert data["lyrics"]["content"] == LYRICS


def test_lyrics_json():
    result = CliRunner().invoke(main, ["lyrics", "-", "--json"], input=LYRICS)
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["lyrics"]["content"] == LYRICS
    assert data["analysis"]["totalSections"] == 3


def test_lyrics_max_length_too_small():
    result = CliRunner().invoke(main, ["lyrics", "-", "--max-length", "3"], input="one")
    assert result.exit_code == 2


def test_lyrics_missing_file(tmp_path):
    result = CliRunner().invoke(main, ["lyrics", str(tmp_path / "nope.txt")])
    assert result.exit_code == 1
    assert "file not found" in result.output


def test_lyrics_directory_source(tmp_path):
    result = CliRunner().invoke(main, ["lyrics", str(tmp_path)])
    assert result.exit_code == 1
    assert "Error: Cannot read lyrics from" in result.output


def test_lyrics_fetch_error():
    with patch(
        "songprompt.cli.load_lyrics",
        side_effect=FetchError("https://example.com/song", 404),
    ):
        result = CliRunner().invoke(main, ["lyrics", "https://example.com/song"])
    assert result.exit_code == 1
    assert "Could not fetch https://example.com/song (HTTP 404)" in result.output


def test_lyrics_validation_error():
    result = CliRunner().invoke(main, ["lyrics", "-", "--language", "xx"], input="one")
    assert result.exit_code == 1
    assert "Unsupported language: xx" in result.output


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------


def test_check_reports_metrics(tmp_path):
    src = tmp_path / "song.txt"
    src.write_text(LYRICS, encoding="utf-8")
    result = CliRunner().invoke(main, ["check", str(src)])
    assert result.exit_code == 0
    assert "Characters: 61, lines: 6, sections: 3, words: 9" in result.output
    assert "Script: alphabetic" in result.output
    assert "Verse and chorus: yes" in result.output
    assert "The lyrics are already well optimized" in result.output


def test_check_untagged_lyrics_warns():
    result = CliRunner().invoke(main, ["check", "-"], input="one\n\ntwo")
    assert result.exit_code == 0
    assert "Verse and chorus: no" in result.output
    assert "Structure tags such as [Verse] and [Chorus] are recommended" in result.output


def test_check_over_hard_limit_exits_nonzero():
    result = CliRunner().invoke(main, ["check", "-"], input="[Verse]\n" + "la " * 1100)
    assert result.exit_code == 1
    assert "Lyrics exceed 3,000 characters" in result.output


def test_check_json():
    result = CliRunner().invoke(main, ["check", "-", "--json"], input=LYRICS)
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["isValid"] is True
    assert data["analytics"]["sectionCount"] == 3
    assert data["analytics"]["hasRequiredStructure"] is True


def test_check_unsupported_language():
    result = CliRunner().invoke(main, ["check", "-", "--language", "xx"], input="one")
    assert result.exit_code == 1
    assert "Unsupported language: xx" in result.output


# ---------------------------------------------------------------------------
# style
# ---------------------------------------------------------------------------


def test_style_breaks_down_elements():
    result = CliRunner().invoke(main, ["style", "Rock, electric guitar, dark, 90s vibe"])
    assert result.exit_code == 0
    assert "Length: 37, elements: 4" in result.output
    assert "Genres: Rock" in result.output
    assert "Instruments: electric guitar" in result.output
    assert "Moods: dark" in result.output
    assert "Other: 90s vibe" in result.output
    assert "The style field is already well optimized" in result.output


def test_style_reports_issues():
    result = CliRunner().invoke(main, ["style", "dark"])
    assert result.exit_code == 0
    assert "No genre element" in result.output
    assert "Add a genre element to set the overall direction" in result.output


def test_style_empty_exits_nonzero():
    result = CliRunner().invoke(main, ["style", "   "])
    assert result.exit_code == 1
    assert "Error: Style field cannot be empty" in result.output


# ---------------------------------------------------------------------------
# templates
# ---------------------------------------------------------------------------


def test_templates_lists_all():
    result = CliRunner().invoke(main, ["templates"])
    assert result.exit_code == 0
    assert "* Pop Standard: Intro / Verse / Chorus / Verse / Chorus / Bridge / Chorus / Outro" in result.output
    assert "  Ballad Structure:" in result.output


def test_templates_filtered_by_genre():
    result = CliRunner().invoke(main, ["templates", "--genre", "Metal"])
    assert result.exit_code == 0
    assert "Rock Classic" in result.output
    assert "Pop Standard" not in result.output


def test_templates_unknown_genre():
    result = CliRunner().invoke(main, ["templates", "--genre", "Not A Genre"])
    assert result.exit_code == 1
    assert "No templates for genre" in result.output
