from songprompt.models import SectionType
from songprompt.parser import (
    has_tags,
    is_tag_line,
    normalize_section_type,
    parse_sections,
    split_paragraphs,
)

# ---------------------------------------------------------------------------
# is_tag_line / has_tags
# ---------------------------------------------------------------------------


def test_tag_line_plain():
    assert is_tag_line("[Verse]")
    assert is_tag_line("[Pre Chorus]")


def test_tag_line_ignores_surrounding_whitespace():
    assert is_tag_line("   [Chorus]   ")


def test_inline_brackets_are_not_tag_lines():
    assert not is_tag_line("I [love] you")
    assert not is_tag_line("[Verse] and more")


def test_empty_brackets_are_not_tag_lines():
    assert not is_tag_line("[]")


def test_has_tags_needs_both_brackets():
    assert has_tags("I [love] you")
    assert not has_tags("only [ opening")
    assert not has_tags("plain lyrics")


# ---------------------------------------------------------------------------
# normalize_section_type
# ---------------------------------------------------------------------------


def test_normalize_canonical_names():
    assert normalize_section_type("Verse") == SectionType.VERSE
    assert normalize_section_type("CHORUS") == SectionType.CHORUS
    assert normalize_section_type("Bridge") == SectionType.BRIDGE


def test_normalize_synonyms():
    assert normalize_section_type("V1") == SectionType.VERSE
    assert normalize_section_type("Refrain") == SectionType.CHORUS
    assert normalize_section_type("Solo") == SectionType.INSTRUMENTAL
    assert normalize_section_type("Ending") == SectionType.OUTRO
    assert normalize_section_type("C-Part") == SectionType.BRIDGE
    assert normalize_section_type("Introduction") == SectionType.INTRO


def test_normalize_collapses_whitespace_to_hyphens():
    assert normalize_section_type("Verse 1") == SectionType.VERSE
    assert normalize_section_type("Pre   Chorus") == SectionType.PRE_CHORUS
    assert normalize_section_type("Post Chorus") == SectionType.POST_CHORUS
    assert normalize_section_type("Ad Lib") == SectionType.AD_LIB


def test_normalize_unknown_label_defaults_to_verse():
    assert normalize_section_type("Spoken Word") == SectionType.VERSE
    assert normalize_section_type("Verse 3") == SectionType.VERSE


# ---------------------------------------------------------------------------
# parse_sections
# ---------------------------------------------------------------------------


def test_parse_basic_sections():
    text = "[Verse 1]\nline a\nline b\n\n[Chorus]\nchorus a\n"
    sections = parse_sections(text)

    assert [s.type for s in sections] == [SectionType.VERSE, SectionType.CHORUS]
    assert sections[0].content == "line a\nline b"
    assert (sections[0].start_line, sections[0].end_line) == (1, 4)
    assert sections[1].content == "chorus a"
    # Trailing newline leaves an empty 7th line; the last section runs to it.
    assert (sections[1].start_line, sections[1].end_line) == (5, 7)


def test_parse_trims_content_lines():
    sections = parse_sections("[Verse]\n   indented line   \n\tanother")
    assert sections[0].content == "indented line\nanother"


def test_parse_untagged_text_yields_no_sections():
    assert parse_sections("just some words\nand more words") == []


def test_parse_inline_brackets_do_not_start_sections():
    assert parse_sections("I [love] you\nyes I do") == []


def test_parse_drops_lines_before_first_tag():
    sections = parse_sections("stray line\n[Chorus]\nhook line")
    assert len(sections) == 1
    assert sections[0].content == "hook line"
    assert sections[0].start_line == 2
    assert sections[0].end_line == 3


def test_parse_skips_empty_sections():
    sections = parse_sections("[Intro]\n[Verse]\nwords")
    assert [s.type for s in sections] == [SectionType.VERSE]
    assert sections[0].start_line == 2


def test_parse_sections_are_ordered_and_non_overlapping():
    text = "[Intro]\na\n[Verse]\nb\nc\n[Chorus]\nd\n\n[Outro]\ne"
    sections = parse_sections(text)
    assert len(sections) == 4
    for previous, current in zip(sections, sections[1:]):
        assert previous.start_line <= previous.end_line
        assert current.start_line > previous.end_line


# ---------------------------------------------------------------------------
# split_paragraphs
# ---------------------------------------------------------------------------


def test_split_paragraphs_on_blank_lines():
    text = "one\ntwo\n\nthree\n\n\n\nfour"
    assert split_paragraphs(text) == ["one\ntwo", "three", "four"]


def test_split_paragraphs_whitespace_only_lines_are_blank():
    assert split_paragraphs("a\n   \n b ") == ["a", "b"]


def test_split_paragraphs_empty_text():
    assert split_paragraphs("") == []
    assert split_paragraphs("\n\n  \n") == []
