import pytest

from songprompt.entities import Lyrics
from songprompt.models import MusicParameters, PromptRequest
from songprompt.scoring import (
    is_balanced,
    quality_level,
    score_lyrics,
    score_prompt,
    score_refinement,
)
from songprompt.structure import LyricsStructure
from songprompt.style import build_style_field


def _score(**kwargs) -> int:
    request = PromptRequest(**kwargs)
    return score_prompt(request, build_style_field(request))


def _lyrics(content: str) -> Lyrics:
    return Lyrics(title="t", content=content, language="en")


def _good_lyrics() -> str:
    blocks = []
    for n, tag in enumerate(["Verse", "Chorus", "Verse", "Chorus"]):
        lines = "\n".join(f"this is lyric line number {n}{i}" for i in range(3))
        blocks.append(f"[{tag}]\n{lines}")
    return "\n\n".join(blocks)


# ---------------------------------------------------------------------------
# Prompt score
# ---------------------------------------------------------------------------


def test_single_genre():
    assert _score(genres=["Rock"]) == 90


def test_genre_count_bands():
    assert _score(genres=["Rock", "Pop"]) == 85
    assert _score(genres=["Rock", "Pop", "Jazz"]) == 85
    assert _score(genres=["Rock", "Pop", "Jazz", "Blues"]) == 75


def test_moods_and_instruments():
    assert _score(genres=["Rock"], moods=["dark"]) == 100
    assert _score(genres=["Rock", "Pop"], instruments=["piano"]) == 95


def test_each_dial_adds_three():
    assert _score(genres=["Rock"], parameters=MusicParameters(energy=9)) == 93
    assert _score(genres=["Rock", "Pop", "Jazz", "Blues"], parameters=MusicParameters(tempo=5, energy=2)) == 81


def test_balanced_bonus():
    genres = ["Rock", "Pop", "Jazz", "Blues"]
    balanced = MusicParameters(energy=7, complexity=7, tempo=7, emotional_intensity=7)
    uneven = MusicParameters(energy=7, complexity=7, tempo=7, emotional_intensity=8)
    assert _score(genres=genres, parameters=balanced) == 97
    assert _score(genres=genres, parameters=uneven) == 87


def test_score_is_clamped():
    score = _score(
        genres=["Rock"],
        moods=["dark"],
        instruments=["piano"],
        parameters=MusicParameters(energy=5, complexity=5, tempo=5, emotional_intensity=5),
    )
    assert score == 100


def test_is_balanced():
    assert is_balanced([5, 5, 5, 5])
    assert is_balanced([1, 5, 5, 9])
    assert not is_balanced([1, 5, 5, 10])


# ---------------------------------------------------------------------------
# Lyrics score
# ---------------------------------------------------------------------------


def test_well_formed_lyrics():
    text = _good_lyrics()
    structure = LyricsStructure.from_text(text)
    assert score_lyrics(_lyrics(text), structure, has_optimizations=False, warning_count=0) == 100


def test_optimization_bonus_can_exceed_hundred():
    text = _good_lyrics()
    structure = LyricsStructure.from_text(text)
    assert score_lyrics(_lyrics(text), structure, has_optimizations=True, warning_count=0) == 115


def test_everything_out_of_range():
    structure = LyricsStructure.from_text("a")
    assert score_lyrics(_lyrics("a"), structure, has_optimizations=False, warning_count=2) == 21


def test_warning_penalty_is_capped():
    text = _good_lyrics()
    structure = LyricsStructure.from_text(text)
    assert score_lyrics(_lyrics(text), structure, False, warning_count=50) == 90


def test_missing_chorus_penalty():
    text = _good_lyrics().replace("[Chorus]", "[Bridge]")
    structure = LyricsStructure.from_text(text)
    assert score_lyrics(_lyrics(text), structure, False, 0) == 85


# ---------------------------------------------------------------------------
# Refinement score
# ---------------------------------------------------------------------------


def test_refinement_without_changes_loses_points_for_warnings():
    assert score_refinement(50, 50, optimization_count=0, warning_count=6, success_score=0) == 70


def test_refinement_small_reduction_earns_no_bonus():
    assert score_refinement(100, 95, optimization_count=0, warning_count=8, success_score=50) == 85


def test_refinement_score_is_clamped():
    assert score_refinement(100, 70, optimization_count=1, warning_count=0, success_score=90) == 100


def test_refinement_of_empty_style_field():
    assert score_refinement(0, 0, optimization_count=0, warning_count=2, success_score=0) == 90


# ---------------------------------------------------------------------------
# Quality level
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "score, level",
    [(100, "high"), (80, "high"), (79, "medium"), (60, "medium"), (59, "low"), (0, "low")],
)
def test_quality_level(score, level):
    assert quality_level(score) == level
