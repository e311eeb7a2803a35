import json
import logging
import sys
from pathlib import Path

import click

from .analytics import LyricsAnalytics
from .entities import Lyrics
from .exceptions import FetchError, SongPromptError, SourceError
from .models import MusicParameters, PromptRequest
from .pipeline import LyricsOptimizer, LyricsOptions, LyricsRequest, PromptGenerator, PromptRefiner
from .repository import InMemoryRepository
from .scoring import quality_level
from .sources import load_lyrics
from .style import StyleField
from .templates import BUILTIN_TEMPLATES, get_template, templates_for_genre
from .validation import validate_language

_DIAL = click.IntRange(1, 10)


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _echo_notes(heading: str, notes: list[str]) -> None:
    if not notes:
        return
    click.echo(f"{heading}:")
    for note in notes:
        click.echo(f"  - {note}")


def _echo_json(data: dict) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _read_source(source: str) -> str:
    try:
        return load_lyrics(source)
    except FetchError as exc:
        msg = f"Could not fetch {exc.url}"
        if exc.status_code:
            msg += f" (HTTP {exc.status_code})"
        _fail(msg)
    except SourceError as exc:
        _fail(str(exc))


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """Build style prompts and tidy up lyrics for AI music generators."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


# ---------------------------------------------------------------------------
# prompt
# ---------------------------------------------------------------------------


@main.command()
@click.option("-g", "--genre", "genres", multiple=True, required=True,
              help="Genre to include (repeat for up to 5).")
@click.option("-m", "--mood", "moods", multiple=True, help="Mood keyword (repeatable).")
@click.option("-i", "--instrument", "instruments", multiple=True,
              help="Instrument keyword (repeatable).")
@click.option("--energy", type=_DIAL, default=None, help="Energy, 1-10.")
@click.option("--complexity", type=_DIAL, default=None, help="Complexity, 1-10.")
@click.option("--tempo", type=_DIAL, default=None, help="Tempo, 1-10.")
@click.option("--intensity", type=_DIAL, default=None, help="Emotional intensity, 1-10.")
@click.option("--style", "custom_style", default=None, help="Free-form style text appended last.")
@click.option("--language", default="en", show_default=True, help="Lyrics language code.")
@click.option("--target-length", type=int, default=None, metavar="N",
              help="Also refine the style field to fit N characters (20-500).")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the full result as JSON.")
def prompt(genres, moods, instruments, energy, complexity, tempo, intensity,
           custom_style, language, target_length, as_json) -> None:
    """Build a style field from genre, mood, instrument and dial selections."""
    request = PromptRequest(
        genres=list(genres),
        language=language,
        moods=list(moods),
        instruments=list(instruments),
        parameters=MusicParameters(
            energy=energy,
            complexity=complexity,
            tempo=tempo,
            emotional_intensity=intensity,
        ),
        custom_style=custom_style,
    )
    repository = InMemoryRepository()
    refined = None
    try:
        result = PromptGenerator(repository).generate(request)
        if target_length is not None:
            refined = PromptRefiner(repository).refine(result.prompt, target_length)
    except SongPromptError as exc:
        _fail(str(exc))

    if as_json:
        data = result.to_dict()
        if refined is not None:
            data["refined"] = refined.to_dict()
        _echo_json(data)
        return

    click.echo(f"Style: {result.prompt.style_field.value}")
    click.echo(f"Score: {result.quality_score} ({quality_level(result.quality_score)})")
    _echo_notes("Optimizations", result.optimizations)
    _echo_notes("Warnings", result.warnings)

    if refined is not None:
        click.echo("")
        click.echo(f"Refined style: {refined.prompt.style_field.value}")
        click.echo(f"Length: {refined.original_length} -> {refined.optimized_length} "
                   f"({refined.compression_ratio:.0%})")
        click.echo(f"Refinement score: {refined.quality_score} "
                   f"({quality_level(refined.quality_score)})")
        _echo_notes("Refinements", refined.optimizations)
        _echo_notes("Refinement warnings", refined.warnings)
        _echo_notes("Suggestions", refined.suggestions)


# ---------------------------------------------------------------------------
# lyrics
# ---------------------------------------------------------------------------


@main.command()
@click.argument("source")
@click.option("--language", default="en", show_default=True, help="Lyrics language code.")
@click.option("-t", "--template", "template_name", default=None, metavar="NAME",
              help="Tag paragraphs following a built-in template (see `templates`).")
@click.option("--max-length", default=3000, show_default=True, type=click.IntRange(min=4),
              help="Shorten lyrics longer than this many characters.")
@click.option("--no-tags", is_flag=True, default=False, help="Do not insert structure tags.")
@click.option("--no-platform", is_flag=True, default=False, help="Skip platform checks.")
@click.option("-o", "--output", "output_path", default=None, metavar="PATH",
              help="Write the optimized lyrics to PATH instead of stdout.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the full result as JSON.")
def lyrics(source, language, template_name, max_length, no_tags, no_platform,
           output_path, as_json) -> None:
    """Tag, trim and score lyrics read from SOURCE.

    \b
    SOURCE may be:
      - a path to a text file
      - '-' to read standard input
      - an http(s) URL of a lyrics page
    """
    template = None
    if template_name:
        template = get_template(template_name)
        if template is None:
            _fail(f"Unknown template: {template_name}")

    text = _read_source(source)

    request = LyricsRequest(
        lyrics=text,
        language=language,
        target_template=template,
        options=LyricsOptions(
            auto_insert_tags=not no_tags,
            optimize_for_platform=not no_platform,
            max_length=max_length,
        ),
    )
    try:
        result = LyricsOptimizer(InMemoryRepository()).optimize(request)
    except SongPromptError as exc:
        _fail(str(exc))

    if output_path:
        dest = Path(output_path)
        try:
            dest.write_text(result.content + "\n", encoding="utf-8")
        except OSError as exc:
            _fail(f"Cannot write {dest}: {exc.strerror or exc}")

    if as_json:
        _echo_json(result.to_dict())
        return

    if output_path:
        click.echo(f"Written to {dest}")
    else:
        click.echo(result.content)
        click.echo("")

    analysis = result.analysis
    click.echo(f"Score: {result.quality_score} ({quality_level(result.quality_score)})")
    click.echo(f"Sections: {analysis.total_sections}, "
               f"estimated duration: {analysis.estimated_duration_seconds}s")
    if analysis.matched_template:
        click.echo(f"Template: {analysis.matched_template.name}")
    _echo_notes("Optimizations", result.optimizations)
    _echo_notes("Warnings", result.warnings)
    _echo_notes("Suggestions", result.suggestions)


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------


@main.command()
@click.argument("source")
@click.option("--language", default="en", show_default=True, help="Lyrics language code.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the report as JSON.")
def check(source, language, as_json) -> None:
    """Report metrics, problems and suggestions for lyrics in SOURCE.

    The lyrics are not changed.  Exits with status 1 when they break a hard
    limit.
    """
    text = _read_source(source)
    try:
        validate_language(language)
    except SongPromptError as exc:
        _fail(str(exc))

    analytics = LyricsAnalytics.analyze(text, language)
    song = Lyrics(title="check", content=text, language=language)
    validation = song.validate()
    suggestions = song.optimization_suggestions()

    if as_json:
        _echo_json({
            "analytics": analytics.to_dict(),
            "isValid": validation.is_valid,
            "errors": validation.errors,
            "warnings": validation.warnings,
            "suggestions": suggestions,
        })
    else:
        stats = analytics.stats
        click.echo(f"Characters: {stats.total_characters}, lines: {stats.total_lines}, "
                   f"sections: {stats.section_count}, words: {analytics.word_count}")
        click.echo(f"Complexity: {analytics.complexity_score}")
        click.echo(f"Script: {analytics.dominant_language_pattern}")
        click.echo(f"Verse and chorus: {'yes' if analytics.has_required_structure else 'no'}")
        _echo_notes("Errors", validation.errors)
        _echo_notes("Warnings", validation.warnings)
        _echo_notes("Suggestions", suggestions)

    if not validation.is_valid:
        sys.exit(1)


# ---------------------------------------------------------------------------
# style
# ---------------------------------------------------------------------------


@main.command()
@click.argument("text")
def style(text) -> None:
    """Break a style field TEXT into genres, instruments and moods, and review it."""
    try:
        field = StyleField(text)
    except SongPromptError as exc:
        _fail(str(exc))

    parts = field.structured()
    stats = field.stats()
    click.echo(f"Length: {stats.length}, elements: {stats.element_count}")
    for heading, elements in (
        ("Genres", parts.genres),
        ("Instruments", parts.instruments),
        ("Moods", parts.moods),
        ("Other", parts.other),
    ):
        if elements:
            click.echo(f"{heading}: {', '.join(elements)}")
    _echo_notes("Issues", field.validation_issues())
    _echo_notes("Suggestions", field.optimization_suggestions())


# ---------------------------------------------------------------------------
# templates
# ---------------------------------------------------------------------------


@main.command()
@click.option("--genre", default=None, help="Only show templates recommended for GENRE.")
def templates(genre) -> None:
    """List the built-in song structure templates."""
    found = templates_for_genre(genre) if genre else list(BUILTIN_TEMPLATES)
    if not found:
        _fail(f"No templates for genre: {genre}")
    for template in found:
        marker = "*" if template.is_popular else " "
        order = " / ".join(s.tag_name for s in template.sections)
        click.echo(f"{marker} {template.name}: {order}")
