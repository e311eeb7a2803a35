"""Built-in song structure templates."""

from .models import SectionType as S
from .models import StructureTemplate

BUILTIN_TEMPLATES: tuple[StructureTemplate, ...] = (
    StructureTemplate(
        name="Pop Standard",
        description="Standard pop song structure",
        sections=(S.INTRO, S.VERSE, S.CHORUS, S.VERSE, S.CHORUS, S.BRIDGE, S.CHORUS, S.OUTRO),
        is_popular=True,
        genres=frozenset({"Pop", "Rock"}),
    ),
    StructureTemplate(
        name="Simple Verse-Chorus",
        description="Simple verse/chorus structure",
        sections=(S.VERSE, S.CHORUS, S.VERSE, S.CHORUS, S.BRIDGE, S.CHORUS),
        is_popular=True,
        genres=frozenset({"Folk", "Country", "Indie"}),
    ),
    StructureTemplate(
        name="Extended Pop",
        description="Extended pop structure with pre-choruses",
        sections=(
            S.INTRO,
            S.VERSE,
            S.PRE_CHORUS,
            S.CHORUS,
            S.VERSE,
            S.PRE_CHORUS,
            S.CHORUS,
            S.BRIDGE,
            S.CHORUS,
            S.OUTRO,
        ),
        is_popular=True,
        genres=frozenset({"Pop", "Dance", "Electronic"}),
    ),
    StructureTemplate(
        name="Rock Classic",
        description="Classic rock structure",
        sections=(
            S.INTRO,
            S.VERSE,
            S.VERSE,
            S.CHORUS,
            S.VERSE,
            S.CHORUS,
            S.INSTRUMENTAL,
            S.CHORUS,
            S.OUTRO,
        ),
        is_popular=True,
        genres=frozenset({"Rock", "Metal", "Hard Rock"}),
    ),
    StructureTemplate(
        name="Ballad Structure",
        description="Structure suited to ballads",
        sections=(
            S.INTRO,
            S.VERSE,
            S.CHORUS,
            S.VERSE,
            S.CHORUS,
            S.BRIDGE,
            S.CHORUS,
            S.POST_CHORUS,
            S.OUTRO,
        ),
        is_popular=False,
        genres=frozenset({"Ballad", "R&B", "Soul"}),
    ),
    StructureTemplate(
        name="Hip-Hop Standard",
        description="Standard hip-hop structure",
        sections=(S.INTRO, S.VERSE, S.HOOK, S.VERSE, S.HOOK, S.BRIDGE, S.HOOK, S.OUTRO),
        is_popular=True,
        genres=frozenset({"Hip-Hop", "Rap", "Trap"}),
    ),
)


def get_template(name: str) -> StructureTemplate | None:
    """Return the built-in template called *name* (case-insensitive), or None."""
    wanted = name.strip().lower()
    for template in BUILTIN_TEMPLATES:
        if template.name.lower() == wanted:
            return template
    return None


def templates_for_genre(genre: str) -> list[StructureTemplate]:
    """Return built-in templates recommended for *genre*, popular ones first."""
    wanted = genre.strip().lower()
    matches = [t for t in BUILTIN_TEMPLATES if wanted in {g.lower() for g in t.genres}]
    return sorted(matches, key=lambda t: not t.is_popular)
