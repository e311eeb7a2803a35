"""Business rules and static lookup tables.

Every value here is process-wide, read-only configuration.  Mappings are
wrapped in :class:`types.MappingProxyType` and sequences are tuples or
frozensets so that nothing can be mutated after import.

Section tables are keyed by the section type's string value (``"verse"``,
``"pre-chorus"``, ...) so this module stays free of imports from the rest of
the package.
"""

from types import MappingProxyType

# ---------------------------------------------------------------------------
# Style field
# ---------------------------------------------------------------------------

STYLE_FIELD_MIN_LENGTH = 1
STYLE_FIELD_MAX_LENGTH = 120
STYLE_FIELD_MIN_ELEMENTS = 2
STYLE_FIELD_MAX_ELEMENTS = 8
STYLE_FIELD_SEPARATOR = ", "

# ---------------------------------------------------------------------------
# Quality score
# ---------------------------------------------------------------------------

QUALITY_SCORE_MIN = 0
QUALITY_SCORE_MAX = 100
QUALITY_HIGH_THRESHOLD = 80
QUALITY_MEDIUM_THRESHOLD = 60

# ---------------------------------------------------------------------------
# Request limits
# ---------------------------------------------------------------------------

MAX_GENRE_SELECTION = 5
MAX_LYRICS_INPUT_LENGTH = 10_000
DEFAULT_LYRICS_MAX_LENGTH = 3_000

PARAMETER_MIN = 1
PARAMETER_MAX = 10
PARAMETER_NEUTRAL = 5
# Sum of |value - PARAMETER_NEUTRAL| across all four dials that still counts
# as a balanced setting.
BALANCED_DEVIATION_LIMIT = 8

# ---------------------------------------------------------------------------
# Parameter keywords
# ---------------------------------------------------------------------------

# Per dial: (minimum value, keywords) pairs, highest threshold first.  The
# first pair whose threshold the value reaches wins; an empty keyword tuple
# means the dial contributes nothing at that level.
PARAMETER_KEYWORDS = MappingProxyType(
    {
        "energy": (
            (8, ("high energy", "intense")),
            (6, ("energetic",)),
            (4, ("moderate",)),
            (PARAMETER_MIN, ("calm", "relaxed")),
        ),
        "complexity": (
            (8, ("complex", "intricate")),
            (6, ("layered",)),
            (4, ()),
            (PARAMETER_MIN, ("simple", "minimalist")),
        ),
        "tempo": (
            (8, ("fast tempo", "driving")),
            (6, ("upbeat",)),
            (4, ()),
            (PARAMETER_MIN, ("slow tempo", "ballad")),
        ),
        "emotional_intensity": (
            (8, ("emotionally intense", "passionate")),
            (6, ("expressive",)),
            (4, ()),
            (PARAMETER_MIN, ("subtle", "understated")),
        ),
    }
)

# ---------------------------------------------------------------------------
# Lyrics sections
# ---------------------------------------------------------------------------

# Display names used inside [Tag] markers.
SECTION_TAG_NAMES = MappingProxyType(
    {
        "intro": "Intro",
        "verse": "Verse",
        "chorus": "Chorus",
        "bridge": "Bridge",
        "outro": "Outro",
        "pre-chorus": "Pre-Chorus",
        "post-chorus": "Post-Chorus",
        "instrumental": "Instrumental",
        "ad-lib": "Ad-lib",
        "hook": "Hook",
    }
)

# Normalised tag label -> section type.  Labels are lower-cased with
# whitespace runs replaced by hyphens before lookup.
SECTION_SYNONYMS = MappingProxyType(
    {
        "verse": "verse",
        "verse-1": "verse",
        "verse-2": "verse",
        "v1": "verse",
        "v2": "verse",
        "chorus": "chorus",
        "refrain": "chorus",
        "hook": "hook",
        "bridge": "bridge",
        "c-part": "bridge",
        "intro": "intro",
        "introduction": "intro",
        "outro": "outro",
        "ending": "outro",
        "pre-chorus": "pre-chorus",
        "prechorus": "pre-chorus",
        "post-chorus": "post-chorus",
        "postchorus": "post-chorus",
        "instrumental": "instrumental",
        "solo": "instrumental",
        "ad-lib": "ad-lib",
        "adlib": "ad-lib",
    }
)
DEFAULT_SECTION_TYPE = "verse"

# Estimated seconds per section.
SECTION_DURATIONS = MappingProxyType(
    {
        "intro": 15,
        "verse": 30,
        "chorus": 25,
        "bridge": 20,
        "outro": 15,
        "pre-chorus": 15,
        "post-chorus": 15,
        "instrumental": 30,
        "ad-lib": 10,
        "hook": 20,
    }
)
DEFAULT_SECTION_DURATION = 25

MAX_RECOMMENDED_SECTIONS = 12
MIN_RECOMMENDED_SECTIONS = 3
TEMPLATE_SIMILARITY_THRESHOLD = 0.8

# ---------------------------------------------------------------------------
# Lyrics scoring ranges (inclusive)
# ---------------------------------------------------------------------------

LYRICS_CHARACTER_RANGE = (200, 2_000)
LYRICS_LINE_RANGE = (8, 40)
LYRICS_SECTION_RANGE = (3, 10)
LONG_LINE_LENGTH = 50

# ---------------------------------------------------------------------------
# Languages
# ---------------------------------------------------------------------------

SUPPORTED_LANGUAGES = frozenset(
    {
        "en", "ja", "es", "fr", "de", "it", "pt", "ru", "ko",
        "zh", "ar", "hi", "th", "vi", "id", "ms", "tl",
    }
)
DEFAULT_LANGUAGE = "en"

# ---------------------------------------------------------------------------
# Genres
# ---------------------------------------------------------------------------

SUPPORTED_GENRES = frozenset(
    {
        "Pop",
        "Rock",
        "Hip-Hop",
        "R&B",
        "Country",
        "Folk",
        "Blues",
        "Jazz",
        "Classical",
        "Electronic",
        "EDM",
        "House",
        "Techno",
        "Trance",
        "Drum & Bass",
        "Dubstep",
        "Ambient",
        "Chillout",
        "Downtempo",
        "Trip-Hop",
        "Indie",
        "Alternative",
        "Punk",
        "Metal",
        "Hard Rock",
        "Progressive Rock",
        "Psychedelic Rock",
        "Funk",
        "Soul",
        "Disco",
        "Reggae",
        "Ska",
        "Latin",
        "Salsa",
        "Bossa Nova",
        "World Music",
        "Celtic",
        "African",
        "Asian",
        "Middle Eastern",
        "Japanese",
        "J-Pop",
        "J-Rock",
        "Enka",
        "Shibuya-kei",
        "Experimental",
        "Avant-garde",
        "Minimalist",
        "Drone",
        "Noise",
        "Soundtrack",
        "Cinematic",
        "Orchestral",
        "Choral",
        "A cappella",
        "Singer-songwriter",
        "Acoustic",
        "Unplugged",
        "Lo-fi",
        "Chillwave",
        "Synthwave",
        "Retrowave",
        "Vaporwave",
        "Future Bass",
        "Trap",
        "Phonk",
        "Drill",
        "Grime",
        "UK Garage",
        "Breakbeat",
        "Jungle",
        "Hardcore",
        "Hardstyle",
        "Gabber",
        "Industrial",
        "EBM",
        "Darkwave",
        "Goth",
        "Post-punk",
        "New Wave",
        "Synthpop",
        "Shoegaze",
        "Dream Pop",
        "Emo",
        "Screamo",
        "Metalcore",
        "Deathcore",
        "Black Metal",
        "Death Metal",
        "Thrash Metal",
        "Power Metal",
        "Doom Metal",
        "Sludge Metal",
        "Stoner Rock",
        "Grunge",
        "Britpop",
        "Madchester",
        "Baggy",
        "Acid House",
        "Big Beat",
        "Breakcore",
        "IDM",
        "Glitch",
        "Microsound",
        "Lowercase",
        "Clicks & Cuts",
        "K-Pop",
        "Afrobeat",
        "Reggaeton",
        "Flamenco",
        "Fado",
        "Tango",
        "Cumbia",
        "Merengue",
        "Bachata",
        "Mento",
        "Calypso",
        "Soca",
        "Zouk",
        "Compas",
        "Highlife",
        "Makossa",
        "Soukous",
        "Mbaqanga",
        "Kwaito",
        "Amapiano",
        "Gqom",
        "Baile Funk",
        "Axé",
        "Forró",
        "MPB",
        "Tropicália",
        "Pagode",
        "Sertanejo",
        "Mbalax",
        "Coupé-Décalé",
        "Ndombolo",
        "Raï",
        "Chaabi",
        "Gnawa",
        "Klezmer",
        "Qawwali",
        "Bhangra",
        "Filmi",
        "Carnatic",
        "Hindustani",
        "Gamelan",
        "Dangdut",
        "Keroncong",
        "Pansori",
        "Gagaku",
        "Min'yō",
        "Taiko",
        "Jiuta",
        "Kayōkyoku",
        "Hyperpop",
        "Bedroom Pop",
        "Dark Ambient",
        "Witch House",
        "Seapunk",
        "Cloud Rap",
        "Emo Rap",
        "Melodic Dubstep",
        "Colour Bass",
        "Riddim",
        "Deathstep",
        "Brostep",
        "Complextro",
        "Glitch Hop",
        "Neurohop",
        "Liquid Funk",
        "Neurofunk",
        "Hardtek",
        "Frenchcore",
        "UK Hardcore",
        "Happy Hardcore",
        "Speedcore",
        "Terrorcore",
        "Extratone",
        "Splittercore",
        "Digital Hardcore",
        "Cybergrind",
        "Mathcore",
        "Grindcore",
        "Powerviolence",
        "Fastcore",
        "Crust Punk",
        "D-beat",
        "Street Punk",
        "Oi!",
        "Hardcore Punk",
        "Anarcho-punk",
        "Celtic Punk",
        "Folk Punk",
        "Cowpunk",
        "Psychobilly",
        "Gothabilly",
        "Rockabilly",
        "Surf Rock",
        "Garage Rock",
        "Proto-punk",
        "Krautrock",
        "Space Rock",
        "Stoner Metal",
        "Post-rock",
        "Post-metal",
        "Atmospheric Black Metal",
        "Blackgaze",
        "Doomgaze",
        "Sludgecore",
        "Mathrock",
        "Midwest Emo",
        "Emocore",
        "Post-hardcore",
        "Melodic Hardcore",
        "Straight Edge",
        "Youth Crew",
        "Beatdown Hardcore",
        "Crossover Thrash",
        "Groove Metal",
        "Nu Metal",
        "Rap Metal",
        "Funk Metal",
        "Alternative Metal",
        "Post-grunge",
        "Riot Grrrl",
        "Queercore",
        "Sadcore",
        "Slowcore",
        "Emo Pop",
        "Pop Punk",
        "Ska Punk",
        "Two-tone",
        "Third Wave Ska",
    }
)

# ---------------------------------------------------------------------------
# Style field element categories
# ---------------------------------------------------------------------------

# An element also counts as a genre when it contains one of these words.
GENRE_WORDS = ("rock", "pop", "jazz", "electronic")

# Instruments and moods match as case-insensitive substrings of an element.
KNOWN_INSTRUMENTS = frozenset(
    {
        "guitar", "electric guitar", "acoustic guitar", "bass", "bass guitar",
        "electric bass", "piano", "keyboard", "synthesizer", "synth", "drums",
        "percussion", "violin", "cello", "saxophone", "trumpet", "flute",
        "harmonica", "organ", "mandolin", "banjo", "harp", "accordion",
        "xylophone", "marimba", "timpani", "tabla", "sitar", "808 drums",
        "analog synth", "digital piano", "string section", "brass section",
        "woodwinds", "choir", "vocals", "background vocals", "lead vocals",
        "harmonies",
    }
)

KNOWN_MOODS = frozenset(
    {
        "energetic", "calm", "dark", "bright", "melancholic", "uplifting",
        "aggressive", "peaceful", "intense", "relaxed", "mysterious", "joyful",
        "sad", "angry", "romantic", "nostalgic", "dreamy", "atmospheric",
        "driving", "flowing", "pulsing", "groovy", "smooth", "rough",
        "polished", "raw", "clean", "distorted", "warm", "cool", "explosive",
        "subtle", "dramatic", "intimate", "epic", "minimalist", "complex",
        "simple", "layered", "sparse", "dense", "heavy", "light", "powerful",
        "gentle",
    }
)

STYLE_FIELD_MAX_GENRE_ELEMENTS = 3

# ---------------------------------------------------------------------------
# Lyrics checks
# ---------------------------------------------------------------------------

LYRICS_HARD_LIMIT = 3_000
LYRICS_SOFT_LIMIT = 2_500
# Runs of this many kanji or more are hard for the generator to pronounce.
KANJI_RUN_LENGTH = 3
# Rough words-per-character ratio for Japanese text, which has no spaces.
JAPANESE_WORDS_PER_CHARACTER = 0.6

# ---------------------------------------------------------------------------
# Prompt refinement
# ---------------------------------------------------------------------------

DEFAULT_TARGET_LENGTH = 120
TARGET_LENGTH_RANGE = (20, 500)

# Genre -> (genres it clashes with, reason, suggestion).
GENRE_CONFLICTS = MappingProxyType(
    {
        "Classical": (
            frozenset({"Death Metal", "Hardcore", "Trap", "Dubstep"}),
            "classical and heavy modern genres pull in opposite directions",
            "Consider classical crossover or symphonic metal",
        ),
        "Death Metal": (
            frozenset({"Ambient", "Lullaby", "Easy Listening"}),
            "aggressive and gentle genres are hard to combine",
            "Consider dark ambient or progressive metal",
        ),
        "Country": (
            frozenset({"Techno", "Dubstep", "Hardcore Techno"}),
            "traditional country and electronic music differ too much",
            "Consider electronic country or country pop",
        ),
        "Opera": (
            frozenset({"Punk", "Grunge", "Noise"}),
            "operatic form and punk attitude clash",
            "Consider operatic metal or theatrical rock",
        ),
    }
)

FILLER_WORDS = (
    "very", "really", "extremely", "highly", "super", "amazing", "incredible",
    "fantastic", "awesome", "beautiful", "wonderful", "perfect",
)

# Longer word -> shorter stand-in, applied only while over the target length.
STYLE_SYNONYMS = MappingProxyType(
    {
        "electronic": "electro",
        "energetic": "energy",
        "beautiful": "pretty",
        "powerful": "strong",
        "melodic": "melody",
        "rhythmic": "rhythm",
        "emotional": "feel",
        "atmospheric": "ambient",
        "aggressive": "hard",
        "peaceful": "calm",
    }
)

COPYRIGHT_TERMS = (
    "copyright", "copyrighted", "trademarked", "artist name", "band name", "song title",
)

MAX_PROMPT_GENRES = 3
MAX_STYLE_ELEMENTS = 15

# Keyword groups whose members reinforce each other in a style field.
COHESION_GROUPS = (
    ("rock", "guitar", "drums", "bass", "electric"),
    ("electronic", "synth", "digital", "techno", "edm"),
    ("classical", "orchestra", "piano", "violin", "symphony"),
    ("jazz", "saxophone", "improvisation", "swing", "blues"),
    ("acoustic", "folk", "organic", "natural", "unplugged"),
)

# (low, high, score) bands for style field length, first match wins.
LENGTH_OPTIMALITY_BANDS = (
    (80, 120, 100),
    (60, 140, 85),
    (40, 160, 70),
    (20, 200, 55),
)
LENGTH_OPTIMALITY_FLOOR = 30
