from enum import Enum
import re


class LineKind(str, Enum):
    DATE_HEADER = 'date_header'
    TIME_MARKER = 'time_marker'
    VS_LINE = 'vs_line'
    STOP_NOTE = 'stop_note'
    UNCLASSIFIED = 'unclassified'


class ParserState(str, Enum):
    SEEK_DATE = 'seek_date'
    SEEK_FIXTURE = 'seek_fixture'
    COLLECT_CHANNELS = 'collect_channels'


WEEKDAYS = (
    'Monday',
    'Tuesday',
    'Wednesday',
    'Thursday',
    'Friday',
    'Saturday',
    'Sunday',
)

DATE_HEADER_RE = re.compile(rf'^({"|".join(WEEKDAYS)})', re.IGNORECASE)

# "ST: 15:00" (start time) lines that anchor a fixture block
TIME_MARKER_RE = re.compile(r'^ST:\s*(\d{1,2}:\d{2})\s*$', re.IGNORECASE)

# Standalone " v " / " vs " / " vs. " between two team names
VS_SEPARATOR_RE = re.compile(r'\s+(?:v|vs)\.?\s+', re.IGNORECASE)

BOILERPLATE_RES = (
    re.compile(r'^Please Note:', re.IGNORECASE),
    re.compile(r'^Members LOGIN', re.IGNORECASE),
    re.compile(r'^Members LOGOUT', re.IGNORECASE),
)

ROUND_NUMBER_RE = re.compile(r'-\s*(Week|Round|Matchday|MD|GW)\s+', re.IGNORECASE)

COMPETITION_PREFIX_RE = re.compile(
    r'^(English|Scottish|Welsh|Irish|Northern Irish|Spanish|Italian|German|French|'
    r'Dutch|Portuguese|European|UEFA|FIFA)\s+\S+',
    re.IGNORECASE,
)

# Emoji, pictograms and variation selectors that decorate channel lines
EMOJI_RE = re.compile(
    '['
    '\U0001f000-\U0001faff'
    '\u2300-\u23ff'
    '\u2600-\u27bf'
    '\u2b00-\u2bff'
    '\ufe0f'
    '\u200d'
    ']+'
)

MARKUP_RE = re.compile(r'<[^>]+>')


WOMENS_TERMS = ('women', 'ladies', 'wsl', 'womens')

EXCLUDED_COMPETITION_KEYWORDS = (
    'champions league',
    'europa league',
    'conference league',
    'uefa',
    'la liga',
    'laliga',
    'serie a',
    'bundesliga',
    'ligue 1',
    'eredivisie',
    'primeira liga',
    'world cup',
    'nations league',
    'international',
)

UK_DOMESTIC_COMPETITIONS = (
    'premier league',
    'championship',
    'league one',
    'league two',
    'fa cup',
    'efl',
    'carabao cup',
    'league cup',
    'scottish premiership',
    'scottish league',
    'scottish cup',
    'welsh premier',
    'cymru premier',
    'irish premiership',
    'irish league',
    'league of ireland',
    'national league',
)

# A line that is just a competition name, optionally followed by round info
# ("Premier League", "FA Cup - Round 3"). Channels such as "LaLiga TV" or
# "EFL iFollow" carry extra words and do not match.
COMPETITION_NAME_RE = re.compile(
    r'^(?:'
    + '|'.join(
        re.escape(name)
        for name in (
            *UK_DOMESTIC_COMPETITIONS,
            *EXCLUDED_COMPETITION_KEYWORDS,
            'efl cup',
            'efl trophy',
        )
    )
    + r')\s*(?:[-:(].*)?$',
    re.IGNORECASE,
)
