"""Pure predicates that tag a scraped line by its role in a listing."""

from .constants import (
    BOILERPLATE_RES,
    COMPETITION_NAME_RE,
    COMPETITION_PREFIX_RE,
    DATE_HEADER_RE,
    EMOJI_RE,
    MARKUP_RE,
    ROUND_NUMBER_RE,
    TIME_MARKER_RE,
    VS_SEPARATOR_RE,
    LineKind,
)
from .structures import LineClassification


def is_date_header(line: str) -> bool:
    """Line starts with a weekday name, e.g. 'Friday, 5th December'"""
    return bool(DATE_HEADER_RE.match(line.strip()))


def match_time_marker(line: str) -> str | None:
    """Return the clock time from an 'ST: 15:00' line, else None"""
    match = TIME_MARKER_RE.match(line.strip())
    return match.group(1) if match else None


def find_vs_separator(line: str) -> tuple[int, str] | None:
    """Locate the first standalone ' v ' / ' vs ' token.

    Returns the match position and the matched separator text, so the caller
    can split home/away at exactly that point.
    """
    match = VS_SEPARATOR_RE.search(line)
    if not match:
        return None
    return match.start(), match.group(0)


def is_stop_note(line: str) -> bool:
    """Boilerplate, round-number and competition lines never count as channels"""
    text = line.strip()
    if any(pattern.match(text) for pattern in BOILERPLATE_RES):
        return True
    if ROUND_NUMBER_RE.search(text):
        return True
    if COMPETITION_NAME_RE.match(text):
        return True
    return bool(COMPETITION_PREFIX_RE.match(text))


def classify(line: str) -> LineClassification:
    """Classify a line; precedence is date, time, teams, stop note"""
    if is_date_header(line):
        return LineClassification(kind=LineKind.DATE_HEADER)

    time_string = match_time_marker(line)
    if time_string is not None:
        return LineClassification(kind=LineKind.TIME_MARKER, time_string=time_string)

    separator = find_vs_separator(line)
    if separator is not None:
        index, text = separator
        return LineClassification(
            kind=LineKind.VS_LINE, separator_index=index, separator=text
        )

    if is_stop_note(line):
        return LineClassification(kind=LineKind.STOP_NOTE)

    return LineClassification()


def split_teams(line: str, classification: LineClassification) -> tuple[str, str]:
    """Split a teams line at the separator found by classify()"""
    if not classification.is_vs_line or classification.separator is None:
        return '', ''
    start = classification.separator_index
    end = start + len(classification.separator)
    return line[:start].strip(), line[end:].strip()


def normalize_channel_name(name: str) -> str:
    return ' '.join((name or '').split())


def clean_channel_line(line: str) -> str:
    """Strip emoji and markup noise from a channel line"""
    text = MARKUP_RE.sub(' ', line)
    text = EMOJI_RE.sub(' ', text)
    text = text.replace('&nbsp;', ' ').replace('&amp;', '&')
    return normalize_channel_name(text)
