"""Turn a listing's date label and clock time into a UTC kickoff instant.

Listings show a weekday/day/month label ("Friday, 5th December") and a UK
wall-clock time ("15:00") with no year. The year is inferred from the
reference time so that a season running August to May stays consistent, and
times inside British Summer Time are shifted back one hour to UTC.
"""

import calendar
from datetime import datetime, timedelta, timezone
import re
from zoneinfo import ZoneInfo

import structlog

from tvlistings.extraction.structures import KickoffTimes
from tvlistings.settings import settings


logger = structlog.get_logger()

MONTH_MAP = {
    'jan': 1,
    'feb': 2,
    'mar': 3,
    'apr': 4,
    'may': 5,
    'jun': 6,
    'jul': 7,
    'aug': 8,
    'sep': 9,
    'oct': 10,
    'nov': 11,
    'dec': 12,
}

MONTH_NAME_RE = re.compile(
    r'\b(jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|'
    r'aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)\b',
    re.IGNORECASE,
)
ORDINAL_RE = re.compile(r'(\d+)(st|nd|rd|th)\b', re.IGNORECASE)
DAY_RE = re.compile(r'\b(\d{1,2})\b')
CLOCK_RE = re.compile(r'^(\d{1,2}):(\d{2})$')

SEASON_START_MONTHS = range(8, 13)  # Aug..Dec
SEASON_END_MONTHS = range(1, 7)  # Jan..Jun

LOCAL_FORMAT = '%d/%m/%Y %H:%M'


def strip_ordinals(date_label: str) -> str:
    """'Friday, 5th December' -> 'Friday, 5 December'"""
    return ORDINAL_RE.sub(r'\1', date_label)


def infer_season_year(month: int, reference_now: datetime) -> int:
    """Pick the calendar year a month-only label belongs to"""
    year = reference_now.year
    if month in SEASON_START_MONTHS and reference_now.month in SEASON_END_MONTHS:
        return year - 1
    if month in SEASON_END_MONTHS and reference_now.month in SEASON_START_MONTHS:
        return year + 1
    return year


def last_sunday(year: int, month: int) -> int:
    """Day of month of the last Sunday"""
    last_day = calendar.monthrange(year, month)[1]
    # Sunday-based weekday: Sunday=0 .. Saturday=6
    weekday = (datetime(year, month, last_day).weekday() + 1) % 7
    return last_day - (weekday + 7) % 7


def is_bst(instant: datetime) -> bool:
    """True when the UTC instant falls inside British Summer Time.

    BST runs from 01:00 UTC on the last Sunday of March up to, but not
    including, 01:00 UTC on the last Sunday of October.
    """
    year = instant.year
    start = datetime(year, 3, last_sunday(year, 3), 1, 0, tzinfo=timezone.utc)
    end = datetime(year, 10, last_sunday(year, 10), 1, 0, tzinfo=timezone.utc)
    return start <= instant < end


def _parse_gmt(date_label: str, time_string: str, reference_now: datetime) -> datetime:
    """Parse the label and time as if the wall clock were GMT"""
    cleaned = strip_ordinals(date_label)

    month_match = MONTH_NAME_RE.search(cleaned)
    if not month_match:
        raise ValueError(f'No month name in "{date_label}"')
    month = MONTH_MAP[month_match.group(1)[:3].lower()]

    day_match = DAY_RE.search(cleaned)
    if not day_match:
        raise ValueError(f'No day number in "{date_label}"')
    day = int(day_match.group(1))

    clock_match = CLOCK_RE.match(time_string.strip())
    if not clock_match:
        raise ValueError(f'Invalid time "{time_string}"')
    hour, minute = int(clock_match.group(1)), int(clock_match.group(2))

    year = infer_season_year(month, reference_now)
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


def format_utc(instant: datetime) -> str:
    return instant.astimezone(timezone.utc).isoformat().replace('+00:00', 'Z')


def format_local(instant: datetime, tz_name: str | None = None) -> str:
    zone = ZoneInfo(tz_name or settings.display_timezone)
    return instant.astimezone(zone).strftime(LOCAL_FORMAT)


def resolve_kickoff(
    date_label: str | None,
    time_string: str | None,
    reference_now: datetime | None = None,
) -> KickoffTimes:
    """Resolve a date label and UK clock time to UTC and local kickoff strings.

    Never raises: any parse failure gives a KickoffTimes with both fields None.

    Args:
        date_label: Day label such as 'Sunday, 25th May'
        time_string: 24-hour clock time such as '15:00'
        reference_now: Instant used for season-year inference, defaults to now
    """
    if not date_label or not time_string:
        return KickoffTimes()

    if reference_now is None:
        reference_now = datetime.now(timezone.utc)
    elif reference_now.tzinfo is None:
        reference_now = reference_now.replace(tzinfo=timezone.utc)

    try:
        instant = _parse_gmt(date_label, time_string, reference_now)
    except (ValueError, KeyError, OverflowError) as e:
        logger.debug(f'Could not parse kickoff "{date_label}" "{time_string}": {e}')
        return KickoffTimes()

    bst_applied = is_bst(instant)
    if bst_applied:
        instant -= timedelta(hours=1)

    return KickoffTimes(
        kickoff_utc=format_utc(instant),
        kickoff_local=format_local(instant),
        bst_applied=bst_applied,
    )
