"""Team name canonicalization and fuzzy matching."""

from collections.abc import Iterable
from datetime import datetime, timezone
import math
import re
import unicodedata

from tvlistings.extraction.structures import MatchRequest, ResolvedFixture
from tvlistings.settings import settings


SUFFIX_TOKENS_RE = re.compile(r'\b(fc|afc|cf|sc|ac|as|ss|rc|rfc)\b', re.IGNORECASE)
NON_ALNUM_RE = re.compile(r'[^a-z0-9\s]')
WHITESPACE_RE = re.compile(r'\s+')


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def normalize_team_name(name: str | None) -> str:
    """Canonical lowercase form used only for comparisons.

    'Arsenal FC' -> 'arsenal', 'AFC Bournemouth' -> 'bournemouth'
    """
    if not name:
        return ''
    text = unicodedata.normalize('NFKD', name)
    text = ''.join(c for c in text if not unicodedata.combining(c))
    text = text.lower().strip()
    text = SUFFIX_TOKENS_RE.sub('', text)
    text = NON_ALNUM_RE.sub('', text)
    # Punctuation removal can expose new suffix tokens ("f.c." -> "fc")
    text = SUFFIX_TOKENS_RE.sub('', text)
    return WHITESPACE_RE.sub(' ', text).strip()


def _tokens(normalized: str) -> list[str]:
    return [token for token in normalized.split(' ') if len(token) > 2]


def similarity(name1: str | None, name2: str | None) -> int:
    """Similarity score 0-100 between two team names"""
    norm1 = normalize_team_name(name1)
    norm2 = normalize_team_name(name2)

    if not norm1 or not norm2:
        return 0

    if norm1 == norm2:
        return 100

    if norm1 in norm2 or norm2 in norm1:
        shorter = min(len(norm1), len(norm2))
        longer = max(len(norm1), len(norm2))
        return _round_half_up(90 * shorter / longer)

    words1 = _tokens(norm1)
    words2 = _tokens(norm2)
    if not words1 or not words2:
        return 0

    matching = 0
    for w1 in words1:
        if any(w1 == w2 or w1 in w2 or w2 in w1 for w2 in words2):
            matching += 1

    return _round_half_up(80 * matching / max(len(words1), len(words2)))


def symmetric_similarity(name1: str | None, name2: str | None) -> int:
    return max(similarity(name1, name2), similarity(name2, name1))


def teams_match(name1: str | None, name2: str | None) -> bool:
    """Loose yes/no match: equal, containment, or a shared word longer than 3"""
    norm1 = normalize_team_name(name1)
    norm2 = normalize_team_name(name2)

    if not norm1 or not norm2:
        return False
    if norm1 == norm2 or norm1 in norm2 or norm2 in norm1:
        return True

    words2 = {w for w in norm2.split(' ') if len(w) > 3}
    return any(w in words2 for w in norm1.split(' ') if len(w) > 3)


def matches_team_filter(team_filter: str, home: str, away: str) -> bool:
    """Filter string is a substring or superstring of either team name"""
    filter_norm = normalize_team_name(team_filter)
    if not filter_norm:
        return False
    for team in (home, away):
        team_norm = normalize_team_name(team)
        if team_norm and (filter_norm in team_norm or team_norm in filter_norm):
            return True
    return False


def _as_utc(value: datetime | str | None) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace('Z', '+00:00'))
        except ValueError:
            return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def score_candidate(
    candidate: ResolvedFixture,
    request: MatchRequest,
    time_window_hours: int | None = None,
) -> int:
    """Score how well a fixture matches what the caller asked for (0-100).

    Teams weigh 50%, kickoff proximity 40% and league 10%. Reversed home/away
    orientation is accepted at a 10% penalty.
    """
    window = time_window_hours or settings.kickoff_time_window_hours

    team_score = (
        symmetric_similarity(candidate.home, request.home)
        + symmetric_similarity(candidate.away, request.away)
    ) / 2
    swapped_score = (
        symmetric_similarity(candidate.home, request.away)
        + symmetric_similarity(candidate.away, request.home)
    ) / 2
    score = max(team_score, swapped_score * 0.9) * 0.5

    candidate_time = _as_utc(candidate.kickoff_utc)
    requested_time = _as_utc(request.kickoff_utc)
    if candidate_time and requested_time:
        diff_hours = abs((candidate_time - requested_time).total_seconds()) / 3600
        if diff_hours <= 0.5:
            score += 40
        elif diff_hours <= window:
            score += 40 * (1 - diff_hours / window)
        elif candidate_time.date() == requested_time.date():
            score += 20

    if request.league and candidate.competition:
        score += symmetric_similarity(candidate.competition, request.league) * 0.1

    return min(100, _round_half_up(score))


def best_candidate(
    candidates: Iterable[ResolvedFixture],
    request: MatchRequest,
    threshold: int | None = None,
) -> ResolvedFixture | None:
    """Highest scoring candidate at or above the threshold"""
    threshold = settings.match_score_threshold if threshold is None else threshold

    best: ResolvedFixture | None = None
    best_score = -1
    for candidate in candidates:
        score = score_candidate(candidate, request)
        if score > best_score:
            best, best_score = candidate, score

    if best is None or best_score < threshold:
        return None
    return best
