from collections.abc import Iterable

from tvlistings.extraction.constants import (
    EXCLUDED_COMPETITION_KEYWORDS,
    UK_DOMESTIC_COMPETITIONS,
    WOMENS_TERMS,
)
from tvlistings.extraction.structures import ResolvedFixture


class CompetitionFilter:
    """Keyword taxonomy filter for domestic men's fixtures"""

    def __init__(
        self,
        uk_only: bool = True,
        womens_terms: Iterable[str] = WOMENS_TERMS,
        excluded_keywords: Iterable[str] = EXCLUDED_COMPETITION_KEYWORDS,
        allowed_competitions: Iterable[str] = UK_DOMESTIC_COMPETITIONS,
    ) -> None:
        self.uk_only = uk_only
        self.womens_terms = tuple(term.lower() for term in womens_terms)
        self.excluded_keywords = tuple(k.lower() for k in excluded_keywords)
        self.allowed_competitions = tuple(c.lower() for c in allowed_competitions)

    def rejection_reason(self, fixture: ResolvedFixture) -> str | None:
        """Why the fixture is dropped, or None when it is kept"""
        competition = (fixture.competition or '').lower()
        haystack = ' '.join([competition, fixture.home.lower(), fixture.away.lower()])

        for term in self.womens_terms:
            if term in haystack:
                return f"women's football term '{term}'"

        for keyword in self.excluded_keywords:
            if keyword in competition:
                return f"excluded competition keyword '{keyword}'"

        if self.uk_only and not any(
            name in competition for name in self.allowed_competitions
        ):
            return 'not a UK domestic competition'

        return None

    def keep(self, fixture: ResolvedFixture) -> bool:
        return self.rejection_reason(fixture) is None
