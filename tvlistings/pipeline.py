"""
Fixture extraction pipeline: raw lines in, filtered fixtures and diagnostics out
"""

from collections.abc import Sequence
from datetime import datetime, timezone

import structlog

from tvlistings.extraction.block_parser import parse_blocks
from tvlistings.extraction.structures import (
    FixtureBlock,
    PipelineResult,
    RawLine,
    ResolvedFixture,
    RunOptions,
)
from tvlistings.filters.competition_filter import CompetitionFilter
from tvlistings.kickoff.resolver import resolve_kickoff
from tvlistings.settings import settings
from tvlistings.sources import lines_from_html, lines_from_text, text_from_html
from tvlistings.teams.matching import (
    matches_team_filter,
    normalize_team_name,
    score_candidate,
    symmetric_similarity,
)


logger = structlog.get_logger()


def _unique(items: Sequence[str]) -> list[str]:
    seen: set[str] = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def _fixture_key(block: FixtureBlock, fixture: ResolvedFixture) -> str:
    # unresolved kickoffs fall back to the raw labels so different days stay apart
    if fixture.kickoff_utc:
        date = fixture.kickoff_utc[:10]
    else:
        date = f'{block.date_label}|{block.time_string}'
    home = normalize_team_name(fixture.home)
    away = normalize_team_name(fixture.away)
    return f'{home}|{away}|{date}'


class FixturePipeline:
    """Composes parsing, kickoff resolution, filtering and scoring.

    Holds configuration only; every run keeps its state in locals, so one
    instance can serve concurrent callers.
    """

    def __init__(self, competition_filter: CompetitionFilter | None = None) -> None:
        self.competition_filter = competition_filter

    def run(
        self,
        lines: Sequence[RawLine],
        options: RunOptions | None = None,
        fallback_lines: Sequence[RawLine] | None = None,
    ) -> PipelineResult:
        """Extract fixtures from ``lines``, retrying on ``fallback_lines`` if empty"""
        options = options or RunOptions()
        diagnostics: list[str] = []

        blocks, strategy = self._parse_with_fallback(lines, fallback_lines, diagnostics)

        reference_now = options.reference_now or datetime.now(timezone.utc)
        fixtures = [self._resolve(block, reference_now, diagnostics) for block in blocks]
        fixtures = self._merge_duplicates(blocks, fixtures, diagnostics)

        fixtures = self._apply_competition_filter(fixtures, options, diagnostics)
        fixtures = self._apply_team_filter(fixtures, options, diagnostics)
        fixtures = [self._score(fixture, options) for fixture in fixtures]

        logger.info(
            'Fixture extraction finished',
            strategy=strategy,
            lines=len(lines),
            blocks=len(blocks),
            fixtures=len(fixtures),
            diagnostics=len(diagnostics),
        )
        return PipelineResult(
            fixtures=fixtures, diagnostics=diagnostics, strategy=strategy
        )

    def run_html(self, html: str, options: RunOptions | None = None) -> PipelineResult:
        """Leaf-element lines first, flat page text as the fallback"""
        return self.run(
            lines_from_html(html),
            options,
            fallback_lines=lines_from_text(text_from_html(html)),
        )

    def _parse_with_fallback(
        self,
        lines: Sequence[RawLine],
        fallback_lines: Sequence[RawLine] | None,
        diagnostics: list[str],
    ) -> tuple[list[FixtureBlock], str]:
        blocks = parse_blocks(lines, diagnostics)
        if blocks:
            return blocks, 'primary'

        diagnostics.append(
            f'Primary extraction found no fixtures in {len(lines)} lines'
        )
        if fallback_lines is None:
            logger.warning('No fixtures found and no fallback lines supplied')
            return [], 'none'

        blocks = parse_blocks(fallback_lines, diagnostics)
        if blocks:
            diagnostics.append(
                f'Fallback extraction found {len(blocks)} fixtures '
                f'in {len(fallback_lines)} lines'
            )
            return blocks, 'fallback'

        diagnostics.append(
            f'Fallback extraction found no fixtures in {len(fallback_lines)} lines'
        )
        logger.warning(
            'No fixtures found by either extraction strategy',
            primary_lines=len(lines),
            fallback_lines=len(fallback_lines),
        )
        return [], 'none'

    def _resolve(
        self, block: FixtureBlock, reference_now: datetime, diagnostics: list[str]
    ) -> ResolvedFixture:
        kickoff = resolve_kickoff(block.date_label, block.time_string, reference_now)
        if kickoff.kickoff_utc is None:
            diagnostics.append(
                f'Unparseable kickoff for {block.home} v {block.away}: '
                f'date "{block.date_label}", time "{block.time_string}"'
            )

        competition = ' '.join(block.competition_raw.split()) or None
        return ResolvedFixture(
            home=block.home,
            away=block.away,
            kickoff_utc=kickoff.kickoff_utc,
            kickoff_local=kickoff.kickoff_local,
            competition=competition,
            channels=_unique(block.channels),
        )

    def _apply_competition_filter(
        self,
        fixtures: list[ResolvedFixture],
        options: RunOptions,
        diagnostics: list[str],
    ) -> list[ResolvedFixture]:
        competition_filter = self.competition_filter
        if competition_filter is None:
            uk_only = settings.uk_only if options.uk_only is None else options.uk_only
            competition_filter = CompetitionFilter(uk_only=uk_only)

        kept = []
        for fixture in fixtures:
            reason = competition_filter.rejection_reason(fixture)
            if reason is None:
                kept.append(fixture)
            else:
                diagnostics.append(
                    f'Filtered out {fixture.home} v {fixture.away} '
                    f'({fixture.competition}): {reason}'
                )
        return kept

    def _apply_team_filter(
        self,
        fixtures: list[ResolvedFixture],
        options: RunOptions,
        diagnostics: list[str],
    ) -> list[ResolvedFixture]:
        team_filter = options.team_filter or settings.team_filter
        if not team_filter:
            return fixtures
        if not normalize_team_name(team_filter):
            diagnostics.append(
                f'Ignored team filter "{team_filter}": empty after normalization'
            )
            return fixtures

        kept = []
        for fixture in fixtures:
            if matches_team_filter(team_filter, fixture.home, fixture.away):
                kept.append(fixture)
            else:
                diagnostics.append(
                    f'Filtered out {fixture.home} v {fixture.away}: '
                    f'does not match team "{team_filter}"'
                )
        return kept

    def _merge_duplicates(
        self,
        blocks: Sequence[FixtureBlock],
        fixtures: list[ResolvedFixture],
        diagnostics: list[str],
    ) -> list[ResolvedFixture]:
        merged: dict[str, ResolvedFixture] = {}
        for block, fixture in zip(blocks, fixtures):
            key = _fixture_key(block, fixture)
            existing = merged.get(key)
            if existing is None:
                merged[key] = fixture
                continue
            existing.channels = _unique([*existing.channels, *fixture.channels])
            diagnostics.append(
                f'Merged duplicate fixture {fixture.home} v {fixture.away}'
            )
        return list(merged.values())

    def _score(self, fixture: ResolvedFixture, options: RunOptions) -> ResolvedFixture:
        team_filter = options.team_filter or settings.team_filter
        if options.match_request is not None:
            fixture.match_score = score_candidate(fixture, options.match_request)
        elif team_filter and normalize_team_name(team_filter):
            fixture.match_score = max(
                symmetric_similarity(team_filter, fixture.home),
                symmetric_similarity(team_filter, fixture.away),
            )
        return fixture


def run_pipeline(
    lines: Sequence[RawLine],
    options: RunOptions | None = None,
    fallback_lines: Sequence[RawLine] | None = None,
) -> PipelineResult:
    return FixturePipeline().run(lines, options, fallback_lines)
