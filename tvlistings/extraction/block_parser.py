"""Single-pass scanner that groups classified lines into fixture blocks.

The scan is a small state machine:

- ``SEEK_DATE``: no date header seen yet. Fixtures found here carry no date.
- ``SEEK_FIXTURE``: waiting for a time marker to anchor the next block.
- ``COLLECT_CHANNELS``: a block is open and following lines are its channels
  until a date header, time marker or teams line closes it. The closing line
  is not consumed, the scan resumes from it in ``SEEK_FIXTURE``.

All state lives in a ``ParseContext`` created per call.
"""

from collections.abc import Sequence

import structlog

from .constants import ParserState
from .line_classifier import (
    classify,
    clean_channel_line,
    is_date_header,
    match_time_marker,
    split_teams,
)
from .structures import FixtureBlock, LineClassification, ParseContext, RawLine


logger = structlog.get_logger()


def _note(diagnostics: list[str] | None, message: str) -> None:
    logger.debug(message)
    if diagnostics is not None:
        diagnostics.append(message)


def _competition_for(
    lines: Sequence[RawLine], classifications: Sequence[LineClassification], i: int
) -> str:
    """Text of the line two above the time marker, unless it belongs elsewhere"""
    if i < 2:
        return ''
    previous = classifications[i - 2]
    if previous.is_date_header or previous.is_time_marker or previous.is_vs_line:
        return ''
    return lines[i - 2].text.strip()


def _open_block(
    context: ParseContext,
    lines: Sequence[RawLine],
    classifications: Sequence[LineClassification],
    i: int,
    diagnostics: list[str] | None,
) -> FixtureBlock | None:
    """Build a block anchored at the time marker on line i, or None to skip it"""
    line = lines[i]
    time_string = classifications[i].time_string

    if i < 1:
        _note(
            diagnostics,
            f'Skipped time marker "{line.text}" at line {line.index}: '
            'no preceding teams line',
        )
        return None

    teams_line = lines[i - 1]
    teams_classification = classifications[i - 1]
    if not teams_classification.is_vs_line:
        _note(
            diagnostics,
            f'Skipped time marker "{line.text}" at line {line.index}: '
            f'preceding line "{teams_line.text}" is not a teams line',
        )
        return None

    home, away = split_teams(teams_line.text, teams_classification)
    if not home or not away or home.lower() == away.lower():
        _note(
            diagnostics,
            f'Skipped teams line "{teams_line.text}" at line {teams_line.index}: '
            'home and away must be non-empty and distinct',
        )
        return None

    for team in (home, away):
        if is_date_header(team) or match_time_marker(team) is not None:
            _note(
                diagnostics,
                f'Skipped teams line "{teams_line.text}" at line {teams_line.index}: '
                f'"{team}" is not a team name',
            )
            return None

    if context.state == ParserState.SEEK_DATE:
        _note(
            diagnostics,
            f'Fixture "{home} v {away}" at line {line.index} has no date header',
        )

    return FixtureBlock(
        date_label=context.current_date,
        competition_raw=_competition_for(lines, classifications, i),
        home=home,
        away=away,
        time_string=time_string,
    )


def parse_blocks(
    lines: Sequence[RawLine], diagnostics: list[str] | None = None
) -> list[FixtureBlock]:
    """Group an ordered line sequence into fixture blocks.

    Skip decisions are appended to ``diagnostics`` when a list is given.
    """
    classifications = [classify(line.text) for line in lines]
    context = ParseContext()

    i = 0
    while i < len(lines):
        line = lines[i]
        classification = classifications[i]

        if context.state == ParserState.COLLECT_CHANNELS:
            if (
                classification.is_date_header
                or classification.is_time_marker
                or classification.is_vs_line
            ):
                context.emit()
                continue

            if not classification.is_stop_note:
                channel = clean_channel_line(line.text)
                if channel and channel not in context.block.channels:
                    context.block.channels.append(channel)
            i += 1
            continue

        if classification.is_date_header:
            context.current_date = line.text.strip()
            context.state = ParserState.SEEK_FIXTURE
        elif classification.is_time_marker:
            block = _open_block(context, lines, classifications, i, diagnostics)
            if block is not None:
                context.block = block
                context.state = ParserState.COLLECT_CHANNELS
        i += 1

    context.emit()

    logger.debug(f'Parsed {len(context.blocks)} fixture blocks from {len(lines)} lines')
    return context.blocks
