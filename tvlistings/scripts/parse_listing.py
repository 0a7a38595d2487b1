"""Script to extract fixtures from a saved TV listings page (text or HTML)"""

import argparse
from datetime import datetime
import json
from pathlib import Path
import sys

import structlog

from tvlistings.extraction.structures import MatchRequest, RunOptions
from tvlistings.pipeline import FixturePipeline
from tvlistings.sources import lines_from_text


logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Extract football fixtures and TV channels from a listings page capture'
    )
    parser.add_argument(
        'path',
        type=Path,
        help='Path to a .txt page-text capture or a .html page capture',
    )
    parser.add_argument(
        '--team',
        type=str,
        help='Only keep fixtures involving this team (e.g. "Arsenal")',
    )
    parser.add_argument(
        '--all-competitions',
        action='store_true',
        help='Keep non-UK domestic competitions (excluded keywords still apply)',
    )
    parser.add_argument(
        '--reference-now',
        type=datetime.fromisoformat,
        help='ISO timestamp used for season-year inference (default: now)',
    )
    parser.add_argument('--home', type=str, help='Home team to score fixtures against')
    parser.add_argument('--away', type=str, help='Away team to score fixtures against')
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the script"""
    args = build_parser().parse_args(argv)

    if not args.path.exists():
        logger.error(f'File not found: {args.path}')
        return 1

    content = args.path.read_text(encoding='utf-8')

    match_request = None
    if args.home and args.away:
        match_request = MatchRequest(home=args.home, away=args.away)

    options = RunOptions(
        team_filter=args.team,
        uk_only=False if args.all_competitions else None,
        reference_now=args.reference_now,
        match_request=match_request,
    )

    pipeline = FixturePipeline()
    if args.path.suffix.lower() in ('.html', '.htm'):
        result = pipeline.run_html(content, options)
    else:
        result = pipeline.run(lines_from_text(content), options)

    print(json.dumps(result.model_dump(mode='json', by_alias=True), indent=2))
    return 0


if __name__ == '__main__':
    sys.exit(main())
