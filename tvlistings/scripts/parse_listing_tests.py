"""Tests for the parse_listing command line script"""

import json

from tvlistings.scripts.parse_listing import main


LISTING = """Friday, 5th December
English Championship - Week 19
Hull City v Middlesbrough
ST: 15:00
Sky Sports Red Button
TNT Sports 1
"""


def test_parse_text_capture(tmp_path, capsys):
    path = tmp_path / 'listing.txt'
    path.write_text(LISTING, encoding='utf-8')

    exit_code = main([str(path), '--reference-now', '2025-12-01T00:00:00+00:00'])

    assert exit_code == 0
    output = json.loads(capsys.readouterr().out)
    assert output['strategy'] == 'primary'
    fixture = output['fixtures'][0]
    assert fixture['home'] == 'Hull City'
    assert fixture['kickoffUtc'] == '2025-12-05T15:00:00Z'
    assert fixture['channels'] == ['Sky Sports Red Button', 'TNT Sports 1']


def test_parse_html_capture_with_match_request(tmp_path, capsys):
    path = tmp_path / 'listing.html'
    body = ''.join(f'<p>{line}</p>' for line in LISTING.splitlines())
    path.write_text(f'<html><body>{body}</body></html>', encoding='utf-8')

    exit_code = main(
        [
            str(path),
            '--reference-now',
            '2025-12-01T00:00:00+00:00',
            '--home',
            'Hull City',
            '--away',
            'Middlesbrough',
        ]
    )

    assert exit_code == 0
    output = json.loads(capsys.readouterr().out)
    assert output['fixtures'][0]['matchScore'] == 50


def test_team_filter_option(tmp_path, capsys):
    path = tmp_path / 'listing.txt'
    path.write_text(LISTING, encoding='utf-8')

    main([str(path), '--team', 'Arsenal'])

    output = json.loads(capsys.readouterr().out)
    assert output['fixtures'] == []
    assert any('does not match team' in d for d in output['diagnostics'])


def test_missing_file(tmp_path):
    assert main([str(tmp_path / 'missing.txt')]) == 1
