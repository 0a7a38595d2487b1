import pytest

from tvlistings.extraction.structures import ResolvedFixture
from tvlistings.filters.competition_filter import CompetitionFilter


def make_fixture(competition, home='Hull City', away='Middlesbrough'):
    return ResolvedFixture(home=home, away=away, competition=competition)


@pytest.mark.parametrize('uk_only', [True, False])
def test_womens_competition_is_excluded(uk_only):
    competition_filter = CompetitionFilter(uk_only=uk_only)

    assert competition_filter.keep(make_fixture("Women's Super League")) is False
    assert competition_filter.keep(make_fixture('Barclays WSL')) is False


def test_womens_team_name_is_excluded():
    fixture = make_fixture('FA Cup', home='Arsenal Women', away='Chelsea Women')

    assert CompetitionFilter().keep(fixture) is False


@pytest.mark.parametrize(
    'competition',
    [
        'UEFA Champions League',
        'Europa League - Matchday 5',
        'Spanish La Liga',
        'Italian Serie A',
        'German Bundesliga',
        'French Ligue 1',
        'FIFA World Cup Qualifier',
        'International Friendly',
    ],
)
@pytest.mark.parametrize('uk_only', [True, False])
def test_international_competitions_are_excluded(competition, uk_only):
    assert CompetitionFilter(uk_only=uk_only).keep(make_fixture(competition)) is False


@pytest.mark.parametrize(
    'competition',
    [
        'English Championship - Week 19',
        'English Premier League',
        'English League One',
        'English League Two',
        'Emirates FA Cup',
        'Carabao Cup',
        'Scottish Premiership',
        'Welsh Premier League',
        'Irish Premiership',
        'Vanarama National League',
    ],
)
def test_uk_domestic_competitions_are_kept(competition):
    assert CompetitionFilter(uk_only=True).keep(make_fixture(competition)) is True


def test_uk_only_drops_unknown_competitions():
    fixture = make_fixture('Saudi Pro League')

    assert CompetitionFilter(uk_only=True).keep(fixture) is False
    assert CompetitionFilter(uk_only=False).keep(fixture) is True


def test_missing_competition():
    fixture = make_fixture(None)

    assert CompetitionFilter(uk_only=True).keep(fixture) is False
    assert CompetitionFilter(uk_only=False).keep(fixture) is True


def test_empty_allow_list_excludes_everything():
    competition_filter = CompetitionFilter(uk_only=True, allowed_competitions=[])

    assert competition_filter.keep(make_fixture('English Premier League')) is False


def test_rejection_reasons():
    competition_filter = CompetitionFilter(uk_only=True)

    assert competition_filter.rejection_reason(make_fixture('Premier League')) is None
    assert 'women' in competition_filter.rejection_reason(
        make_fixture("Women's Super League")
    )
    assert 'uefa' in competition_filter.rejection_reason(
        make_fixture('UEFA Super Cup')
    )
    assert competition_filter.rejection_reason(make_fixture('MLS')) == (
        'not a UK domestic competition'
    )


def test_filter_is_order_independent():
    competition_filter = CompetitionFilter()
    fixtures = [
        make_fixture('English Premier League'),
        make_fixture("Women's Super League"),
        make_fixture('Scottish Premiership'),
    ]

    forward = [competition_filter.keep(f) for f in fixtures]
    backward = [competition_filter.keep(f) for f in reversed(fixtures)]

    assert forward == list(reversed(backward))
