from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .constants import LineKind, ParserState


class RawLine(BaseModel):
    """One line of scraped text, in page order"""

    model_config = ConfigDict(frozen=True)

    text: str
    index: int = Field(ge=0)

    @classmethod
    def from_texts(cls, texts: list[str]) -> list['RawLine']:
        return [cls(text=text, index=index) for index, text in enumerate(texts)]


class LineClassification(BaseModel):
    """Result of classifying a single line"""

    model_config = ConfigDict(frozen=True)

    kind: LineKind = LineKind.UNCLASSIFIED
    time_string: str | None = None
    separator_index: int | None = None
    separator: str | None = None

    @computed_field
    @property
    def is_date_header(self) -> bool:
        return self.kind == LineKind.DATE_HEADER

    @computed_field
    @property
    def is_time_marker(self) -> bool:
        return self.kind == LineKind.TIME_MARKER

    @computed_field
    @property
    def is_vs_line(self) -> bool:
        return self.kind == LineKind.VS_LINE

    @computed_field
    @property
    def is_stop_note(self) -> bool:
        return self.kind == LineKind.STOP_NOTE


class FixtureBlock(BaseModel):
    """Raw grouping of date, competition, teams, time and channel lines"""

    date_label: str | None = None
    competition_raw: str = ''
    home: str = Field(min_length=1)
    away: str = Field(min_length=1)
    time_string: str
    channels: list[str] = Field(default_factory=list)


class ParseContext(BaseModel):
    """Accumulator threaded through a single parse pass"""

    state: ParserState = ParserState.SEEK_DATE
    current_date: str | None = None
    block: FixtureBlock | None = None
    blocks: list[FixtureBlock] = Field(default_factory=list)

    def emit(self) -> None:
        """Close the open block, if any, and return to fixture seeking"""
        if self.block is not None:
            self.blocks.append(self.block)
            self.block = None
        self.state = (
            ParserState.SEEK_FIXTURE
            if self.current_date is not None
            else ParserState.SEEK_DATE
        )


class KickoffTimes(BaseModel):
    """Resolved kickoff instant in UTC and as a UK wall-clock string"""

    kickoff_utc: str | None = None
    kickoff_local: str | None = None
    bst_applied: bool = False


class ResolvedFixture(BaseModel):
    """Output fixture record"""

    model_config = ConfigDict(populate_by_name=True)

    home: str = Field(min_length=1)
    away: str = Field(min_length=1)
    kickoff_utc: str | None = Field(default=None, alias='kickoffUtc')
    kickoff_local: str | None = Field(default=None, alias='kickoffLocal')
    competition: str | None = None
    channels: list[str] = Field(default_factory=list)
    match_score: int | None = Field(default=None, ge=0, le=100, alias='matchScore')


class MatchRequest(BaseModel):
    """What a caller is looking for when scoring candidate fixtures"""

    home: str
    away: str
    kickoff_utc: datetime | None = None
    league: str | None = None


class RunOptions(BaseModel):
    """Per-call pipeline options; unset values fall back to settings"""

    team_filter: str | None = None
    uk_only: bool | None = None
    reference_now: datetime | None = None
    match_request: MatchRequest | None = None


class PipelineResult(BaseModel):
    """Fixtures plus the diagnostics explaining every skip decision"""

    fixtures: list[ResolvedFixture] = Field(default_factory=list)
    diagnostics: list[str] = Field(default_factory=list)
    strategy: str = Field(default='none', pattern='^(primary|fallback|none)$')
