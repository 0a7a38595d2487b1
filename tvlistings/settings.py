from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Extraction Configuration
    uk_only: bool = True
    team_filter: str | None = None
    display_timezone: str = 'Europe/London'

    # Candidate Matching Configuration
    match_score_threshold: int = 50  # Minimum score to accept a candidate (0-100)
    kickoff_time_window_hours: int = 3

    @field_validator('display_timezone')
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f'Unknown timezone: {value}') from e
        return value

    class Config:
        env_file = '.env'
        env_prefix = ''


settings = Settings()
