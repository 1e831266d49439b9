from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from app.core.game_config import DEFAULT_FIXTURE_STATUS, FIXTURE_STATUSES, WINNERS
from app.schemas.seasons import naive_utc
from app.schemas.teams import TeamOut


def _check_status(v: str) -> str:
    v = v.strip().upper()
    if v not in FIXTURE_STATUSES:
        raise ValueError(f"Invalid status. Allowed: {sorted(FIXTURE_STATUSES)}")
    return v


class FixtureCreate(BaseModel):
    season_id: int
    home_team_id: int
    away_team_id: int
    kickoff: datetime
    status: str = DEFAULT_FIXTURE_STATUS
    external_id: Optional[int] = None

    @field_validator("status")
    @classmethod
    def _validate_status(cls, v: str) -> str:
        return _check_status(v)

    @field_validator("kickoff")
    @classmethod
    def _to_utc(cls, v: datetime) -> datetime:
        return naive_utc(v)


class FixtureOut(BaseModel):
    id: int
    external_id: Optional[int] = None
    season_id: int
    round_id: Optional[int] = None
    game_week_id: Optional[int] = None
    home_team_id: int
    away_team_id: int
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    kickoff: datetime
    status: str
    winner: Optional[str] = None

    model_config = {"from_attributes": True}


class FixtureWithTeamsOut(FixtureOut):
    home_team: TeamOut
    away_team: TeamOut


class FixtureAssignIn(BaseModel):
    fixture_ids: list[int] = Field(min_length=1)
    game_week_id: int


# --- Feed import (data already fetched by the external sync job) ---

class FeedTeam(BaseModel):
    name: str = Field(min_length=1)
    short_name: Optional[str] = None
    tla: Optional[str] = None
    crest: Optional[str] = None


class FixtureFeedItem(BaseModel):
    external_id: int
    home_team: FeedTeam
    away_team: FeedTeam
    kickoff: datetime
    status: str = DEFAULT_FIXTURE_STATUS
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    winner: Optional[str] = None
    external_season_id: Optional[int] = None

    @field_validator("status")
    @classmethod
    def _validate_status(cls, v: str) -> str:
        return _check_status(v)

    @field_validator("kickoff")
    @classmethod
    def _to_utc(cls, v: datetime) -> datetime:
        return naive_utc(v)

    @field_validator("winner")
    @classmethod
    def _check_winner(cls, v):
        if v is not None and v not in WINNERS:
            raise ValueError(f"Invalid winner. Allowed: {sorted(WINNERS)}")
        return v

    @model_validator(mode="after")
    def _check_teams(self):
        if self.home_team.name.strip() == self.away_team.name.strip():
            raise ValueError("Home and away team cannot be the same")
        return self


class FixtureImportIn(BaseModel):
    season_id: int
    fixtures: list[FixtureFeedItem]


class FixtureImportOut(BaseModel):
    season_id: int
    created: int
    updated: int
    total: int
