from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from app.schemas.seasons import GameWeekOut, RoundOut, SeasonOut


class PickCreate(BaseModel):
    team_id: int


class PickOut(BaseModel):
    id: int
    user_id: int
    team_id: int
    game_week_id: int
    round_id: int
    season_id: int
    fixture_id: int
    external_id: Optional[int] = None
    is_home_team: bool
    is_correct: Optional[bool] = None
    picked_at: datetime

    model_config = {"from_attributes": True}


class AvailableTeamOut(BaseModel):
    id: int
    name: str
    short_name: Optional[str] = None
    tla: Optional[str] = None
    crest: Optional[str] = None
    is_available: bool

    model_config = {"from_attributes": True}


class CurrentOut(BaseModel):
    season: SeasonOut
    round: RoundOut
    game_week: GameWeekOut
    deadline_passed: bool
