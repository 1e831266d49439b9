from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


def naive_utc(v: datetime) -> datetime:
    """Timestamps are stored as naive UTC; aware input is converted first."""
    if v.tzinfo is None:
        return v
    return v.astimezone(timezone.utc).replace(tzinfo=None)


class SeasonCreate(BaseModel):
    name: str = Field(min_length=1, max_length=40)
    start_date: datetime
    end_date: datetime

    @field_validator("start_date", "end_date")
    @classmethod
    def _to_utc(cls, v: datetime) -> datetime:
        return naive_utc(v)

    @model_validator(mode="after")
    def _check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class SeasonOut(BaseModel):
    id: int
    name: str
    start_date: datetime
    end_date: datetime
    is_active: bool

    model_config = {"from_attributes": True}


class RoundCreate(BaseModel):
    season_id: int
    number: int = Field(ge=1)


class RoundOut(BaseModel):
    id: int
    season_id: int
    number: int
    is_active: bool

    model_config = {"from_attributes": True}


class GameWeekCreate(BaseModel):
    round_id: int
    number: int = Field(ge=1)
    deadline: datetime
    # optional: attach fixtures straight away
    fixture_ids: list[int] = []

    @field_validator("deadline")
    @classmethod
    def _to_utc(cls, v: datetime) -> datetime:
        return naive_utc(v)


class GameWeekOut(BaseModel):
    id: int
    round_id: int
    number: int
    deadline: datetime
    is_active: bool

    model_config = {"from_attributes": True}


class ActivationOut(BaseModel):
    ok: bool = True
    season_id: Optional[int] = None
    round_id: Optional[int] = None
    game_week_id: Optional[int] = None
