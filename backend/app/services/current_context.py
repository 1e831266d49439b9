# app/services/current_context.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.game_weeks import GameWeek
from app.models.rounds import Round
from app.models.season import Season
from app.services.errors import (
    NoActiveGameWeekError,
    NoActiveRoundError,
    NoActiveSeasonError,
    StorageFailureError,
)


@dataclass
class CurrentContext:
    season: Season
    round: Round
    game_week: GameWeek


def _as_utc(dt: Optional[datetime]) -> Optional[datetime]:
    if dt is None:
        return None
    # Naive values come back from SQLite; they are stored as UTC
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def is_deadline_passed(game_week: GameWeek, now: Optional[datetime] = None) -> bool:
    if now is None:
        now = datetime.now(timezone.utc)
    return _as_utc(now) >= _as_utc(game_week.deadline)


def get_current_context(db: Session) -> CurrentContext:
    """Active season, its active round and that round's active game week.

    Each lookup is scoped by its parent, so an active round that belongs to a
    different season than the active one resolves as "no active round".
    """
    try:
        season = db.query(Season).filter(Season.is_active == True).first()  # noqa: E712
        if season is None:
            raise NoActiveSeasonError()

        rnd = (
            db.query(Round)
            .filter(Round.season_id == season.id, Round.is_active == True)  # noqa: E712
            .first()
        )
        if rnd is None:
            raise NoActiveRoundError()

        game_week = (
            db.query(GameWeek)
            .filter(GameWeek.round_id == rnd.id, GameWeek.is_active == True)  # noqa: E712
            .first()
        )
        if game_week is None:
            raise NoActiveGameWeekError()
    except SQLAlchemyError as exc:
        raise StorageFailureError() from exc

    return CurrentContext(season=season, round=rnd, game_week=game_week)
