# app/services/eligibility.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Set

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.fixtures import Fixture
from app.models.game_weeks import GameWeek
from app.models.picks import Pick
from app.models.teams import Team
from app.models.user import User
from app.services.current_context import get_current_context
from app.services.errors import (
    DuplicatePickError,
    NotFoundError,
    StorageFailureError,
    TeamNotInCurrentFixturesError,
)

logger = logging.getLogger(__name__)

# SQLite reports the columns, other backends the constraint name
_DUPLICATE_PICK_MARKERS = ("uq_pick_user_game_week", "picks.user_id, picks.game_week_id")


@dataclass
class AvailableTeam:
    id: int
    name: str
    short_name: Optional[str]
    tla: Optional[str]
    crest: Optional[str]
    is_available: bool


def _teams_playing(db: Session, game_week_id: int) -> Set[int]:
    rows = (
        db.query(Fixture.home_team_id, Fixture.away_team_id)
        .filter(Fixture.game_week_id == game_week_id)
        .all()
    )
    team_ids: Set[int] = set()
    for home_id, away_id in rows:
        team_ids.add(home_id)
        team_ids.add(away_id)
    return team_ids


def _teams_picked_in_round(db: Session, user_id: int, round_id: int) -> Set[int]:
    gw_ids = [gw_id for (gw_id,) in db.query(GameWeek.id).filter(GameWeek.round_id == round_id).all()]
    if not gw_ids:
        return set()
    rows = (
        db.query(Pick.team_id)
        .filter(Pick.user_id == user_id, Pick.game_week_id.in_(gw_ids))
        .all()
    )
    return {team_id for (team_id,) in rows}


def is_duplicate_pick(exc: IntegrityError) -> bool:
    message = str(exc.orig)
    return any(marker in message for marker in _DUPLICATE_PICK_MARKERS)


def get_available_teams(db: Session, user_id: int) -> List[AvailableTeam]:
    """Teams playing in the active game week, flagged by whether the user may still pick them.

    A team is unavailable once the user picked it in any game week of the
    active round, the current one included. Teams without a fixture this week
    are left out. Available teams come first, then alphabetical by name.
    """
    ctx = get_current_context(db)

    try:
        playing = _teams_playing(db, ctx.game_week.id)
        if not playing:
            return []
        used = _teams_picked_in_round(db, user_id, ctx.round.id)
        teams = db.query(Team).filter(Team.id.in_(list(playing))).all()
    except SQLAlchemyError as exc:
        raise StorageFailureError() from exc

    out = [
        AvailableTeam(
            id=t.id,
            name=t.name,
            short_name=t.short_name,
            tla=t.tla,
            crest=t.crest,
            is_available=t.id not in used,
        )
        for t in teams
    ]
    out.sort(key=lambda t: (not t.is_available, t.name))
    return out


def submit_pick(db: Session, user_id: int, team_id: int, now: Optional[datetime] = None) -> Pick:
    """Record ``team_id`` as the user's pick for the active game week.

    Only the (user, game week) unique constraint is enforced here. Whether the
    team was already used earlier in the round is not re-checked: callers are
    expected to offer only what ``get_available_teams`` reports as available.
    """
    ctx = get_current_context(db)
    if now is None:
        now = datetime.now(timezone.utc)

    try:
        if db.get(User, user_id) is None:
            raise NotFoundError(f"User {user_id} not found")
        fixture = (
            db.query(Fixture)
            .filter(
                Fixture.game_week_id == ctx.game_week.id,
                or_(Fixture.home_team_id == team_id, Fixture.away_team_id == team_id),
            )
            .order_by(Fixture.kickoff.asc(), Fixture.id.asc())
            .first()
        )
    except SQLAlchemyError as exc:
        raise StorageFailureError() from exc

    if fixture is None:
        raise TeamNotInCurrentFixturesError(f"Team {team_id} has no fixture in game week {ctx.game_week.number}")

    is_home_team = fixture.home_team_id == team_id

    # Ids come from the fixture's own assignment; round_id can be missing on
    # fixtures attached before rounds were tracked
    pick = Pick(
        user_id=user_id,
        team_id=team_id,
        game_week_id=fixture.game_week_id,
        round_id=fixture.round_id if fixture.round_id is not None else ctx.round.id,
        season_id=fixture.season_id if fixture.season_id is not None else ctx.season.id,
        fixture_id=fixture.id,
        external_id=fixture.external_id,
        is_home_team=is_home_team,
        is_correct=None,
        picked_at=now,
    )
    db.add(pick)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if is_duplicate_pick(exc):
            raise DuplicatePickError() from exc
        logger.exception("Pick for user %s rejected by the store", user_id)
        raise StorageFailureError() from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Storing pick for user %s failed", user_id)
        raise StorageFailureError() from exc

    db.refresh(pick)
    logger.info(
        "User %s picked team %s (fixture %s, %s) in game week %s",
        user_id,
        team_id,
        fixture.id,
        "home" if is_home_team else "away",
        pick.game_week_id,
    )
    return pick
