# app/services/activation.py
"""Single-active bookkeeping for the Season -> Round -> GameWeek hierarchy.

Activation happens in two steps:

1. ``plan_activation`` is a pure function. From the requested level/id and a
   snapshot of the relevant rounds and game weeks it works out which levels are
   reset and which row becomes active at each level (cascading down to the
   lowest-numbered child).
2. ``_apply_plan`` clears the reset levels and activates the planned rows
   inside the caller's transaction. The partial unique indexes on
   ``is_active`` guarantee a commit can never leave two active rows at a level.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.game_weeks import GameWeek
from app.models.rounds import Round
from app.models.season import Season
from app.services.errors import NotFoundError, PickemError, StorageFailureError

logger = logging.getLogger(__name__)


class Level(str, Enum):
    SEASON = "season"
    ROUND = "round"
    GAME_WEEK = "game_week"


LEVEL_ORDER = (Level.SEASON, Level.ROUND, Level.GAME_WEEK)

_MODELS = {
    Level.SEASON: Season,
    Level.ROUND: Round,
    Level.GAME_WEEK: GameWeek,
}


@dataclass(frozen=True)
class RoundRef:
    id: int
    season_id: int
    number: int


@dataclass(frozen=True)
class GameWeekRef:
    id: int
    round_id: int
    number: int


@dataclass
class Hierarchy:
    """The rounds and game weeks an activation needs to look at."""

    rounds: List[RoundRef] = field(default_factory=list)
    game_weeks: List[GameWeekRef] = field(default_factory=list)

    def get_round(self, round_id: int) -> Optional[RoundRef]:
        return next((r for r in self.rounds if r.id == round_id), None)

    def get_game_week(self, game_week_id: int) -> Optional[GameWeekRef]:
        return next((gw for gw in self.game_weeks if gw.id == game_week_id), None)

    def first_round_of(self, season_id: int) -> Optional[RoundRef]:
        candidates = [r for r in self.rounds if r.season_id == season_id]
        return min(candidates, key=lambda r: r.number, default=None)

    def first_game_week_of(self, round_id: int) -> Optional[GameWeekRef]:
        candidates = [gw for gw in self.game_weeks if gw.round_id == round_id]
        return min(candidates, key=lambda gw: gw.number, default=None)


@dataclass(frozen=True)
class ActivationPlan:
    reset: frozenset
    season_id: Optional[int] = None
    round_id: Optional[int] = None
    game_week_id: Optional[int] = None

    def target_for(self, level: Level) -> Optional[int]:
        return {
            Level.SEASON: self.season_id,
            Level.ROUND: self.round_id,
            Level.GAME_WEEK: self.game_week_id,
        }[level]

    def as_dict(self) -> Dict[str, Optional[int]]:
        return {
            "season_id": self.season_id,
            "round_id": self.round_id,
            "game_week_id": self.game_week_id,
        }


def plan_activation(
    level: Level,
    target_id: int,
    hierarchy: Hierarchy,
    cascade_upward: bool = False,
) -> ActivationPlan:
    """Compute the state change for activating ``target_id`` at ``level``.

    Downward, a season brings its lowest-numbered round and that round's
    lowest-numbered game week; a round brings its lowest-numbered game week.
    With ``cascade_upward`` a round also activates its season, and a game week
    its round and season. Levels listed in ``reset`` are fully deactivated
    before the targets are switched on, so a missing child leaves its level
    with nothing active.
    """
    if level is Level.SEASON:
        first_round = hierarchy.first_round_of(target_id)
        first_gw = hierarchy.first_game_week_of(first_round.id) if first_round else None
        return ActivationPlan(
            reset=frozenset(LEVEL_ORDER),
            season_id=target_id,
            round_id=first_round.id if first_round else None,
            game_week_id=first_gw.id if first_gw else None,
        )

    if level is Level.ROUND:
        rnd = hierarchy.get_round(target_id)
        if rnd is None:
            raise NotFoundError(f"Round {target_id} not found")
        first_gw = hierarchy.first_game_week_of(rnd.id)
        reset = {Level.ROUND, Level.GAME_WEEK}
        season_id = None
        if cascade_upward:
            reset.add(Level.SEASON)
            season_id = rnd.season_id
        return ActivationPlan(
            reset=frozenset(reset),
            season_id=season_id,
            round_id=rnd.id,
            game_week_id=first_gw.id if first_gw else None,
        )

    gw = hierarchy.get_game_week(target_id)
    if gw is None:
        raise NotFoundError(f"Game week {target_id} not found")
    if not cascade_upward:
        return ActivationPlan(reset=frozenset({Level.GAME_WEEK}), game_week_id=gw.id)

    rnd = hierarchy.get_round(gw.round_id)
    if rnd is None:
        raise NotFoundError(f"Round {gw.round_id} not found")
    return ActivationPlan(
        reset=frozenset(LEVEL_ORDER),
        season_id=rnd.season_id,
        round_id=rnd.id,
        game_week_id=gw.id,
    )


def _load_hierarchy(db: Session, level: Level, target_id: int) -> Hierarchy:
    round_q = db.query(Round.id, Round.season_id, Round.number)
    gw_q = db.query(GameWeek.id, GameWeek.round_id, GameWeek.number)

    if level is Level.SEASON:
        rounds = round_q.filter(Round.season_id == target_id).all()
        round_ids = [r.id for r in rounds]
        game_weeks = gw_q.filter(GameWeek.round_id.in_(round_ids)).all() if round_ids else []
    elif level is Level.ROUND:
        rounds = round_q.filter(Round.id == target_id).all()
        game_weeks = gw_q.filter(GameWeek.round_id == target_id).all()
    else:
        game_weeks = gw_q.filter(GameWeek.id == target_id).all()
        parent_ids = [gw.round_id for gw in game_weeks]
        rounds = round_q.filter(Round.id.in_(parent_ids)).all() if parent_ids else []

    return Hierarchy(
        rounds=[RoundRef(r.id, r.season_id, r.number) for r in rounds],
        game_weeks=[GameWeekRef(gw.id, gw.round_id, gw.number) for gw in game_weeks],
    )


def _apply_plan(db: Session, plan: ActivationPlan) -> None:
    # Clear first: the partial unique index rejects a second active row
    for level in LEVEL_ORDER:
        if level not in plan.reset:
            continue
        model = _MODELS[level]
        db.query(model).filter(model.is_active == True).update(  # noqa: E712
            {model.is_active: False}, synchronize_session=False
        )

    for level in LEVEL_ORDER:
        target = plan.target_for(level)
        if target is None:
            continue
        model = _MODELS[level]
        db.query(model).filter(model.id == target).update(
            {model.is_active: True}, synchronize_session=False
        )


def _activate(db: Session, level: Level, target_id: int, cascade_upward: Optional[bool]) -> ActivationPlan:
    if cascade_upward is None:
        cascade_upward = settings.ACTIVATION_CASCADES_UPWARD

    model = _MODELS[level]
    try:
        if db.get(model, target_id) is None:
            raise NotFoundError(f"{level.value.replace('_', ' ').capitalize()} {target_id} not found")

        hierarchy = _load_hierarchy(db, level, target_id)
        plan = plan_activation(level, target_id, hierarchy, cascade_upward=cascade_upward)
        _apply_plan(db, plan)
        db.commit()
    except PickemError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Activation of %s %s failed, rolled back", level.value, target_id)
        raise StorageFailureError() from exc

    logger.info(
        "Activated %s %s -> season=%s round=%s game_week=%s",
        level.value,
        target_id,
        plan.season_id,
        plan.round_id,
        plan.game_week_id,
    )
    return plan


def activate_season(db: Session, season_id: int, cascade_upward: Optional[bool] = None) -> ActivationPlan:
    return _activate(db, Level.SEASON, season_id, cascade_upward)


def activate_round(db: Session, round_id: int, cascade_upward: Optional[bool] = None) -> ActivationPlan:
    return _activate(db, Level.ROUND, round_id, cascade_upward)


def activate_game_week(db: Session, game_week_id: int, cascade_upward: Optional[bool] = None) -> ActivationPlan:
    return _activate(db, Level.GAME_WEEK, game_week_id, cascade_upward)
