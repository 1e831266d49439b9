"""Pure activation planning: no database involved."""

import pytest

from app.services.activation import (
    ActivationPlan,
    GameWeekRef,
    Hierarchy,
    Level,
    RoundRef,
    plan_activation,
)
from app.services.errors import NotFoundError

ALL_LEVELS = frozenset({Level.SEASON, Level.ROUND, Level.GAME_WEEK})


@pytest.fixture()
def hierarchy():
    # Season 1: round ids 11 (number 2) and 10 (number 1); season 2: round 20.
    # Ids deliberately disagree with numbers.
    return Hierarchy(
        rounds=[
            RoundRef(id=11, season_id=1, number=2),
            RoundRef(id=10, season_id=1, number=1),
            RoundRef(id=20, season_id=2, number=1),
        ],
        game_weeks=[
            GameWeekRef(id=102, round_id=10, number=2),
            GameWeekRef(id=101, round_id=10, number=1),
            GameWeekRef(id=110, round_id=11, number=1),
        ],
    )


def test_season_cascades_to_lowest_numbered_round_and_game_week(hierarchy):
    plan = plan_activation(Level.SEASON, 1, hierarchy)

    assert plan == ActivationPlan(reset=ALL_LEVELS, season_id=1, round_id=10, game_week_id=101)


def test_season_without_game_weeks_leaves_game_week_level_empty(hierarchy):
    plan = plan_activation(Level.SEASON, 2, hierarchy)

    assert plan.season_id == 2
    assert plan.round_id == 20
    assert plan.game_week_id is None
    assert Level.GAME_WEEK in plan.reset


def test_season_without_rounds_only_activates_the_season(hierarchy):
    plan = plan_activation(Level.SEASON, 3, hierarchy)

    assert plan.as_dict() == {"season_id": 3, "round_id": None, "game_week_id": None}
    assert plan.reset == ALL_LEVELS


def test_round_resets_rounds_and_game_weeks_but_not_seasons(hierarchy):
    plan = plan_activation(Level.ROUND, 11, hierarchy)

    assert plan.reset == frozenset({Level.ROUND, Level.GAME_WEEK})
    assert plan.season_id is None
    assert plan.round_id == 11
    assert plan.game_week_id == 110


def test_round_with_upward_cascade_activates_its_season(hierarchy):
    plan = plan_activation(Level.ROUND, 20, hierarchy, cascade_upward=True)

    assert plan.reset == ALL_LEVELS
    assert plan.as_dict() == {"season_id": 2, "round_id": 20, "game_week_id": None}


def test_game_week_touches_only_its_level(hierarchy):
    plan = plan_activation(Level.GAME_WEEK, 102, hierarchy)

    assert plan == ActivationPlan(reset=frozenset({Level.GAME_WEEK}), game_week_id=102)


def test_game_week_with_upward_cascade_activates_ancestors(hierarchy):
    plan = plan_activation(Level.GAME_WEEK, 102, hierarchy, cascade_upward=True)

    assert plan.as_dict() == {"season_id": 1, "round_id": 10, "game_week_id": 102}
    assert plan.reset == ALL_LEVELS


@pytest.mark.parametrize("level", [Level.ROUND, Level.GAME_WEEK])
def test_unknown_target_is_not_found(hierarchy, level):
    with pytest.raises(NotFoundError):
        plan_activation(level, 999, hierarchy)
