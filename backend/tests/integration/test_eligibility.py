"""Available teams and pick submission for the active game week."""

from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from app.models.picks import Pick
from app.services.activation import activate_game_week, activate_round, activate_season
from app.services.eligibility import get_available_teams, is_duplicate_pick, submit_pick
from app.services.errors import (
    DuplicatePickError,
    NoActiveSeasonError,
    NotFoundError,
    TeamNotInCurrentFixturesError,
)


@pytest.fixture()
def player(factory):
    return factory.user("player")


@pytest.fixture()
def live(db_session, league):
    activate_season(db_session, league.season.id)
    return league


def _summary(teams):
    return [(t.name, t.is_available) for t in teams]


def test_all_week_teams_available_and_sorted_by_name(db_session, live, player):
    teams = get_available_teams(db_session, player.user_id)

    assert _summary(teams) == [
        ("Arsenal", True),
        ("Chelsea", True),
        ("Everton", True),
        ("Liverpool", True),
    ]


def test_teams_without_fixture_this_week_are_omitted(db_session, live, player):
    names = {t.name for t in get_available_teams(db_session, player.user_id)}

    assert "Fulham" not in names


def test_empty_week_returns_no_teams(db_session, factory, player):
    season = factory.season("2030/31")
    rnd = factory.round(season, 1)
    factory.game_week(rnd, 1)
    activate_season(db_session, season.id)

    assert get_available_teams(db_session, player.user_id) == []


def test_submit_pick_records_home_side(db_session, live, player):
    pick = submit_pick(db_session, player.user_id, live.arsenal.id)

    assert pick.is_home_team is True
    assert pick.fixture_id == live.fixtures[0].id
    assert (pick.season_id, pick.round_id, pick.game_week_id) == (live.season.id, live.round1.id, live.gw1.id)
    assert pick.is_correct is None


def test_submit_pick_records_away_side(db_session, live, player):
    pick = submit_pick(db_session, player.user_id, live.everton.id)

    assert pick.is_home_team is False
    assert pick.fixture_id == live.fixtures[1].id


def test_submitted_pick_round_trips_through_store(db_session, live, player):
    pick = submit_pick(db_session, player.user_id, live.chelsea.id, now=datetime(2024, 8, 15, tzinfo=timezone.utc))

    db_session.expire_all()
    stored = db_session.get(Pick, pick.id)
    assert (stored.team_id, stored.fixture_id, stored.is_home_team) == (live.chelsea.id, live.fixtures[0].id, False)
    assert stored.user_id == player.user_id


def test_second_pick_same_week_is_duplicate(db_session, live, player):
    submit_pick(db_session, player.user_id, live.arsenal.id)

    with pytest.raises(DuplicatePickError):
        submit_pick(db_session, player.user_id, live.arsenal.id)
    with pytest.raises(DuplicatePickError):
        submit_pick(db_session, player.user_id, live.liverpool.id)

    assert db_session.query(Pick).filter_by(user_id=player.user_id).count() == 1


def test_other_users_are_independent(db_session, live, player, factory):
    rival = factory.user("rival")
    submit_pick(db_session, player.user_id, live.arsenal.id)

    pick = submit_pick(db_session, rival.user_id, live.arsenal.id)

    assert pick.user_id == rival.user_id
    assert ("Arsenal", False) in _summary(get_available_teams(db_session, rival.user_id))
    assert ("Arsenal", True) in _summary(get_available_teams(db_session, factory.user("third").user_id))


def test_team_without_fixture_is_rejected(db_session, live, player):
    with pytest.raises(TeamNotInCurrentFixturesError):
        submit_pick(db_session, player.user_id, live.fulham.id)

    assert db_session.query(Pick).count() == 0


def test_picked_team_becomes_unavailable_and_sorts_last(db_session, live, player):
    submit_pick(db_session, player.user_id, live.arsenal.id)

    teams = get_available_teams(db_session, player.user_id)

    assert _summary(teams) == [
        ("Chelsea", True),
        ("Everton", True),
        ("Liverpool", True),
        ("Arsenal", False),
    ]


def test_team_used_earlier_in_round_is_unavailable_next_week(db_session, live, player):
    submit_pick(db_session, player.user_id, live.arsenal.id)
    activate_game_week(db_session, live.gw2.id)

    teams = {t.name: t.is_available for t in get_available_teams(db_session, player.user_id)}

    assert teams == {"Arsenal": False, "Chelsea": True, "Everton": True, "Liverpool": True}


def test_submit_pick_does_not_recheck_round_history(db_session, live, player):
    # Known gap: only the (user, game week) constraint is enforced by submit_pick.
    first = submit_pick(db_session, player.user_id, live.arsenal.id)
    activate_game_week(db_session, live.gw2.id)

    again = submit_pick(db_session, player.user_id, live.arsenal.id)

    assert again.team_id == first.team_id
    assert again.game_week_id == live.gw2.id
    assert again.is_home_team is False


def test_new_round_resets_availability(db_session, live, player):
    submit_pick(db_session, player.user_id, live.arsenal.id)
    activate_round(db_session, live.round2.id)

    teams = _summary(get_available_teams(db_session, player.user_id))

    assert teams == [("Arsenal", True), ("Liverpool", True)]


def test_pick_ids_follow_fixture_assignment(db_session, factory, player):
    season = factory.season("2025/26")
    rnd = factory.round(season, 1)
    gw = factory.game_week(rnd, 1)
    home, away = factory.team("Brentford"), factory.team("Fulham")
    fx = factory.fixture(home, away, season, gw)
    # Attached before rounds were tracked on fixtures
    fx.round_id = None
    db_session.commit()
    activate_season(db_session, season.id)

    pick = submit_pick(db_session, player.user_id, away.id)

    assert (pick.season_id, pick.round_id, pick.game_week_id) == (season.id, rnd.id, gw.id)
    assert pick.external_id is None


def test_store_enforces_one_pick_per_user_and_week(db_session, live, player):
    fx = live.fixtures[0]
    for team_id in (live.arsenal.id, live.chelsea.id):
        db_session.add(
            Pick(
                user_id=player.user_id,
                team_id=team_id,
                game_week_id=live.gw1.id,
                round_id=live.round1.id,
                season_id=live.season.id,
                fixture_id=fx.id,
                is_home_team=team_id == fx.home_team_id,
            )
        )
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_no_active_season_propagates(db_session, league, player):
    with pytest.raises(NoActiveSeasonError):
        get_available_teams(db_session, player.user_id)
    with pytest.raises(NoActiveSeasonError):
        submit_pick(db_session, player.user_id, league.arsenal.id)


def test_pick_for_unknown_user_is_not_found(db_session, live):
    with pytest.raises(NotFoundError):
        submit_pick(db_session, 987654, live.arsenal.id)

    assert db_session.query(Pick).count() == 0


def test_only_the_one_pick_per_week_constraint_counts_as_duplicate():
    unique = IntegrityError(
        "INSERT INTO picks", {}, Exception("UNIQUE constraint failed: picks.user_id, picks.game_week_id")
    )
    named = IntegrityError(
        "INSERT INTO picks", {}, Exception('duplicate key value violates unique constraint "uq_pick_user_game_week"')
    )
    foreign_key = IntegrityError("INSERT INTO picks", {}, Exception("FOREIGN KEY constraint failed"))

    assert is_duplicate_pick(unique)
    assert is_duplicate_pick(named)
    assert not is_duplicate_pick(foreign_key)
