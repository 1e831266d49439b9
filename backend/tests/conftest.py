"""Shared fixtures: an in-memory SQLite database per test and small entity factories."""

import os

# Must be set before app.core.config is imported anywhere
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.core.roles import ROLE_ADMIN, ROLE_USER
from app.db.base import Base
from app.db.session import enable_sqlite_foreign_keys
from app.models.fixtures import Fixture
from app.models.game_weeks import GameWeek
from app.models.rounds import Round
from app.models.season import Season
from app.models.teams import Team
from app.models.user import User


@pytest.fixture()
def engine():
    """Fresh in-memory database shared by every connection of the test."""
    engine = enable_sqlite_foreign_keys(
        create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def factory(db_session):
    """Helpers that insert committed rows and return them."""

    def _save(obj):
        db_session.add(obj)
        db_session.commit()
        db_session.refresh(obj)
        return obj

    def season(name="2024/25", is_active=False):
        start = datetime(2024, 8, 1)
        return _save(Season(name=name, start_date=start, end_date=start + timedelta(days=300), is_active=is_active))

    def round_(season_obj, number, is_active=False):
        return _save(Round(season_id=season_obj.id, number=number, is_active=is_active))

    def game_week(round_obj, number, deadline=None, is_active=False):
        if deadline is None:
            deadline = datetime.now(timezone.utc) + timedelta(days=7)
        return _save(GameWeek(round_id=round_obj.id, number=number, deadline=deadline, is_active=is_active))

    def team(name, tla=None):
        return _save(Team(name=name, short_name=name, tla=tla or name[:3].upper(), crest=None))

    def fixture(home, away, season_obj, game_week_obj=None, kickoff=None, external_id=None):
        round_id = None
        if game_week_obj is not None:
            round_id = game_week_obj.round_id
        return _save(
            Fixture(
                external_id=external_id,
                home_team_id=home.id,
                away_team_id=away.id,
                kickoff=kickoff or datetime(2024, 8, 17, 15, 0),
                season_id=season_obj.id,
                round_id=round_id,
                game_week_id=game_week_obj.id if game_week_obj is not None else None,
            )
        )

    def user(username="player", role=ROLE_USER):
        return _save(User(username=username, email=f"{username}@example.com", role=role))

    def admin(username="admin"):
        return user(username=username, role=ROLE_ADMIN)

    return SimpleNamespace(
        season=season,
        round=round_,
        game_week=game_week,
        team=team,
        fixture=fixture,
        user=user,
        admin=admin,
    )


@pytest.fixture()
def league(factory):
    """Season "2024/25": round 1 (game weeks 1, 2) and round 2 (game week 3).

    Game week 1 plays Arsenal v Chelsea and Liverpool v Everton; game week 2
    plays Chelsea v Liverpool and Everton v Arsenal. Fulham exists but has no
    fixture in either week.
    """
    season = factory.season("2024/25")
    round1 = factory.round(season, 1)
    round2 = factory.round(season, 2)
    gw1 = factory.game_week(round1, 1)
    gw2 = factory.game_week(round1, 2)
    gw3 = factory.game_week(round2, 1)

    arsenal = factory.team("Arsenal")
    chelsea = factory.team("Chelsea")
    liverpool = factory.team("Liverpool")
    everton = factory.team("Everton")
    fulham = factory.team("Fulham")

    fx1 = factory.fixture(arsenal, chelsea, season, gw1, kickoff=datetime(2024, 8, 17, 12, 30))
    fx2 = factory.fixture(liverpool, everton, season, gw1, kickoff=datetime(2024, 8, 17, 15, 0))
    fx3 = factory.fixture(chelsea, liverpool, season, gw2, kickoff=datetime(2024, 8, 24, 15, 0))
    fx4 = factory.fixture(everton, arsenal, season, gw2, kickoff=datetime(2024, 8, 24, 17, 30))
    fx5 = factory.fixture(arsenal, liverpool, season, gw3, kickoff=datetime(2024, 9, 1, 15, 0))

    return SimpleNamespace(
        season=season,
        round1=round1,
        round2=round2,
        gw1=gw1,
        gw2=gw2,
        gw3=gw3,
        arsenal=arsenal,
        chelsea=chelsea,
        liverpool=liverpool,
        everton=everton,
        fulham=fulham,
        fixtures=[fx1, fx2, fx3, fx4, fx5],
    )
