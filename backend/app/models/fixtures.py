from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    ForeignKey,
    Index,
)
from sqlalchemy.orm import relationship

from app.core.game_config import DEFAULT_FIXTURE_STATUS
from app.db.base import Base


class Fixture(Base):
    __tablename__ = "fixtures"

    id = Column(Integer, primary_key=True)

    # Feed identifier; NULL for fixtures created by hand
    external_id = Column(Integer, nullable=True, unique=True)
    external_season_id = Column(Integer, nullable=True)

    home_team_id = Column(Integer, ForeignKey("teams.id"), nullable=False)
    away_team_id = Column(Integer, ForeignKey("teams.id"), nullable=False)

    home_score = Column(Integer, nullable=True)
    away_score = Column(Integer, nullable=True)
    kickoff = Column(DateTime, nullable=False)
    status = Column(String, nullable=False, default=DEFAULT_FIXTURE_STATUS)
    winner = Column(String, nullable=True)  # HOME_TEAM / AWAY_TEAM / DRAW

    # Assignment. game_week_id NULL = unassigned pool of the season
    season_id = Column(Integer, ForeignKey("seasons.id"), nullable=False, index=True)
    round_id = Column(Integer, ForeignKey("rounds.id"), nullable=True)
    game_week_id = Column(Integer, ForeignKey("game_weeks.id"), nullable=True, index=True)

    home_team = relationship("Team", foreign_keys=[home_team_id], lazy="joined")
    away_team = relationship("Team", foreign_keys=[away_team_id], lazy="joined")

    __table_args__ = (
        Index("ix_fixture_season_game_week", "season_id", "game_week_id"),
    )
