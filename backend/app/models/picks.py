from datetime import datetime, timezone

from sqlalchemy import Column, Integer, Boolean, DateTime, ForeignKey, UniqueConstraint

from app.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Pick(Base):
    __tablename__ = "picks"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    team_id = Column(Integer, ForeignKey("teams.id"), nullable=False)

    # Denormalized from the fixture assignment
    game_week_id = Column(Integer, ForeignKey("game_weeks.id"), nullable=False, index=True)
    round_id = Column(Integer, ForeignKey("rounds.id"), nullable=False)
    season_id = Column(Integer, ForeignKey("seasons.id"), nullable=False)

    fixture_id = Column(Integer, ForeignKey("fixtures.id"), nullable=False)
    external_id = Column(Integer, nullable=True)
    is_home_team = Column(Boolean, nullable=False)

    is_correct = Column(Boolean, nullable=True)  # NULL until the fixture resolves
    picked_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    __table_args__ = (
        # One pick per user and game week, enforced by the database
        UniqueConstraint("user_id", "game_week_id", name="uq_pick_user_game_week"),
    )
