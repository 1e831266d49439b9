from sqlalchemy import Column, Integer, Boolean, DateTime, ForeignKey, UniqueConstraint, Index, text

from app.db.base import Base


class GameWeek(Base):
    __tablename__ = "game_weeks"

    id = Column(Integer, primary_key=True, index=True)
    round_id = Column(Integer, ForeignKey("rounds.id"), nullable=False, index=True)
    number = Column(Integer, nullable=False)

    deadline = Column(DateTime, nullable=False)  # picks close here (UTC)
    is_active = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        UniqueConstraint("round_id", "number", name="uq_game_week_round_number"),
        Index(
            "uq_game_weeks_single_active",
            "is_active",
            unique=True,
            sqlite_where=text("is_active = 1"),
            postgresql_where=text("is_active"),
        ),
    )
