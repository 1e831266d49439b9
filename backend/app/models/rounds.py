from sqlalchemy import Column, Integer, Boolean, ForeignKey, UniqueConstraint, Index, text

from app.db.base import Base


class Round(Base):
    __tablename__ = "rounds"

    id = Column(Integer, primary_key=True, index=True)
    season_id = Column(Integer, ForeignKey("seasons.id"), nullable=False, index=True)
    number = Column(Integer, nullable=False)

    is_active = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        UniqueConstraint("season_id", "number", name="uq_round_season_number"),
        # Single active round across every season
        Index(
            "uq_rounds_single_active",
            "is_active",
            unique=True,
            sqlite_where=text("is_active = 1"),
            postgresql_where=text("is_active"),
        ),
    )
