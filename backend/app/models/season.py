from sqlalchemy import Column, Integer, String, Boolean, DateTime, Index, text

from app.db.base import Base


class Season(Base):
    __tablename__ = "seasons"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, unique=True)  # e.g. "2024/25"

    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)

    is_active = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        # At most one active season: partial unique index over the true rows
        Index(
            "uq_seasons_single_active",
            "is_active",
            unique=True,
            sqlite_where=text("is_active = 1"),
            postgresql_where=text("is_active"),
        ),
    )
