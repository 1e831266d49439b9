from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String

from app.core.roles import ROLE_USER
from app.db.base import Base


class User(Base):
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, nullable=False)

    role = Column(String, nullable=False, default=ROLE_USER)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)
