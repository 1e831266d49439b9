from sqlalchemy import Column, Integer, String

from app.db.base import Base


class Team(Base):
    __tablename__ = "teams"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String, nullable=False, unique=True)  # e.g. "Arsenal FC"
    short_name = Column(String, nullable=True)           # e.g. "Arsenal"
    tla = Column(String(3), nullable=True)               # e.g. "ARS"
    crest = Column(String, nullable=True)                # crest image URL
