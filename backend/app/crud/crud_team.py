# app/crud/crud_team.py
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from app.models.teams import Team


def upsert_team_by_name(
    db: Session,
    name: str,
    short_name: Optional[str] = None,
    tla: Optional[str] = None,
    crest: Optional[str] = None,
) -> Tuple[Team, bool]:
    """Create the team, or refresh its descriptive fields. Name is the identity.

    Flushes but does not commit; returns ``(team, created)``.
    """
    name = name.strip()
    team = db.query(Team).filter(Team.name == name).one_or_none()
    if team is None:
        team = Team(name=name, short_name=short_name, tla=tla, crest=crest)
        db.add(team)
        db.flush()
        return team, True

    # Do not overwrite a good value with None/empty
    if short_name:
        team.short_name = short_name
    if tla:
        team.tla = tla
    if crest:
        team.crest = crest
    return team, False
