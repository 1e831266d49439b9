from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.security import get_current_user, get_db, require_admin
from app.crud.crud_common import commit_or_fail
from app.models.teams import Team
from app.schemas.teams import TeamCreate, TeamOut, TeamUpdate

router = APIRouter(prefix="/api/v1", tags=["teams"])
admin_router = APIRouter(prefix="/api/v1/admin", tags=["admin"])


@router.get("/teams", response_model=list[TeamOut])
def list_teams(user=Depends(get_current_user), db: Session = Depends(get_db)):
    return db.query(Team).order_by(Team.name.asc()).all()


@admin_router.post("/teams", response_model=TeamOut, status_code=201)
def create_team(payload: TeamCreate, admin=Depends(require_admin), db: Session = Depends(get_db)):
    name = payload.name.strip()
    if db.query(Team).filter_by(name=name).first():
        raise HTTPException(status_code=400, detail=f"Team already exists: {name}")

    t = Team(
        name=name,
        short_name=payload.short_name,
        tla=payload.tla.upper() if payload.tla else None,
        crest=payload.crest,
    )
    db.add(t)
    commit_or_fail(db, f"team {name}")
    db.refresh(t)
    return t


@admin_router.patch("/teams/{team_id}", response_model=TeamOut)
def update_team(team_id: int, payload: TeamUpdate, admin=Depends(require_admin), db: Session = Depends(get_db)):
    t = db.get(Team, team_id)
    if not t:
        raise HTTPException(status_code=404, detail="Team not found")

    data = payload.model_dump(exclude_unset=True)
    if data.get("tla"):
        data["tla"] = data["tla"].upper()
    for field, value in data.items():
        setattr(t, field, value)

    commit_or_fail(db, f"team {team_id}")
    db.refresh(t)
    return t
