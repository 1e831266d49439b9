from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.security import get_current_user, get_db, require_admin
from app.crud.crud_common import commit_or_fail
from app.crud.crud_fixture import (
    assign_fixtures_to_game_week,
    list_game_week_fixtures,
    list_unassigned_fixtures,
    upsert_fixtures,
)
from app.models.fixtures import Fixture
from app.models.game_weeks import GameWeek
from app.models.season import Season
from app.models.teams import Team
from app.schemas.fixtures import (
    FixtureAssignIn,
    FixtureCreate,
    FixtureImportIn,
    FixtureImportOut,
    FixtureWithTeamsOut,
)

router = APIRouter(prefix="/api/v1", tags=["fixtures"])
admin_router = APIRouter(prefix="/api/v1/admin", tags=["admin"])


@router.get("/game-weeks/{game_week_id}/fixtures", response_model=list[FixtureWithTeamsOut])
def game_week_fixtures(game_week_id: int, user=Depends(get_current_user), db: Session = Depends(get_db)):
    if db.get(GameWeek, game_week_id) is None:
        raise HTTPException(status_code=404, detail="Game week not found")
    return list_game_week_fixtures(db, game_week_id)


@admin_router.get("/fixtures", response_model=list[FixtureWithTeamsOut])
def list_fixtures(
    season_id: int | None = None,
    admin=Depends(require_admin),
    db: Session = Depends(get_db),
):
    q = db.query(Fixture)
    if season_id is not None:
        q = q.filter(Fixture.season_id == season_id)
    return q.order_by(Fixture.kickoff.asc(), Fixture.id.asc()).all()


@admin_router.get("/fixtures/unassigned", response_model=list[FixtureWithTeamsOut])
def unassigned_fixtures(season_id: int, admin=Depends(require_admin), db: Session = Depends(get_db)):
    return list_unassigned_fixtures(db, season_id)


@admin_router.post("/fixtures", response_model=FixtureWithTeamsOut, status_code=201)
def create_fixture(payload: FixtureCreate, admin=Depends(require_admin), db: Session = Depends(get_db)):
    if payload.home_team_id == payload.away_team_id:
        raise HTTPException(status_code=400, detail="Home and away team cannot be the same")

    if db.get(Season, payload.season_id) is None:
        raise HTTPException(status_code=404, detail="Season not found")

    for tid in (payload.home_team_id, payload.away_team_id):
        if db.get(Team, tid) is None:
            raise HTTPException(status_code=400, detail=f"Invalid team: {tid}")

    if payload.external_id is not None and db.query(Fixture).filter_by(external_id=payload.external_id).first():
        raise HTTPException(status_code=400, detail=f"Fixture with external_id {payload.external_id} already exists")

    f = Fixture(
        external_id=payload.external_id,
        season_id=payload.season_id,
        home_team_id=payload.home_team_id,
        away_team_id=payload.away_team_id,
        kickoff=payload.kickoff,
        status=payload.status,
    )
    db.add(f)
    commit_or_fail(db, "fixture")
    db.refresh(f)
    return f


@admin_router.post("/fixtures/assign")
def assign_fixtures(payload: FixtureAssignIn, admin=Depends(require_admin), db: Session = Depends(get_db)):
    assigned = assign_fixtures_to_game_week(db, payload.fixture_ids, payload.game_week_id)
    return {"ok": True, "assigned": assigned, "game_week_id": payload.game_week_id}


@admin_router.post("/fixtures/import", response_model=FixtureImportOut)
def import_fixtures(payload: FixtureImportIn, admin=Depends(require_admin), db: Session = Depends(get_db)):
    if db.get(Season, payload.season_id) is None:
        raise HTTPException(status_code=404, detail="Season not found")
    res = upsert_fixtures(db, season_id=payload.season_id, items=payload.fixtures)
    return FixtureImportOut(season_id=payload.season_id, **res)
