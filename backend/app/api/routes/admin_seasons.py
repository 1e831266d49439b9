from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.security import get_db, require_admin
from app.crud.crud_common import commit_or_fail
from app.crud.crud_fixture import assign_fixtures_to_game_week
from app.models.game_weeks import GameWeek
from app.models.rounds import Round
from app.models.season import Season
from app.schemas.seasons import (
    ActivationOut,
    GameWeekCreate,
    GameWeekOut,
    RoundCreate,
    RoundOut,
    SeasonCreate,
    SeasonOut,
)
from app.services.activation import activate_game_week, activate_round, activate_season
from app.services.errors import PickemError, StorageFailureError

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])


# --- Seasons ---

@router.get("/seasons", response_model=list[SeasonOut])
def list_seasons(admin=Depends(require_admin), db: Session = Depends(get_db)):
    return db.query(Season).order_by(Season.start_date.asc(), Season.id.asc()).all()


@router.post("/seasons", response_model=SeasonOut, status_code=201)
def create_season(payload: SeasonCreate, admin=Depends(require_admin), db: Session = Depends(get_db)):
    name = payload.name.strip()
    if db.query(Season).filter_by(name=name).first():
        raise HTTPException(status_code=400, detail=f"Season already exists: {name}")

    # New entities always start inactive; activation goes through the activate endpoints
    s = Season(name=name, start_date=payload.start_date, end_date=payload.end_date, is_active=False)
    db.add(s)
    commit_or_fail(db, f"season {name}")
    db.refresh(s)
    return s


@router.post("/seasons/{season_id}/activate", response_model=ActivationOut)
def activate_season_endpoint(season_id: int, admin=Depends(require_admin), db: Session = Depends(get_db)):
    plan = activate_season(db, season_id)
    return ActivationOut(**plan.as_dict())


# --- Rounds ---

@router.get("/rounds", response_model=list[RoundOut])
def list_rounds(admin=Depends(require_admin), db: Session = Depends(get_db)):
    return db.query(Round).order_by(Round.season_id.asc(), Round.number.asc()).all()


@router.post("/rounds", response_model=RoundOut, status_code=201)
def create_round(payload: RoundCreate, admin=Depends(require_admin), db: Session = Depends(get_db)):
    if db.get(Season, payload.season_id) is None:
        raise HTTPException(status_code=404, detail="Season not found")
    if db.query(Round).filter_by(season_id=payload.season_id, number=payload.number).first():
        raise HTTPException(status_code=400, detail=f"Round {payload.number} already exists in this season")

    r = Round(season_id=payload.season_id, number=payload.number, is_active=False)
    db.add(r)
    commit_or_fail(db, f"round {payload.number} of season {payload.season_id}")
    db.refresh(r)
    return r


@router.post("/rounds/{round_id}/activate", response_model=ActivationOut)
def activate_round_endpoint(round_id: int, admin=Depends(require_admin), db: Session = Depends(get_db)):
    plan = activate_round(db, round_id)
    return ActivationOut(**plan.as_dict())


# --- Game weeks ---

@router.get("/game-weeks", response_model=list[GameWeekOut])
def list_game_weeks(admin=Depends(require_admin), db: Session = Depends(get_db)):
    return db.query(GameWeek).order_by(GameWeek.round_id.asc(), GameWeek.number.asc()).all()


@router.post("/game-weeks", response_model=GameWeekOut, status_code=201)
def create_game_week(payload: GameWeekCreate, admin=Depends(require_admin), db: Session = Depends(get_db)):
    if db.get(Round, payload.round_id) is None:
        raise HTTPException(status_code=404, detail="Round not found")
    if db.query(GameWeek).filter_by(round_id=payload.round_id, number=payload.number).first():
        raise HTTPException(status_code=400, detail=f"Game week {payload.number} already exists in this round")

    gw = GameWeek(round_id=payload.round_id, number=payload.number, deadline=payload.deadline, is_active=False)
    db.add(gw)

    # Game week and fixture assignment are stored together or not at all
    try:
        db.flush()
        if payload.fixture_ids:
            assign_fixtures_to_game_week(db, payload.fixture_ids, gw.id, commit=False)
    except PickemError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageFailureError() from exc

    commit_or_fail(db, f"game week {payload.number} of round {payload.round_id}")
    db.refresh(gw)
    return gw


@router.post("/game-weeks/{game_week_id}/activate", response_model=ActivationOut)
def activate_game_week_endpoint(game_week_id: int, admin=Depends(require_admin), db: Session = Depends(get_db)):
    plan = activate_game_week(db, game_week_id)
    return ActivationOut(**plan.as_dict())
