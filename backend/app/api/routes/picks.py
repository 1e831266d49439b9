from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.security import get_current_user, get_db
from app.models.game_weeks import GameWeek
from app.models.picks import Pick
from app.models.user import User
from app.schemas.picks import AvailableTeamOut, CurrentOut, PickCreate, PickOut
from app.schemas.seasons import GameWeekOut, RoundOut, SeasonOut
from app.services.current_context import get_current_context, is_deadline_passed
from app.services.eligibility import get_available_teams, submit_pick
from app.services.errors import DeadlinePassedError

router = APIRouter(prefix="/api/v1", tags=["picks"])


@router.get("/current", response_model=CurrentOut)
def current(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    ctx = get_current_context(db)
    return CurrentOut(
        season=SeasonOut.model_validate(ctx.season),
        round=RoundOut.model_validate(ctx.round),
        game_week=GameWeekOut.model_validate(ctx.game_week),
        deadline_passed=is_deadline_passed(ctx.game_week),
    )


@router.get("/available-teams", response_model=list[AvailableTeamOut])
def available_teams(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_available_teams(db, user.user_id)


@router.post("/picks", response_model=PickOut, status_code=201)
def create_pick(payload: PickCreate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    # Time-gating lives here, the engine only checks fixtures and uniqueness
    if settings.ENFORCE_PICK_DEADLINE:
        ctx = get_current_context(db)
        if is_deadline_passed(ctx.game_week):
            raise DeadlinePassedError()

    return submit_pick(db, user.user_id, payload.team_id)


@router.get("/game-weeks/{game_week_id}/picks", response_model=list[PickOut])
def game_week_picks(game_week_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    if db.get(GameWeek, game_week_id) is None:
        raise HTTPException(status_code=404, detail="Game week not found")
    return (
        db.query(Pick)
        .filter(Pick.game_week_id == game_week_id)
        .order_by(Pick.picked_at.asc(), Pick.id.asc())
        .all()
    )
