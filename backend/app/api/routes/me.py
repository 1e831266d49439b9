from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.security import get_current_user, get_db
from app.models.picks import Pick
from app.models.user import User
from app.schemas.picks import PickOut
from app.schemas.users import UserOut

router = APIRouter(prefix="/api/v1", tags=["me"])


@router.get("/me", response_model=UserOut)
def me(user: User = Depends(get_current_user)):
    return user


@router.get("/me/picks", response_model=list[PickOut])
def my_picks(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return (
        db.query(Pick)
        .filter(Pick.user_id == user.user_id)
        .order_by(Pick.season_id.asc(), Pick.picked_at.asc())
        .all()
    )
