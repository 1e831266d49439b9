from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.roles import ALL_ROLES
from app.core.security import get_db, require_admin
from app.crud.crud_common import commit_or_fail
from app.models.user import User
from app.schemas.users import RoleUpdate, UserOut

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])


@router.get("/users", response_model=list[UserOut])
def list_users(admin=Depends(require_admin), db: Session = Depends(get_db)):
    return db.query(User).order_by(User.user_id.asc()).all()


@router.post("/users/{user_id}/role")
def set_role(user_id: int, payload: RoleUpdate, admin=Depends(require_admin), db: Session = Depends(get_db)):
    role = (payload.role or "").strip().lower()
    if role not in ALL_ROLES:
        raise HTTPException(status_code=400, detail=f"Invalid role. Allowed: {sorted(ALL_ROLES)}")

    u = db.query(User).filter_by(user_id=user_id).first()
    if not u:
        raise HTTPException(status_code=404, detail="User not found")

    u.role = role
    commit_or_fail(db, f"role of user {user_id}")
    return {"ok": True, "user_id": u.user_id, "role": u.role}
