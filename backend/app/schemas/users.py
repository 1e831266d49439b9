from datetime import datetime

from pydantic import BaseModel


class UserOut(BaseModel):
    user_id: int
    username: str
    email: str
    role: str
    created_at: datetime

    model_config = {"from_attributes": True}


class RoleUpdate(BaseModel):
    role: str
