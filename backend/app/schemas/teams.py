from pydantic import BaseModel, Field


class TeamOut(BaseModel):
    id: int
    name: str
    short_name: str | None = None
    tla: str | None = None
    crest: str | None = None

    model_config = {"from_attributes": True}


class TeamCreate(BaseModel):
    name: str = Field(min_length=2, max_length=80)
    short_name: str | None = Field(default=None, max_length=40)
    tla: str | None = Field(default=None, min_length=3, max_length=3)
    crest: str | None = None


class TeamUpdate(BaseModel):
    # name is the team's identity and cannot change
    short_name: str | None = Field(default=None, max_length=40)
    tla: str | None = Field(default=None, min_length=3, max_length=3)
    crest: str | None = None
