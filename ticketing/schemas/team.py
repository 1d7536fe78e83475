from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class TeamBase(BaseModel):
    name: str = Field(min_length=1)
    abbr: str = Field(min_length=1)


class TeamCreate(TeamBase):
    pass


class TeamUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    abbr: Optional[str] = Field(default=None, min_length=1)


class TeamResponse(TeamBase):
    id: int
    created_at: datetime

    class Config:
        from_attributes = True
