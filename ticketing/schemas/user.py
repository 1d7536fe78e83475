from pydantic import BaseModel, Field
from datetime import datetime
from enum import Enum


class Role(str, Enum):
    AUDIENCE = "audience"
    ADMIN = "admin"


class AudienceCreate(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=8)


class AudienceResponse(BaseModel):
    id: int
    name: str
    email: str
    created_at: datetime

    class Config:
        from_attributes = True


class LoginRequest(BaseModel):
    email: str
    password: str
    role: Role = Role.AUDIENCE


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
