from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime
from decimal import Decimal


def _zone_name(value: str) -> str:
    # Seat labels are prefixed with the initials of the name
    value = " ".join(value.split())
    if not value:
        raise ValueError("Zone name cannot be blank")
    return value


class ZoneBase(BaseModel):
    name: str = Field(min_length=1)
    price_per_seat: Decimal = Field(ge=0)
    size: int = Field(ge=1)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        return _zone_name(value)


class ZoneCreate(ZoneBase):
    stadium_id: int


class ZoneUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    price_per_seat: Optional[Decimal] = Field(default=None, ge=0)
    size: Optional[int] = Field(default=None, ge=1)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else _zone_name(value)


class ZoneResponse(ZoneBase):
    id: int
    stadium_id: int

    class Config:
        from_attributes = True


class StadiumBase(BaseModel):
    name: str = Field(min_length=1)
    abbr: str = Field(min_length=1)


class StadiumCreate(StadiumBase):
    pass


class StadiumUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    abbr: Optional[str] = Field(default=None, min_length=1)


class StadiumResponse(StadiumBase):
    id: int
    created_at: datetime
    zones: List[ZoneResponse] = []

    class Config:
        from_attributes = True
