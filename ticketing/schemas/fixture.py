from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import date, datetime

from ticketing.models.fixture import FixtureStatus
from ticketing.schemas.stadium import StadiumResponse
from ticketing.schemas.team import TeamResponse
from ticketing.utils.fixture_conflict import FixtureCandidate, to_naive_utc


class FixtureFields(BaseModel):
    team_one_id: int
    team_two_id: int
    stadium_id: int
    fixture_date: date
    fixture_start_time: datetime
    fixture_end_time: datetime

    @field_validator("fixture_start_time", "fixture_end_time")
    @classmethod
    def normalise_timezone(cls, value: datetime) -> datetime:
        return to_naive_utc(value)

    def to_candidate(self) -> FixtureCandidate:
        return FixtureCandidate(
            stadium_id=self.stadium_id,
            team_one_id=self.team_one_id,
            team_two_id=self.team_two_id,
            date=self.fixture_date,
            start=self.fixture_start_time,
            end=self.fixture_end_time,
        )


class FixtureCheck(FixtureFields):
    fixture_id: Optional[int] = None


class FixtureCheckResult(BaseModel):
    conflict: bool
    detail: Optional[str] = None


class TimeSlotResponse(BaseModel):
    date: date
    start: datetime
    end: datetime

    class Config:
        from_attributes = True


class FixtureResponse(BaseModel):
    id: int
    team_one_id: int
    team_two_id: int
    stadium_id: int
    status: FixtureStatus
    time_slot: Optional[TimeSlotResponse] = None
    team_one: Optional[TeamResponse] = None
    team_two: Optional[TeamResponse] = None
    stadium: Optional[StadiumResponse] = None

    class Config:
        from_attributes = True
