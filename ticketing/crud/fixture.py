from sqlalchemy import case
from sqlalchemy.orm import Session, joinedload, selectinload
from typing import List

from ticketing.models.fixture import Fixture, FixtureStatus, TimeSlot
from ticketing.models.stadium import Stadium

_confirmed_first = case((Fixture.status == FixtureStatus.CONFIRMED, 0), else_=1)


def get_all_fixtures(db: Session) -> List[Fixture]:
    """All fixtures, confirmed first, latest date first."""
    return (
        db.query(Fixture)
        .outerjoin(TimeSlot, TimeSlot.fixture_id == Fixture.id)
        .options(
            joinedload(Fixture.time_slot),
            joinedload(Fixture.team_one),
            joinedload(Fixture.team_two),
            joinedload(Fixture.stadium),
            selectinload(Fixture.orders),
        )
        .order_by(_confirmed_first, TimeSlot.date.desc(), Fixture.id.desc())
        .all()
    )


def get_all_upcoming_fixtures(db: Session) -> List[Fixture]:
    """Confirmed fixtures with their stadium zones, latest date first."""
    return (
        db.query(Fixture)
        .join(TimeSlot, TimeSlot.fixture_id == Fixture.id)
        .options(
            joinedload(Fixture.time_slot),
            joinedload(Fixture.team_one),
            joinedload(Fixture.team_two),
            joinedload(Fixture.stadium).selectinload(Stadium.zones),
            selectinload(Fixture.orders),
        )
        .filter(Fixture.status == FixtureStatus.CONFIRMED)
        .order_by(TimeSlot.date.desc(), Fixture.id.desc())
        .all()
    )
