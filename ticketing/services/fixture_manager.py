"""
Fixture scheduling and cancellation.

Writes are expressed as an explicit command: ``CreateFixture`` for a new
fixture or ``UpdateFixture`` for an existing one. The conflict detector is
re-run inside the write transaction, with the stadium and team rows locked,
so an advisory check made earlier by the caller cannot go stale.
"""

from dataclasses import dataclass
from typing import List, Union
import logging

from sqlalchemy.orm import Session, joinedload

from ticketing.database import transaction
from ticketing.exceptions import FixtureConflictError, NotFoundError, ValidationError
from ticketing.models.fixture import Fixture, FixtureStatus, TimeSlot
from ticketing.models.order import OrderStatus
from ticketing.models.stadium import Stadium
from ticketing.models.team import Team
from ticketing.services.order_lifecycle import cancel_order
from ticketing.utils.fixture_conflict import FixtureCandidate, find_conflict

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateFixture:
    fields: FixtureCandidate


@dataclass(frozen=True)
class UpdateFixture:
    fixture_id: int
    fields: FixtureCandidate


FixtureCommand = Union[CreateFixture, UpdateFixture]


def validate_fixture_fields(fields: FixtureCandidate) -> None:
    if fields.start >= fields.end:
        raise ValidationError("Start time must be before end time", field="start")
    if fields.team_one_id == fields.team_two_id:
        raise ValidationError("A team cannot play against itself", field="team_two_id")


def get_fixtures_on(db: Session, day) -> List[Fixture]:
    """Active fixtures scheduled on a calendar day."""
    return (
        db.query(Fixture)
        .join(TimeSlot, TimeSlot.fixture_id == Fixture.id)
        .options(joinedload(Fixture.time_slot))
        .filter(TimeSlot.date == day)
        .filter(Fixture.status != FixtureStatus.CANCELLED)
        .all()
    )


def check_fixture_conflict(
    db: Session, fields: FixtureCandidate, exclude_fixture_id=None
) -> None:
    """
    Raise if the proposed fixture overlaps an active one.

    Raises:
        ValidationError: start >= end or both teams are the same
        FixtureConflictError: The stadium or one of the teams is busy
    """
    validate_fixture_fields(fields)
    resource = find_conflict(fields, get_fixtures_on(db, fields.date), exclude_fixture_id)
    if resource:
        raise FixtureConflictError(resource)


def _lock_participants(db: Session, fields: FixtureCandidate) -> None:
    stadium = (
        db.query(Stadium).filter(Stadium.id == fields.stadium_id).with_for_update().first()
    )
    if not stadium:
        raise NotFoundError("Stadium", fields.stadium_id)

    for team_id in sorted({fields.team_one_id, fields.team_two_id}):
        team = db.query(Team).filter(Team.id == team_id).with_for_update().first()
        if not team:
            raise NotFoundError("Team", team_id)


def create_or_update_fixture(db: Session, command: FixtureCommand) -> Fixture:
    """
    Create a CONFIRMED fixture or reschedule an existing one.

    Raises:
        ValidationError: Invalid time range or teams
        NotFoundError: Unknown fixture, stadium or team
        FixtureConflictError: Overlap with another active fixture
    """
    fields = command.fields
    validate_fixture_fields(fields)

    with transaction(db):
        _lock_participants(db, fields)

        if isinstance(command, UpdateFixture):
            fixture = db.query(Fixture).filter(Fixture.id == command.fixture_id).first()
            if not fixture:
                raise NotFoundError("Fixture", command.fixture_id)
            check_fixture_conflict(db, fields, exclude_fixture_id=fixture.id)

            fixture.team_one_id = fields.team_one_id
            fixture.team_two_id = fields.team_two_id
            fixture.stadium_id = fields.stadium_id
            if fixture.time_slot is None:
                fixture.time_slot = TimeSlot()
            fixture.time_slot.date = fields.date
            fixture.time_slot.start = fields.start
            fixture.time_slot.end = fields.end
        else:
            check_fixture_conflict(db, fields)
            fixture = Fixture(
                team_one_id=fields.team_one_id,
                team_two_id=fields.team_two_id,
                stadium_id=fields.stadium_id,
                status=FixtureStatus.CONFIRMED,
                time_slot=TimeSlot(date=fields.date, start=fields.start, end=fields.end),
            )
            db.add(fixture)
        db.flush()

    db.refresh(fixture)
    logger.info(
        f"Fixture {fixture.id} scheduled at stadium {fields.stadium_id} "
        f"on {fields.date} {fields.start:%H:%M}-{fields.end:%H:%M}"
    )
    return fixture


def cancel_fixture(db: Session, fixture_id: int) -> None:
    """
    Cancel a fixture and every one of its orders with MATCH_CANCELLED.

    The fixture status and all order cancellations commit together or not
    at all.

    Raises:
        NotFoundError: Unknown fixture
    """
    with transaction(db):
        fixture = (
            db.query(Fixture)
            .options(joinedload(Fixture.orders))
            .filter(Fixture.id == fixture_id)
            .first()
        )
        if not fixture:
            raise NotFoundError("Fixture", fixture_id)

        fixture.status = FixtureStatus.CANCELLED
        order_ids = [order.id for order in fixture.orders]
        for order_id in order_ids:
            cancel_order(db, order_id, OrderStatus.MATCH_CANCELLED)

    logger.info(f"Fixture {fixture_id} cancelled, {len(order_ids)} orders refunded")
