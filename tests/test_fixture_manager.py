"""
Tests for fixture scheduling and cascading cancellation
"""
from dataclasses import replace
from datetime import date

import pytest

from conftest import MATCH_DAY, at
from ticketing.exceptions import (
    FixtureConflictError,
    NotFoundError,
    ValidationError,
)
from ticketing.models.fixture import Fixture, FixtureStatus, TimeSlot
from ticketing.models.order import Order, OrderStatus, Ticket
from ticketing.models.payment import Payment, PaymentStatus
from ticketing.services import order_lifecycle
from ticketing.services.fixture_manager import (
    CreateFixture,
    UpdateFixture,
    cancel_fixture,
    check_fixture_conflict,
    create_or_update_fixture,
)
from ticketing.services.order_lifecycle import cancel_order, create_order
from ticketing.utils.fixture_conflict import FixtureCandidate


def fields(stadium, team_one, team_two, start=at(18), end=at(21), day=MATCH_DAY):
    return FixtureCandidate(
        stadium_id=stadium.id,
        team_one_id=team_one.id,
        team_two_id=team_two.id,
        date=day,
        start=start,
        end=end,
    )


def test_create_fixture_is_confirmed_with_time_slot(db, teams, stadium):
    fixture = create_or_update_fixture(
        db, CreateFixture(fields(stadium, teams[0], teams[1]))
    )

    assert fixture.id is not None
    assert fixture.status == FixtureStatus.CONFIRMED
    assert fixture.time_slot.date == MATCH_DAY
    assert fixture.time_slot.start == at(18)
    assert fixture.time_slot.end == at(21)


def test_start_must_precede_end(db, teams, stadium):
    with pytest.raises(ValidationError) as exc_info:
        create_or_update_fixture(
            db, CreateFixture(fields(stadium, teams[0], teams[1], start=at(21), end=at(18)))
        )

    assert exc_info.value.field == "start"
    assert db.query(Fixture).count() == 0


def test_zero_length_slot_is_rejected(db, teams, stadium):
    with pytest.raises(ValidationError):
        create_or_update_fixture(
            db, CreateFixture(fields(stadium, teams[0], teams[1], start=at(18), end=at(18)))
        )


def test_team_cannot_play_itself(db, teams, stadium):
    with pytest.raises(ValidationError):
        create_or_update_fixture(db, CreateFixture(fields(stadium, teams[0], teams[0])))


def test_unknown_stadium_is_not_found(db, teams, stadium):
    proposed = replace(fields(stadium, teams[0], teams[1]), stadium_id=999)

    with pytest.raises(NotFoundError) as exc_info:
        create_or_update_fixture(db, CreateFixture(proposed))

    assert exc_info.value.entity == "Stadium"


def test_overlapping_stadium_booking_is_rejected_at_write(
    db, teams, stadium, sample_fixture
):
    with pytest.raises(FixtureConflictError) as exc_info:
        create_or_update_fixture(
            db,
            CreateFixture(fields(stadium, teams[2], teams[3], start=at(20), end=at(23))),
        )

    assert exc_info.value.resource == "stadium"
    assert db.query(Fixture).count() == 1


def test_busy_team_is_rejected_at_another_stadium(
    db, teams, other_stadium, sample_fixture
):
    with pytest.raises(FixtureConflictError) as exc_info:
        create_or_update_fixture(
            db, CreateFixture(fields(other_stadium, teams[2], teams[1]))
        )

    assert exc_info.value.resource == "team_two"
    assert "Team Two" in exc_info.value.message


def test_back_to_back_fixtures_are_allowed(db, teams, stadium, sample_fixture):
    fixture = create_or_update_fixture(
        db, CreateFixture(fields(stadium, teams[0], teams[2], start=at(21), end=at(23)))
    )

    assert fixture.status == FixtureStatus.CONFIRMED
    assert db.query(Fixture).count() == 2


def test_cancelled_fixture_frees_the_slot(db, teams, stadium, sample_fixture):
    cancel_fixture(db, sample_fixture.id)

    fixture = create_or_update_fixture(db, CreateFixture(fields(stadium, teams[2], teams[3])))

    assert fixture.id != sample_fixture.id


def test_advisory_check_goes_stale_but_write_rechecks(db, teams, stadium):
    proposed = fields(stadium, teams[2], teams[3])
    check_fixture_conflict(db, proposed)  # passes while the slot is free

    # Someone else books the same slot between the check and the write
    create_or_update_fixture(db, CreateFixture(fields(stadium, teams[0], teams[1])))

    with pytest.raises(FixtureConflictError):
        create_or_update_fixture(db, CreateFixture(proposed))


def test_update_reschedules_in_place(db, teams, stadium, other_stadium, sample_fixture):
    new_day = date(2026, 11, 9)
    fixture = create_or_update_fixture(
        db,
        UpdateFixture(
            sample_fixture.id,
            fields(other_stadium, teams[0], teams[2], start=at(15, day=new_day), end=at(18, day=new_day), day=new_day),
        ),
    )

    assert fixture.id == sample_fixture.id
    assert fixture.stadium_id == other_stadium.id
    assert fixture.team_two_id == teams[2].id
    assert fixture.time_slot.date == new_day
    assert db.query(Fixture).count() == 1
    assert db.query(TimeSlot).count() == 1


def test_update_does_not_conflict_with_itself(db, teams, stadium, sample_fixture):
    fixture = create_or_update_fixture(
        db,
        UpdateFixture(
            sample_fixture.id, fields(stadium, teams[0], teams[1], start=at(19), end=at(22))
        ),
    )

    assert fixture.time_slot.start == at(19)


def test_update_unknown_fixture_is_not_found(db, teams, stadium):
    with pytest.raises(NotFoundError):
        create_or_update_fixture(db, UpdateFixture(999, fields(stadium, teams[0], teams[1])))


def test_cancel_fixture_cascades_to_every_order(
    db, audience, other_audience, sample_fixture, zone_a, north_tier
):
    orders = [
        create_order(db, audience.id, sample_fixture.id, zone_a.id, 2),
        create_order(db, other_audience.id, sample_fixture.id, zone_a.id, 1),
        create_order(db, audience.id, sample_fixture.id, north_tier.id, 3),
    ]

    cancel_fixture(db, sample_fixture.id)

    db.refresh(sample_fixture)
    assert sample_fixture.status == FixtureStatus.CANCELLED
    for order in orders:
        db.refresh(order)
        assert order.status == OrderStatus.MATCH_CANCELLED
        assert order.tickets == []
        assert order.payment.status == PaymentStatus.REFUNDED
    assert db.query(Ticket).count() == 0


def test_cancel_fixture_overrides_user_cancellations(db, audience, sample_fixture, zone_a):
    order = create_order(db, audience.id, sample_fixture.id, zone_a.id, 1)
    cancel_order(db, order.id, OrderStatus.CANCELLED_BY_USER)

    cancel_fixture(db, sample_fixture.id)

    db.refresh(order)
    assert order.status == OrderStatus.MATCH_CANCELLED


def test_cancel_fixture_rolls_back_when_an_order_fails(
    db, audience, sample_fixture, zone_a, monkeypatch
):
    first = create_order(db, audience.id, sample_fixture.id, zone_a.id, 2)
    second = create_order(db, audience.id, sample_fixture.id, zone_a.id, 2)
    real_cancel_order = order_lifecycle.cancel_order

    def fail_on_second(session, order_id, reason):
        if order_id == second.id:
            raise RuntimeError("refund service unavailable")
        return real_cancel_order(session, order_id, reason)

    monkeypatch.setattr(
        "ticketing.services.fixture_manager.cancel_order", fail_on_second
    )

    with pytest.raises(RuntimeError):
        cancel_fixture(db, sample_fixture.id)

    db.refresh(sample_fixture)
    db.refresh(first)
    assert sample_fixture.status == FixtureStatus.CONFIRMED
    assert first.status == OrderStatus.SUCCESS
    assert len(first.tickets) == 2
    assert first.payment.status == PaymentStatus.PAID
    assert db.query(Ticket).count() == 4
    assert db.query(Payment).filter(Payment.status == PaymentStatus.PAID).count() == 2


def test_cancel_unknown_fixture(db):
    with pytest.raises(NotFoundError):
        cancel_fixture(db, 404)


def test_cancelled_fixture_keeps_its_orders(db, audience, sample_fixture, zone_a):
    create_order(db, audience.id, sample_fixture.id, zone_a.id, 1)

    cancel_fixture(db, sample_fixture.id)

    assert db.query(Order).filter(Order.schedule_id == sample_fixture.id).count() == 1
