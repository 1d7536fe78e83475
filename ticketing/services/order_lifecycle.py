"""
Order lifecycle: purchase and cancellation.

Every order starts as SUCCESS and moves once to one of the terminal
cancellation statuses. Placing an order writes the order, one ticket per
allocated seat and a PAID payment in a single transaction. Cancelling it
deletes the tickets and refunds the payment in a single transaction.
"""

from decimal import Decimal
from typing import List, Optional
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ticketing import config
from ticketing.database import in_transaction, transaction
from ticketing.exceptions import (
    CapacityExceededError,
    NotFoundError,
    TransactionFailure,
    ValidationError,
)
from ticketing.models.fixture import Fixture, FixtureStatus
from ticketing.models.order import Order, OrderStatus, Ticket
from ticketing.models.payment import Payment, PaymentMethod, PaymentStatus
from ticketing.models.stadium import Zone
from ticketing.utils.seat_allocation import (
    allocate_seats,
    prior_max_seat_index,
    seat_prefix,
)

logger = logging.getLogger(__name__)

CANCELLATION_STATUSES = frozenset(
    {
        OrderStatus.CANCELLED_BY_USER,
        OrderStatus.CANCELLED_BY_ADMIN,
        OrderStatus.MATCH_CANCELLED,
        OrderStatus.MATCH_POSTPONED,
    }
)


def get_allocated_seats(db: Session, fixture_id: int, zone_id: int) -> List[str]:
    """Seat labels held by SUCCESS orders of one zone of a fixture."""
    rows = (
        db.query(Ticket.seat_no)
        .join(Order, Ticket.order_id == Order.id)
        .filter(Order.schedule_id == fixture_id)
        .filter(Order.zone_id == zone_id)
        .filter(Order.status == OrderStatus.SUCCESS)
        .all()
    )
    return [row.seat_no for row in rows]


def _build_tickets(order: Order, seats: List[str]) -> List[Ticket]:
    return [
        Ticket(
            order_id=order.id,
            schedule_id=order.schedule_id,
            zone_id=order.zone_id,
            seat_no=seat,
        )
        for seat in seats
    ]


def _is_seat_collision(exc: IntegrityError) -> bool:
    return "seat_no" in str(exc.orig) or "uq_tickets_schedule_zone_seat" in str(exc.orig)


def _place_order(
    db: Session,
    audience_id: int,
    fixture_id: int,
    zone_id: int,
    no_of_tickets: int,
    enforce_capacity: bool,
) -> Order:
    fixture = db.query(Fixture).filter(Fixture.id == fixture_id).first()
    if not fixture:
        raise NotFoundError("Fixture", fixture_id)
    if fixture.status == FixtureStatus.CANCELLED:
        raise ValidationError("Fixture has been cancelled", field="fixture_id")

    # Row lock serialises seat allocation per zone on backends that support it
    zone = db.query(Zone).filter(Zone.id == zone_id).with_for_update().first()
    if not zone:
        raise NotFoundError("Zone", zone_id)
    if zone.stadium_id != fixture.stadium_id:
        raise ValidationError("Zone is not part of the fixture's stadium", field="zone_id")

    total_amount = Decimal(zone.price_per_seat) * no_of_tickets

    taken = get_allocated_seats(db, fixture_id, zone_id)
    if enforce_capacity and len(taken) + no_of_tickets > zone.size:
        raise CapacityExceededError(
            zone_id, no_of_tickets, max(zone.size - len(taken), 0)
        )

    last_seat = prior_max_seat_index(taken, seat_prefix(zone.name))
    seats = allocate_seats(zone.name, no_of_tickets, last_seat)

    order = Order(
        audience_id=audience_id,
        schedule_id=fixture_id,
        zone_id=zone_id,
        no_of_tickets=no_of_tickets,
        status=OrderStatus.SUCCESS,
    )
    db.add(order)
    db.flush()

    db.add_all(_build_tickets(order, seats))
    db.add(
        Payment(
            audience_id=audience_id,
            order_id=order.id,
            amount=total_amount,
            method=PaymentMethod.CREDIT_CARD,
            status=PaymentStatus.PAID,
        )
    )
    db.flush()

    logger.info(
        f"Order {order.id} placed: fixture={fixture_id} zone={zone_id} "
        f"seats={seats[0]}..{seats[-1]} amount={total_amount}"
    )
    return order


def create_order(
    db: Session,
    audience_id: int,
    fixture_id: int,
    zone_id: int,
    no_of_tickets: int,
    enforce_capacity: Optional[bool] = None,
    max_attempts: Optional[int] = None,
) -> Order:
    """
    Buy ``no_of_tickets`` seats in a zone of a fixture.

    Seats continue after the highest seat index held by SUCCESS orders of
    the same zone+fixture. If a concurrent purchase commits the same labels
    first, the unique ticket constraint rejects ours and the whole
    transaction is re-run, up to ``max_attempts`` times. Retrying only
    happens when this call owns the transaction.

    Args:
        db: Database session
        audience_id: Buyer
        fixture_id: Fixture the seats are for
        zone_id: Zone of the fixture's stadium
        no_of_tickets: Number of seats (>= 1)
        enforce_capacity: Reject purchases beyond ``zone.size``; defaults to
            ``ENFORCE_ZONE_CAPACITY``
        max_attempts: Defaults to ``SEAT_ALLOCATION_MAX_ATTEMPTS``

    Returns:
        Order: The committed SUCCESS order with its tickets and payment

    Raises:
        ValidationError: no_of_tickets < 1
        NotFoundError: Unknown fixture or zone
        CapacityExceededError: Capacity enforcement is on and the zone is full
        SeatAllocationError: A stored seat label cannot be parsed
        TransactionFailure: The database aborted, or seat collisions persisted
    """
    if no_of_tickets < 1:
        raise ValidationError(
            "Number of tickets must be at least 1", field="no_of_tickets"
        )
    if enforce_capacity is None:
        enforce_capacity = config.ENFORCE_ZONE_CAPACITY
    attempts = max_attempts or config.SEAT_ALLOCATION_MAX_ATTEMPTS
    if in_transaction(db):
        attempts = 1

    for attempt in range(1, attempts + 1):
        try:
            with transaction(db):
                order = _place_order(
                    db, audience_id, fixture_id, zone_id, no_of_tickets, enforce_capacity
                )
            db.refresh(order)
            return order
        except IntegrityError as exc:
            if not _is_seat_collision(exc):
                raise
            logger.warning(
                f"Seat collision on fixture {fixture_id} zone {zone_id} "
                f"(attempt {attempt}/{attempts})"
            )
            if attempt == attempts:
                raise TransactionFailure(
                    "Could not allocate seats, please try again"
                ) from exc


def cancel_order(
    db: Session, order_id: int, reason: OrderStatus = OrderStatus.CANCELLED_BY_ADMIN
) -> Order:
    """
    Cancel an order: set its status, delete its tickets, refund its payment.

    Cancelling an order that is already cancelled overwrites the previous
    reason (last write wins).

    Raises:
        ValidationError: ``reason`` is not a cancellation status
        NotFoundError: Unknown order
    """
    if reason not in CANCELLATION_STATUSES:
        raise ValidationError(f"{reason} is not a cancellation status", field="reason")

    with transaction(db):
        order = db.query(Order).filter(Order.id == order_id).first()
        if not order:
            raise NotFoundError("Order", order_id)

        if order.status != OrderStatus.SUCCESS:
            logger.info(
                f"Order {order_id} already {order.status.value}, overwriting with {reason.value}"
            )

        order.status = reason
        db.query(Ticket).filter(Ticket.order_id == order_id).delete(
            synchronize_session=False
        )
        db.expire(order, ["tickets"])
        if order.payment is not None:
            order.payment.status = PaymentStatus.REFUNDED
        else:
            logger.warning(f"Order {order_id} has no payment to refund")
        db.flush()

    logger.info(f"Order {order_id} cancelled: {reason.value}")
    return order
