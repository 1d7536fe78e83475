from sqlalchemy import case
from sqlalchemy.orm import Session, selectinload
from typing import List, Optional

from ticketing.models.fixture import Fixture
from ticketing.models.order import Order, OrderStatus
from ticketing.models.payment import Payment

_ORDER_DETAIL = (
    selectinload(Order.tickets),
    selectinload(Order.payment),
    selectinload(Order.fixture).selectinload(Fixture.time_slot),
    selectinload(Order.fixture).selectinload(Fixture.team_one),
    selectinload(Order.fixture).selectinload(Fixture.team_two),
    selectinload(Order.fixture).selectinload(Fixture.stadium),
)

# Same ranking as sorting the status names descending, independent of how the
# backend stores the enum
_STATUS_RANK = [
    OrderStatus.SUCCESS,
    OrderStatus.MATCH_POSTPONED,
    OrderStatus.MATCH_CANCELLED,
    OrderStatus.CANCELLED_BY_USER,
    OrderStatus.CANCELLED_BY_ADMIN,
]
_status_desc = case(
    *[(Order.status == status, rank) for rank, status in enumerate(_STATUS_RANK)],
    else_=len(_STATUS_RANK),
)


def get_order(db: Session, order_id: int) -> Optional[Order]:
    return db.query(Order).filter(Order.id == order_id).first()


def get_all_orders(db: Session) -> List[Order]:
    return db.query(Order).options(*_ORDER_DETAIL).order_by(Order.id).all()


def get_orders_by_audience(db: Session, audience_id: int) -> List[Order]:
    return (
        db.query(Order)
        .options(*_ORDER_DETAIL)
        .filter(Order.audience_id == audience_id)
        .order_by(_status_desc, Order.created_at.desc(), Order.id.desc())
        .all()
    )


def get_audience_payments(db: Session, audience_id: int) -> List[Payment]:
    return (
        db.query(Payment)
        .options(
            selectinload(Payment.order).selectinload(Order.fixture).selectinload(Fixture.time_slot),
            selectinload(Payment.order).selectinload(Order.tickets),
        )
        .filter(Payment.audience_id == audience_id)
        .order_by(Payment.created_at.desc(), Payment.id.desc())
        .all()
    )
