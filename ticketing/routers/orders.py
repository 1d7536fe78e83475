from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from ticketing.crud import order as crud
from ticketing.database import get_db
from ticketing.models.order import OrderStatus
from ticketing.models.user import Admin, Audience
from ticketing.schemas.order import (
    OrderCancel,
    OrderCreate,
    OrderDetailResponse,
    OrderResponse,
)
from ticketing.services import order_lifecycle
from ticketing.services.auth import get_current_admin, get_current_audience

router = APIRouter()


@router.post("/", response_model=OrderResponse)
def create_order(
    order: OrderCreate,
    db: Session = Depends(get_db),
    current_audience: Audience = Depends(get_current_audience),
):
    return order_lifecycle.create_order(
        db,
        audience_id=current_audience.id,
        fixture_id=order.fixture_id,
        zone_id=order.zone_id,
        no_of_tickets=order.no_of_tickets,
    )


@router.get("/me", response_model=List[OrderDetailResponse])
def read_my_orders(
    db: Session = Depends(get_db),
    current_audience: Audience = Depends(get_current_audience),
):
    return crud.get_orders_by_audience(db, current_audience.id)


@router.post("/{order_id}/cancel", response_model=OrderResponse)
def cancel_my_order(
    order_id: int,
    db: Session = Depends(get_db),
    current_audience: Audience = Depends(get_current_audience),
):
    db_order = crud.get_order(db, order_id)
    if db_order is None or db_order.audience_id != current_audience.id:
        raise HTTPException(status_code=404, detail="Order not found")
    return order_lifecycle.cancel_order(db, order_id, OrderStatus.CANCELLED_BY_USER)


@router.get("/", response_model=List[OrderDetailResponse])
def read_orders(
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return crud.get_all_orders(db)


@router.post("/{order_id}/admin-cancel", response_model=OrderResponse)
def cancel_order(
    order_id: int,
    cancel: OrderCancel = OrderCancel(),
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return order_lifecycle.cancel_order(db, order_id, cancel.reason)
