from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

from ticketing.models.order import OrderStatus
from ticketing.models.payment import PaymentMethod, PaymentStatus
from ticketing.schemas.fixture import FixtureResponse


class OrderCreate(BaseModel):
    fixture_id: int
    zone_id: int
    no_of_tickets: int = Field(ge=1)


class OrderCancel(BaseModel):
    reason: OrderStatus = OrderStatus.CANCELLED_BY_ADMIN


class TicketResponse(BaseModel):
    id: int
    seat_no: str

    class Config:
        from_attributes = True


class PaymentResponse(BaseModel):
    id: int
    order_id: int
    amount: Decimal
    method: PaymentMethod
    status: PaymentStatus
    created_at: datetime

    class Config:
        from_attributes = True


class OrderResponse(BaseModel):
    id: int
    audience_id: int
    schedule_id: int
    zone_id: int
    no_of_tickets: int
    status: OrderStatus
    created_at: datetime
    tickets: List[TicketResponse] = []
    payment: Optional[PaymentResponse] = None

    class Config:
        from_attributes = True


class OrderDetailResponse(OrderResponse):
    fixture: Optional[FixtureResponse] = None


class PaymentHistoryResponse(PaymentResponse):
    order: Optional[OrderDetailResponse] = None
