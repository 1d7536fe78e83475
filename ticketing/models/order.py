from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    ForeignKey,
    Enum,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from ticketing.database import Base


class OrderStatus(enum.Enum):
    SUCCESS = "SUCCESS"
    # Terminal statuses, one per cancellation reason
    MATCH_POSTPONED = "MATCH_POSTPONED"
    MATCH_CANCELLED = "MATCH_CANCELLED"
    CANCELLED_BY_ADMIN = "CANCELLED_BY_ADMIN"
    CANCELLED_BY_USER = "CANCELLED_BY_USER"


class Order(Base):
    __tablename__ = "orders"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    audience_id = Column(Integer, ForeignKey("audiences.id"), nullable=False, index=True)
    schedule_id = Column(Integer, ForeignKey("fixtures.id"), nullable=False, index=True)
    zone_id = Column(Integer, ForeignKey("zones.id"), nullable=False)
    no_of_tickets = Column(Integer, nullable=False)
    status = Column(Enum(OrderStatus), default=OrderStatus.SUCCESS, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    audience = relationship("Audience", back_populates="orders")
    fixture = relationship("Fixture", back_populates="orders")
    zone = relationship("Zone")
    tickets = relationship(
        "Ticket",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="Ticket.id",
    )
    payment = relationship(
        "Payment",
        back_populates="order",
        uselist=False,
        cascade="all, delete-orphan",
    )


class Ticket(Base):
    __tablename__ = "tickets"
    # No two live tickets may share a seat label in the same zone of a fixture.
    __table_args__ = (
        UniqueConstraint(
            "schedule_id", "zone_id", "seat_no", name="uq_tickets_schedule_zone_seat"
        ),
        {"extend_existing": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    schedule_id = Column(Integer, ForeignKey("fixtures.id"), nullable=False)
    zone_id = Column(Integer, ForeignKey("zones.id"), nullable=False)
    seat_no = Column(String, nullable=False)

    order = relationship("Order", back_populates="tickets")
