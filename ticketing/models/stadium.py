from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Numeric
from sqlalchemy.orm import relationship
from datetime import datetime

from ticketing.database import Base


class Stadium(Base):
    __tablename__ = "stadiums"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    abbr = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    zones = relationship(
        "Zone",
        back_populates="stadium",
        cascade="all, delete-orphan",
        order_by="Zone.id",
    )
    fixtures = relationship("Fixture", back_populates="stadium")


class Zone(Base):
    __tablename__ = "zones"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)  # seat labels are prefixed with its initials
    price_per_seat = Column(Numeric(10, 2), nullable=False)
    size = Column(Integer, nullable=False)  # seat capacity
    stadium_id = Column(Integer, ForeignKey("stadiums.id"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    stadium = relationship("Stadium", back_populates="zones")
