from sqlalchemy import Column, Integer, Date, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from ticketing.database import Base


class FixtureStatus(enum.Enum):
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"  # terminal


class Fixture(Base):
    """A scheduled match between two teams at a stadium."""

    __tablename__ = "fixtures"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    team_one_id = Column(Integer, ForeignKey("teams.id"), nullable=False)
    team_two_id = Column(Integer, ForeignKey("teams.id"), nullable=False)
    stadium_id = Column(Integer, ForeignKey("stadiums.id"), nullable=False, index=True)
    status = Column(Enum(FixtureStatus), default=FixtureStatus.CONFIRMED, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    team_one = relationship(
        "Team", foreign_keys=[team_one_id], back_populates="team_one_fixtures"
    )
    team_two = relationship(
        "Team", foreign_keys=[team_two_id], back_populates="team_two_fixtures"
    )
    stadium = relationship("Stadium", back_populates="fixtures")
    time_slot = relationship(
        "TimeSlot",
        back_populates="fixture",
        uselist=False,
        cascade="all, delete-orphan",
    )
    orders = relationship("Order", back_populates="fixture")


class TimeSlot(Base):
    __tablename__ = "time_slots"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    fixture_id = Column(
        Integer, ForeignKey("fixtures.id"), nullable=False, unique=True
    )
    date = Column(Date, nullable=False, index=True)
    start = Column(DateTime, nullable=False)
    end = Column(DateTime, nullable=False)

    fixture = relationship("Fixture", back_populates="time_slot")
