"""
Shared pytest configuration
"""
from datetime import date, datetime
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ticketing.database import Base

# Import every model so SQLAlchemy can resolve the relationships
from ticketing.models import (
    Audience,
    Fixture,
    FixtureStatus,
    Stadium,
    Team,
    TimeSlot,
    Zone,
)


# In-memory database for tests
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

MATCH_DAY = date(2026, 11, 7)


def at(hour: int, minute: int = 0, day: date = MATCH_DAY) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute)


@pytest.fixture
def db():
    """Create the test database and drop it afterwards"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def teams(db):
    """Four teams, in creation order"""
    teams = [
        Team(name="Mumbai Indians", abbr="MI"),
        Team(name="Chennai Super Kings", abbr="CSK"),
        Team(name="Royal Challengers", abbr="RCB"),
        Team(name="Delhi Capitals", abbr="DC"),
    ]
    db.add_all(teams)
    db.commit()
    for team in teams:
        db.refresh(team)
    return teams


@pytest.fixture
def stadium(db):
    """Stadium with two zones: "Zone A" (100.00 x 10) and "North Upper Tier" (49.50 x 5)"""
    stadium = Stadium(name="Wankhede Stadium", abbr="wankhede")
    stadium.zones = [
        Zone(name="Zone A", price_per_seat=Decimal("100.00"), size=10),
        Zone(name="North Upper Tier", price_per_seat=Decimal("49.50"), size=5),
    ]
    db.add(stadium)
    db.commit()
    db.refresh(stadium)
    return stadium


@pytest.fixture
def other_stadium(db):
    stadium = Stadium(name="Eden Gardens", abbr="eden")
    db.add(stadium)
    db.commit()
    db.refresh(stadium)
    return stadium


@pytest.fixture
def zone_a(stadium):
    return stadium.zones[0]


@pytest.fixture
def north_tier(stadium):
    return stadium.zones[1]


@pytest.fixture
def sample_fixture(db, teams, stadium):
    """Confirmed fixture MI vs CSK on match day, 18:00-21:00"""
    fixture = Fixture(
        team_one_id=teams[0].id,
        team_two_id=teams[1].id,
        stadium_id=stadium.id,
        status=FixtureStatus.CONFIRMED,
        time_slot=TimeSlot(date=MATCH_DAY, start=at(18), end=at(21)),
    )
    db.add(fixture)
    db.commit()
    db.refresh(fixture)
    return fixture


def _audience(db, name, email):
    audience = Audience(name=name, email=email, hashed_password="hashed")
    db.add(audience)
    db.commit()
    db.refresh(audience)
    return audience


@pytest.fixture
def audience(db):
    return _audience(db, "Test Audience", "audience@example.com")


@pytest.fixture
def other_audience(db):
    return _audience(db, "Other Audience", "other@example.com")
