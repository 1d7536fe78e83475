from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime

from ticketing.database import Base


class Team(Base):
    __tablename__ = "teams"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    abbr = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    team_one_fixtures = relationship(
        "Fixture", foreign_keys="Fixture.team_one_id", back_populates="team_one"
    )
    team_two_fixtures = relationship(
        "Fixture", foreign_keys="Fixture.team_two_id", back_populates="team_two"
    )
