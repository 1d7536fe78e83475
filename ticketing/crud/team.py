from sqlalchemy.orm import Session
from typing import List, Optional

from ticketing.exceptions import NotFoundError
from ticketing.models.team import Team
from ticketing.schemas.team import TeamCreate, TeamUpdate


def get_team(db: Session, team_id: int) -> Optional[Team]:
    return db.query(Team).filter(Team.id == team_id).first()


def get_teams(db: Session) -> List[Team]:
    return db.query(Team).order_by(Team.name.asc()).all()


def create_team(db: Session, team: TeamCreate) -> Team:
    db_team = Team(name=team.name, abbr=team.abbr.upper())
    db.add(db_team)
    db.commit()
    db.refresh(db_team)
    return db_team


def update_team(db: Session, team_id: int, team: TeamUpdate) -> Team:
    db_team = get_team(db, team_id)
    if not db_team:
        raise NotFoundError("Team", team_id)

    update_data = team.model_dump(exclude_unset=True)
    if "abbr" in update_data:
        update_data["abbr"] = update_data["abbr"].upper()
    for field, value in update_data.items():
        setattr(db_team, field, value)

    db.commit()
    db.refresh(db_team)
    return db_team
