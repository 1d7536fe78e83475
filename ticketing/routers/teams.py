from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from ticketing.crud import team as crud
from ticketing.database import get_db
from ticketing.models.user import Admin
from ticketing.schemas.team import TeamCreate, TeamResponse, TeamUpdate
from ticketing.services.auth import get_current_admin

router = APIRouter()


@router.get("/", response_model=List[TeamResponse])
def read_teams(db: Session = Depends(get_db)):
    return crud.get_teams(db)


@router.post("/", response_model=TeamResponse)
def create_team(
    team: TeamCreate,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return crud.create_team(db=db, team=team)


@router.put("/{team_id}", response_model=TeamResponse)
def update_team(
    team_id: int,
    team: TeamUpdate,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return crud.update_team(db=db, team_id=team_id, team=team)
