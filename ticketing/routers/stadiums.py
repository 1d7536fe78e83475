from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from ticketing.crud import stadium as crud
from ticketing.database import get_db
from ticketing.models.user import Admin
from ticketing.schemas.stadium import StadiumCreate, StadiumResponse, StadiumUpdate
from ticketing.services.auth import get_current_admin

router = APIRouter()


@router.get("/", response_model=List[StadiumResponse])
def read_stadiums(db: Session = Depends(get_db)):
    return crud.get_stadiums(db)


@router.get("/{stadium_id}", response_model=StadiumResponse)
def read_stadium(stadium_id: int, db: Session = Depends(get_db)):
    db_stadium = crud.get_stadium(db, stadium_id=stadium_id)
    if db_stadium is None:
        raise HTTPException(status_code=404, detail="Stadium not found")
    return db_stadium


@router.post("/", response_model=StadiumResponse)
def create_stadium(
    stadium: StadiumCreate,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return crud.create_stadium(db=db, stadium=stadium)


@router.put("/{stadium_id}", response_model=StadiumResponse)
def update_stadium(
    stadium_id: int,
    stadium: StadiumUpdate,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return crud.update_stadium(db=db, stadium_id=stadium_id, stadium=stadium)
