from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from ticketing.crud import stadium as crud
from ticketing.database import get_db
from ticketing.models.user import Admin
from ticketing.schemas.stadium import ZoneCreate, ZoneResponse, ZoneUpdate
from ticketing.services.auth import get_current_admin

router = APIRouter()


@router.get("/", response_model=List[ZoneResponse])
def read_zones(stadium_id: Optional[int] = None, db: Session = Depends(get_db)):
    return crud.get_zones(db, stadium_id=stadium_id)


@router.post("/", response_model=ZoneResponse)
def create_zone(
    zone: ZoneCreate,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return crud.create_zone(db=db, zone=zone)


@router.put("/{zone_id}", response_model=ZoneResponse)
def update_zone(
    zone_id: int,
    zone: ZoneUpdate,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    return crud.update_zone(db=db, zone_id=zone_id, zone=zone)
