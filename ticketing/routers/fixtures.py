from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from ticketing.crud import fixture as crud
from ticketing.database import get_db
from ticketing.exceptions import FixtureConflictError
from ticketing.models.user import Admin
from ticketing.schemas.fixture import (
    FixtureCheck,
    FixtureCheckResult,
    FixtureFields,
    FixtureResponse,
)
from ticketing.services import fixture_manager
from ticketing.services.auth import get_current_admin

router = APIRouter()


@router.get("/", response_model=List[FixtureResponse])
def read_fixtures(db: Session = Depends(get_db)):
    return crud.get_all_fixtures(db)


@router.get("/upcoming", response_model=List[FixtureResponse])
def read_upcoming_fixtures(db: Session = Depends(get_db)):
    return crud.get_all_upcoming_fixtures(db)


@router.post("/check", response_model=FixtureCheckResult)
def check_fixture(
    fixture: FixtureCheck,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    """Advisory overlap check for the fixture form; the write re-checks."""
    try:
        fixture_manager.check_fixture_conflict(
            db, fixture.to_candidate(), exclude_fixture_id=fixture.fixture_id
        )
    except FixtureConflictError as e:
        return FixtureCheckResult(conflict=True, detail=e.message)
    return FixtureCheckResult(conflict=False)


@router.post("/", response_model=FixtureResponse)
def create_fixture(
    fixture: FixtureFields,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    command = fixture_manager.CreateFixture(fields=fixture.to_candidate())
    return fixture_manager.create_or_update_fixture(db, command)


@router.put("/{fixture_id}", response_model=FixtureResponse)
def update_fixture(
    fixture_id: int,
    fixture: FixtureFields,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    command = fixture_manager.UpdateFixture(
        fixture_id=fixture_id, fields=fixture.to_candidate()
    )
    return fixture_manager.create_or_update_fixture(db, command)


@router.post("/{fixture_id}/cancel")
def cancel_fixture(
    fixture_id: int,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    fixture_manager.cancel_fixture(db, fixture_id)
    return {"success": True}
