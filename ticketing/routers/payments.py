from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from ticketing.crud import order as crud
from ticketing.database import get_db
from ticketing.models.user import Audience
from ticketing.schemas.order import PaymentHistoryResponse
from ticketing.services.auth import get_current_audience

router = APIRouter()


@router.get("/me", response_model=List[PaymentHistoryResponse])
def read_my_payments(
    db: Session = Depends(get_db),
    current_audience: Audience = Depends(get_current_audience),
):
    return crud.get_audience_payments(db, current_audience.id)
