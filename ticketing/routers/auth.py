from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ticketing.database import get_db
from ticketing.schemas.user import AudienceCreate, AudienceResponse, LoginRequest, Token
from ticketing.services import auth as auth_service

router = APIRouter()


@router.post("/register", response_model=AudienceResponse)
def register(audience: AudienceCreate, db: Session = Depends(get_db)):
    return auth_service.register_audience(db=db, audience=audience)


@router.post("/login", response_model=Token)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    token = auth_service.login(
        db, credentials.email, credentials.password, credentials.role
    )
    return Token(access_token=token)
