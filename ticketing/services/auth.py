from datetime import datetime, timedelta
from typing import Optional, Union
import logging
import warnings

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from ticketing.config import ACCESS_TOKEN_EXPIRE_MINUTES, ALGORITHM, SECRET_KEY
from ticketing.database import get_db
from ticketing.exceptions import AuthenticationError, ValidationError
from ticketing.models.user import Admin, Audience
from ticketing.schemas.user import AudienceCreate, Role

# Suppress the bcrypt warning
warnings.filterwarnings("ignore", ".*bcrypt version.*")
warnings.filterwarnings("ignore", ".*trapped.*error reading bcrypt version.*")

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=12)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login")

_ACCOUNT_MODELS = {Role.AUDIENCE: Audience, Role.ADMIN: Admin}


def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password):
    return pwd_context.hash(password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def get_account_by_email(db: Session, email: str, role: Role = Role.AUDIENCE):
    model = _ACCOUNT_MODELS[role]
    return db.query(model).filter(model.email == email.lower()).first()


def register_audience(db: Session, audience: AudienceCreate) -> Audience:
    if get_account_by_email(db, audience.email, Role.AUDIENCE):
        raise ValidationError("Email is already registered", field="email")

    db_audience = Audience(
        name=audience.name,
        email=audience.email.lower(),
        hashed_password=get_password_hash(audience.password),
    )
    db.add(db_audience)
    db.commit()
    db.refresh(db_audience)
    logger.info(f"Audience registered: {db_audience.email}")
    return db_audience


def authenticate(
    db: Session, email: str, password: str, role: Role = Role.AUDIENCE
) -> Union[Audience, Admin]:
    account = get_account_by_email(db, email, role)
    if not account or not verify_password(password, account.hashed_password):
        logger.info(f"Failed {role.value} login for {email}")
        raise AuthenticationError("Invalid email or password")
    return account


def login(db: Session, email: str, password: str, role: Role = Role.AUDIENCE) -> str:
    account = authenticate(db, email, password, role)
    return create_access_token({"sub": account.email, "role": role.value})


def _get_current_account(token: str, db: Session, role: Role):
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        email: str = payload.get("sub")
        if email is None or payload.get("role") != role.value:
            raise credentials_exception
    except JWTError:
        raise credentials_exception
    account = get_account_by_email(db, email, role)
    if account is None:
        raise credentials_exception
    return account


def get_current_audience(
    token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)
) -> Audience:
    return _get_current_account(token, db, Role.AUDIENCE)


def get_current_admin(
    token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)
) -> Admin:
    return _get_current_account(token, db, Role.ADMIN)
