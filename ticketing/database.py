from contextlib import contextmanager
import logging

from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from ticketing.config import DATABASE_URL
from ticketing.exceptions import TransactionFailure

logger = logging.getLogger(__name__)

_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=_connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

_DEPTH_KEY = "transaction_depth"


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def in_transaction(db: Session) -> bool:
    """True while ``db`` is inside a ``transaction()`` scope."""
    return db.info.get(_DEPTH_KEY, 0) > 0


@contextmanager
def transaction(db: Session):
    """
    Atomic unit of work on ``db``.

    The outermost scope commits on normal exit and rolls back on any
    exception. Nested scopes join the outer one, so a cascade of operations
    commits or rolls back together.
    """
    depth = db.info.get(_DEPTH_KEY, 0)
    db.info[_DEPTH_KEY] = depth + 1
    try:
        yield db
        if depth == 0:
            db.commit()
    except OperationalError as exc:
        if depth == 0:
            db.rollback()
        logger.error(f"Transaction aborted by the database: {exc.orig}")
        raise TransactionFailure("Database transaction failed") from exc
    except Exception:
        if depth == 0:
            db.rollback()
        raise
    finally:
        db.info[_DEPTH_KEY] = depth
