"""
Tests for the transaction boundary
"""
import pytest
from sqlalchemy.exc import OperationalError

from ticketing.database import in_transaction, transaction
from ticketing.exceptions import TransactionFailure
from ticketing.models.team import Team


def test_outer_scope_commits(db):
    with transaction(db):
        db.add(Team(name="Gujarat Titans", abbr="GT"))

    db.rollback()  # nothing pending is left to discard
    assert db.query(Team).count() == 1


def test_exception_rolls_back_everything(db):
    with pytest.raises(RuntimeError):
        with transaction(db):
            db.add(Team(name="Gujarat Titans", abbr="GT"))
            db.flush()
            raise RuntimeError("boom")

    assert db.query(Team).count() == 0


def test_nested_scope_joins_outer(db):
    with pytest.raises(RuntimeError):
        with transaction(db):
            with transaction(db):
                db.add(Team(name="Gujarat Titans", abbr="GT"))
                assert in_transaction(db)
            raise RuntimeError("outer fails after inner finished")

    assert not in_transaction(db)
    assert db.query(Team).count() == 0


def test_database_abort_becomes_transaction_failure(db):
    with pytest.raises(TransactionFailure) as exc_info:
        with transaction(db):
            raise OperationalError("COMMIT", {}, Exception("database is locked"))

    assert isinstance(exc_info.value.__cause__, OperationalError)
    assert not in_transaction(db)
