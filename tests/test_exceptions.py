"""
Unit tests for the integrity error mapping.
"""

from sqlalchemy.exc import IntegrityError

from synergysphere.exceptions import is_foreign_key_violation


class PgError(Exception):
    pgcode = "23503"


def test_foreign_key_violation_detection():
    sqlite_fk = IntegrityError("INSERT", {}, Exception("FOREIGN KEY constraint failed"))
    postgres_fk = IntegrityError("INSERT", {}, PgError("insert or update violates constraint"))
    unique = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: users.email"))

    assert is_foreign_key_violation(sqlite_fk)
    assert is_foreign_key_violation(postgres_fk)
    assert not is_foreign_key_violation(unique)
