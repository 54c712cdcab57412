import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Uuid


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def uuid_pk() -> Column:
    return Column(Uuid, primary_key=True, default=uuid.uuid4)
