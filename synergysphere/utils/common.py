import uuid
from typing import Any, Iterable, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from synergysphere.constants import UUID_PATTERN
from synergysphere.enums import ErrorCode
from synergysphere.exceptions import raise_bad_request, raise_not_found

T = TypeVar("T")

def get_object_or_404(
    db: Session,
    model: Type[T],
    obj_id: Any,
    msg: str = "Object not found",
    error_code: ErrorCode = ErrorCode.NOT_FOUND,
) -> T:
    """
    Retrieves an object by ID or raises a 404 HTTPException.
    """
    obj = db.query(model).filter(model.id == obj_id).first()
    if not obj:
        raise_not_found(msg, error_code)
    return obj

def is_uuid(value: Any) -> bool:
    return bool(UUID_PATTERN.fullmatch(str(value or "")))

def parse_uuid(value: Any, name: str) -> uuid.UUID:
    """
    Validates an identifier before it reaches a query.
    Raises a 400 "Invalid <name>" when it is not a well-formed UUID.
    """
    if not is_uuid(value):
        raise_bad_request(f"Invalid {name}")
    return uuid.UUID(str(value))

def parse_optional_uuid(value: Optional[str], name: str) -> Optional[uuid.UUID]:
    if not value:
        return None
    return parse_uuid(value, name)

def unique_ids(values: Iterable[Any]) -> list[str]:
    """
    Normalizes ids to strings, drops empty ones and de-duplicates
    while keeping the first-seen order.
    """
    seen = {}
    for value in values:
        if value is None:
            continue
        text = str(value).strip()
        if text:
            seen.setdefault(text.lower(), text)
    return list(seen.values())
