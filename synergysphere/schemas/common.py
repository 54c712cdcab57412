from typing import Optional


def require_text(value: Optional[str], field: str) -> str:
    """Strips a required string field and rejects blank values."""
    if value is None or not str(value).strip():
        raise ValueError(f"{field} is required")
    return str(value).strip()
