import secrets
from typing import Optional


def is_authorized(header_value: Optional[str], api_key: str) -> bool:
    """The Authorization header must equal the configured key exactly; no scheme prefix is recognized."""
    return secrets.compare_digest((header_value or "").encode("utf-8"), api_key.encode("utf-8"))
