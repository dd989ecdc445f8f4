"""Turning request path segments into storage keys.

Delete addresses a link by a percent-decoded segment, so ``yt%2Fvideo`` names
the key ``yt/video``. Redirect lookups use the path exactly as received.
"""
from urllib.parse import unquote

from errors import ValidationError


def decode_key(segment: str) -> str:
    try:
        return unquote(segment, errors="strict")
    except UnicodeDecodeError:
        raise ValidationError(f"Invalid percent-encoding in short ID '{segment}'")


def literal_key(path: str) -> str:
    return path[1:] if path.startswith("/") else path
