import hmac
import secrets
from typing import Iterable, Optional


API_KEY_PREFIX = "mk_"


def generate_api_key() -> str:
    """Generate a project API key for mock traffic"""
    return f"{API_KEY_PREFIX}{secrets.token_urlsafe(24)}"


def api_key_matches(candidate: Optional[str], allowed_keys: Iterable[str]) -> bool:
    """
    Check ``candidate`` against every allowed key with a constant-time compare.

    All keys are compared even after a hit so the timing does not reveal
    which position matched.
    """
    if not candidate:
        return False

    candidate_bytes = candidate.encode("utf-8")
    found = False
    for key in allowed_keys:
        if not key:
            continue
        if hmac.compare_digest(candidate_bytes, key.encode("utf-8")):
            found = True
    return found


def mask_api_key(api_key: str) -> str:
    """Short, log-safe form of a key"""
    if not api_key:
        return ""
    return api_key[:7] + "..." if len(api_key) > 10 else "***"
