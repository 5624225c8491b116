"""
Signed bearer token creation and verification.

Tokens are url-safe base64-encoded JSON payloads signed with HMAC-SHA256.
The payload carries the subject user's id under ``id``. Tokens do not
expire; rotating the secret invalidates every issued token.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from typing import Any, Dict


class TokenError(ValueError):
    """Raised when a token is malformed or its signature does not match."""


def _sign(raw: bytes, secret: str) -> str:
    return hmac.new(secret.encode(), raw, hashlib.sha256).hexdigest()


def create_token(user_id: str, secret: str) -> str:
    """Create a signed token containing ``user_id``."""
    if not secret:
        raise ValueError("jwt_secret_blank")
    payload = {"id": user_id, "iat": int(time.time())}
    raw = json.dumps(payload, separators=(",", ":")).encode()
    return urlsafe_b64encode(raw).decode() + "." + _sign(raw, secret)


def verify_token(token: str, secret: str) -> Dict[str, Any]:
    """
    Verify ``token`` and return its decoded payload.

    Raises ``TokenError`` on bad format or signature.
    """
    if not secret:
        raise ValueError("jwt_secret_blank")
    try:
        encoded, sig = token.split(".", 1)
        raw = urlsafe_b64decode(encoded)
        if not hmac.compare_digest(sig.encode(), _sign(raw, secret).encode()):
            raise ValueError("bad signature")
        payload = json.loads(raw)
    except ValueError as exc:
        raise TokenError(str(exc)) from exc
    if not isinstance(payload, dict):
        raise TokenError("bad payload")
    return payload
