"""Bearer token verification for the URL shortener application.

Tokens are issued by the identity service that owns user accounts; this
service only verifies them. Both sides share ``SECRET_KEY``. A token is
``<payload>.<signature>`` where the payload is base64url encoded JSON
``{"sub": <user id>, "exp": <unix timestamp>}`` and the signature is the
hex HMAC-SHA256 of the encoded payload.
"""

import base64
import hashlib
import hmac
import json
import logging
import time
from typing import Optional

from app.core.config import settings

logger = logging.getLogger(__name__)


def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(payload: str, secret_key: str) -> str:
    return hmac.new(secret_key.encode("utf-8"), payload.encode("ascii"), hashlib.sha256).hexdigest()


def create_access_token(
    user_id: int,
    expires_minutes: Optional[int] = None,
    secret_key: Optional[str] = None
) -> str:
    """
    Create a signed access token for a user.

    Mirrors what the identity service hands out to clients.

    Args:
        user_id: Id of the authenticated user
        expires_minutes: Token lifetime, defaults to TOKEN_EXPIRE_MINUTES
        secret_key: Signing key, defaults to SECRET_KEY

    Returns:
        str: The encoded token
    """
    if expires_minutes is None:
        expires_minutes = settings.TOKEN_EXPIRE_MINUTES
    claims = {"sub": user_id, "exp": int(time.time()) + expires_minutes * 60}
    payload = _b64encode(json.dumps(claims, separators=(",", ":")).encode("utf-8"))
    return f"{payload}.{_sign(payload, secret_key or settings.SECRET_KEY)}"


def decode_access_token(token: str, secret_key: Optional[str] = None) -> Optional[int]:
    """
    Verify a token and extract the user id.

    Args:
        token: Token as sent in the Authorization header
        secret_key: Verification key, defaults to SECRET_KEY

    Returns:
        The user id, or None if the token is malformed, forged or expired
    """
    if not token.isascii():
        return None

    try:
        payload, signature = token.split(".", 1)
    except ValueError:
        return None

    expected = _sign(payload, secret_key or settings.SECRET_KEY)
    if not hmac.compare_digest(expected, signature):
        logger.warning("Rejected access token with invalid signature")
        return None

    try:
        claims = json.loads(_b64decode(payload))
        user_id = int(claims["sub"])
        expires_at = int(claims["exp"])
    except (ValueError, KeyError, TypeError):
        return None

    if expires_at < time.time():
        logger.info(f"Rejected expired access token for user {user_id}")
        return None

    return user_id
