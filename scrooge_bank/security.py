"""
Credential handling.

Passwords are stored as bcrypt hashes. Bearer credentials are
HS256-signed JWTs carrying the user's id and role. They are
stateless: nothing is stored server-side, so the only way a
token stops working is by expiring.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
import jwt

from scrooge_bank.config import get_settings
from scrooge_bank.exceptions import Unauthorized

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def hash_secret(plaintext: str) -> str:
    """Hash a password with the configured bcrypt work factor."""
    settings = get_settings()
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(plaintext.encode("utf-8"), salt).decode("utf-8")


def verify_secret(plaintext: str, hashed: str) -> bool:
    """Check a password against its stored hash."""
    try:
        return bcrypt.checkpw(plaintext.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored hash is not a bcrypt hash, or the password is too long
        return False


def issue_credential(user_id: int, role: str) -> str:
    """Create a signed, time-limited bearer token for a user."""
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "id": user_id,
        "role": role,
        "iat": now,
        "exp": now + timedelta(hours=settings.TOKEN_EXPIRE_HOURS),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_credential(token: str) -> dict[str, Any]:
    """
    Decode and verify a bearer token.

    Returns the claims. Raises Unauthorized if the token is
    malformed, signed with another key, or expired. The claims
    only identify the caller; the user record must still be
    loaded to learn the current role.
    """
    settings = get_settings()
    try:
        claims = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "id"]},
        )
    except jwt.InvalidTokenError:
        raise Unauthorized("Invalid token")

    if not isinstance(claims.get("id"), int):
        raise Unauthorized("Invalid token")
    return claims


def parse_authorization_header(header: str | None) -> str:
    """
    Extract the token from an ``Authorization: Bearer <token>`` header.

    The header must be exactly two space-separated parts with the
    scheme spelled ``Bearer``.
    """
    if not header:
        raise Unauthorized("Authorization required")
    parts = header.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer":
        raise Unauthorized("Invalid authorization header")
    return parts[1]
