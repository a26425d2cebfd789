"""
Authentication utilities with JWT tokens and bcrypt password hashing.

- bcrypt with per-password salt and a configurable work factor
- HS256 JWT access tokens whose subject is the user id
- Password strength policy for new accounts
- Random email confirmation tokens
"""

import secrets
import string
from datetime import UTC, datetime, timedelta

import bcrypt
from jose import JWTError, jwt

from app.config import settings

ALGORITHM = "HS256"
PASSWORD_MIN_LENGTH = 8
PASSWORD_SYMBOLS = frozenset(string.punctuation)
# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72
CONFIRMATION_TOKEN_BYTES = 32

# Compared against when the email is unknown so both login failures cost the same.
# Built lazily per work factor so it matches the rounds of real stored hashes.
_dummy_hashes: dict[int, bytes] = {}


def get_dummy_hash(rounds: int | None = None) -> bytes:
    rounds = rounds or settings.bcrypt_rounds
    if rounds not in _dummy_hashes:
        _dummy_hashes[rounds] = bcrypt.hashpw(
            b"cybermaker-dummy-password", bcrypt.gensalt(rounds=rounds)
        )
    return _dummy_hashes[rounds]


def verify_password(
    plain_password: str, hashed_password: str | None, rounds: int | None = None
) -> bool:
    """
    Verify a plain text password against a bcrypt hash (constant time).

    Unknown users (``hashed_password`` None) and passwords longer than bcrypt's
    72-byte limit still pay for one comparison at ``rounds`` and return False.
    """
    candidate = plain_password.encode("utf-8")
    if hashed_password is None or len(candidate) > BCRYPT_MAX_BYTES:
        bcrypt.checkpw(candidate[:BCRYPT_MAX_BYTES], get_dummy_hash(rounds))
        return False
    try:
        return bcrypt.checkpw(candidate, hashed_password.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def get_password_hash(password: str, rounds: int | None = None) -> str:
    """Hash a plain text password using bcrypt."""
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    hashed_password = bcrypt.hashpw(password=password.encode("utf-8"), salt=salt)
    return hashed_password.decode("utf-8")


def is_strong_password(password: str) -> bool:
    """At least 8 characters with a lowercase, an uppercase, a digit and a symbol."""
    return (
        len(password) >= PASSWORD_MIN_LENGTH
        and any(c.islower() for c in password)
        and any(c.isupper() for c in password)
        and any(c.isdigit() for c in password)
        and any(c in PASSWORD_SYMBOLS for c in password)
    )


def fits_bcrypt(password: str) -> bool:
    return len(password.encode("utf-8")) <= BCRYPT_MAX_BYTES


def generate_confirmation_token() -> str:
    """256-bit random token, hex encoded."""
    return secrets.token_hex(CONFIRMATION_TOKEN_BYTES)


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Create a JWT access token with the given data."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(UTC) + expires_delta
    else:
        expire = datetime.now(UTC) + timedelta(
            minutes=settings.access_token_expire_minutes
        )

    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict | None:
    """Decode and verify a JWT access token."""
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError:
        return None


def extract_user_id_from_token(token: str) -> int | None:
    """Extract the user id from a JWT token's ``sub`` claim."""
    payload = decode_access_token(token)
    if payload is None:
        return None
    try:
        return int(payload.get("sub"))
    except (TypeError, ValueError):
        return None
