from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext

from taskboard.config import ACCESS_TOKEN_EXPIRE_MINUTES, ALGORITHM, BCRYPT_ROUNDS, SECRET_KEY

# every byte of the password counts, not just the first 72
pwd_context = CryptContext(schemes=["bcrypt_sha256"], deprecated="auto", bcrypt_sha256__rounds=BCRYPT_ROUNDS)


class InvalidToken(Exception):
    """The bearer token is malformed, badly signed, expired or has no subject."""


# -----------------------------
# Passwords
# -----------------------------
def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def dummy_verify() -> None:
    """Burn the same amount of time as a real verify (used for unknown emails)."""
    pwd_context.dummy_verify()


# -----------------------------
# JWT
# -----------------------------
def create_access_token(identity: str, expires_delta: Optional[timedelta] = None) -> str:
    if expires_delta is None:
        expires_delta = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    now = datetime.now(timezone.utc)
    to_encode = {"sub": identity, "iat": now, "exp": now + expires_delta}
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except jwt.PyJWTError as exc:
        raise InvalidToken(str(exc)) from exc


def verify_token(token: str) -> str:
    """Return the identity a token was issued for, or raise InvalidToken."""
    payload = decode_token(token)
    identity = payload.get("sub")
    if not identity:
        raise InvalidToken("token has no subject")
    return identity
