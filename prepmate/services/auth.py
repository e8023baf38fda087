# prepmate/services/auth.py
"""
Password hashing and bearer tokens.

Hashes are stored as "pbkdf2_sha256$<iterations>$<salt>$<hex digest>", so the
work factor can be raised in settings without invalidating existing users.
"""
from datetime import datetime, timedelta
from typing import Optional
import hashlib
import secrets
from jose import jwt, JWTError
from pydantic import BaseModel
from prepmate.core.config import settings

HASH_SCHEME = "pbkdf2_sha256"
ALGORITHM = "HS256"


class TokenData(BaseModel):
    sub: Optional[str] = None


def _derive(password: str, salt: str, iterations: int) -> str:
    return hashlib.pbkdf2_hmac("sha256", (password or "").encode("utf-8"), salt.encode("utf-8"), iterations).hex()


def hash_password(password: str, iterations: Optional[int] = None) -> str:
    iterations = iterations or settings.PASSWORD_HASH_ITERATIONS
    salt = secrets.token_hex(16)
    return "$".join((HASH_SCHEME, str(iterations), salt, _derive(password, salt, iterations)))


def verify_password(plain: str, hashed: str) -> bool:
    parts = hashed.split("$") if isinstance(hashed, str) else []
    if len(parts) != 4 or parts[0] != HASH_SCHEME or not parts[1].isdigit() or int(parts[1]) < 1:
        return False
    _scheme, iterations, salt, digest = parts
    return secrets.compare_digest(_derive(plain, salt, int(iterations)), digest)


def create_access_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    now = datetime.utcnow()
    exp = now + (expires_delta if expires_delta else timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    payload = {"sub": subject, "iat": now, "exp": exp}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> TokenData:
    """Raises jose.JWTError on a bad signature or an expired token."""
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    return TokenData(sub=payload.get("sub"))


__all__ = ["JWTError", "TokenData", "hash_password", "verify_password",
           "create_access_token", "decode_access_token"]
