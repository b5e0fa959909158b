# serilovers/utils/security.py
import logging
from datetime import datetime, timedelta
from typing import Any, Optional

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from passlib.exc import UnknownHashError

from ..config import settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=['argon2'], deprecated='auto')

# ============================================================
# Access tokens
# ============================================================

def create_access_token(
    subject: Any,
    expires_delta: Optional[timedelta] = None,
    role: Optional[str] = None
) -> str:
    """
    Signed bearer token for a user id.

    Claims: sub (user id as str), role, type=access, iat and exp.
    Lifetime defaults to ACCESS_TOKEN_EXPIRE_MINUTES.
    """
    issued_at = datetime.utcnow()
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {
        'sub': str(subject),
        'role': role or 'client',
        'type': 'access',
        'iat': issued_at,
        'exp': issued_at + lifetime,
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Verified claims; raises ExpiredSignatureError or JWTError"""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError:
        logger.info("Rejected expired token")
        raise
    except JWTError as e:
        logger.warning(f"⚠️ Rejected invalid token: {e}")
        raise

# ============================================================
# Passwords
# ============================================================

def get_password_hash(password: str) -> str:
    if not password:
        raise ValueError("Password cannot be empty")
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Unknown or placeholder hashes count as a mismatch"""
    if not plain_password or not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (UnknownHashError, ValueError):
        logger.warning("⚠️ Stored password hash is not in a recognised format")
        return False
