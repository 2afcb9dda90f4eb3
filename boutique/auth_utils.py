# boutique/auth_utils.py
from datetime import datetime, timedelta, timezone
from functools import lru_cache

import jwt
from passlib.context import CryptContext

from boutique.errors import ForbiddenError

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_DAYS = 7
DEFAULT_BCRYPT_ROUNDS = 12


@lru_cache(maxsize=None)
def get_pwd_context(rounds: int = DEFAULT_BCRYPT_ROUNDS) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Hash a password with salted bcrypt."""
    return get_pwd_context(rounds).hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plaintext password against its hash."""
    return get_pwd_context().verify(plain_password, hashed_password)


def dummy_verify(rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
    # burns the same time as a real check so unknown emails are not detectable by latency
    get_pwd_context(rounds).dummy_verify()


def create_access_token(data: dict, secret: str, algorithm: str = ALGORITHM,
                        expires_delta: timedelta = timedelta(days=ACCESS_TOKEN_EXPIRE_DAYS)) -> str:
    """Create a signed JWT that expires after expires_delta."""
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    to_encode.update({"iat": now, "exp": now + expires_delta})
    return jwt.encode(to_encode, secret, algorithm=algorithm)


def decode_access_token(token: str, secret: str, algorithm: str = ALGORITHM) -> dict:
    """Returns the token claims or raises ForbiddenError for any bad token."""
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except jwt.ExpiredSignatureError:
        raise ForbiddenError("Token has expired")
    except jwt.InvalidTokenError:
        raise ForbiddenError("Invalid token")

    if not payload.get("userId") or not payload.get("role"):
        raise ForbiddenError("Invalid token")
    return payload
