from datetime import UTC, datetime, timedelta

import bcrypt
from jose import jwt

from app.config import settings

ALGORITHM = "HS256"
ACCESS = "access"
REFRESH = "refresh"


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def _encode(claims: dict, lifetime: timedelta) -> str:
    payload = {**claims, "exp": datetime.now(UTC) + lifetime}
    return jwt.encode(payload, settings.secret_key, algorithm=ALGORITHM)


def create_access_token(user_id: int, email: str) -> str:
    return _encode(
        {"sub": str(user_id), "email": email, "type": ACCESS},
        timedelta(minutes=settings.access_token_expire_minutes),
    )


def create_refresh_token(user_id: int) -> str:
    return _encode(
        {"sub": str(user_id), "type": REFRESH},
        timedelta(days=settings.refresh_token_expire_days),
    )


def decode_user_id(token: str, token_type: str) -> int:
    """Return the user id from a valid token of ``token_type``.

    Raises ``jose.JWTError`` for bad signatures or expiry and ``ValueError``
    when the token is of the wrong type.
    """
    payload = jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    if payload.get("type") != token_type:
        raise ValueError(f"Expected a {token_type} token")
    return int(payload["sub"])
