from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError
from storefront.core.config import settings

TOKEN_TYPE = "admin_access"


def create_admin_token(admin_id: int, email: str | None = None, expires_delta: timedelta | None = None):
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )

    claims = {"sub": str(admin_id), "exp": expire, "type": TOKEN_TYPE}
    if email:
        claims["email"] = email

    return jwt.encode(
        claims,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )


def decode_admin_token(token: str) -> int | None:
    """Admin id carried by a valid, unexpired admin token, else None."""
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except JWTError:
        return None

    if payload.get("type") != TOKEN_TYPE:
        return None

    subject = str(payload.get("sub") or "")
    return int(subject) if subject.isdigit() else None
