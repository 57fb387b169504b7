# storefront/services/auth_service.py
from datetime import datetime, timezone, timedelta

import jwt

from storefront.domain.errors import Forbidden
from storefront.domain.principal import Principal, ROLES
from storefront.utils.settings import JWT_SECRET, JWT_ALGORITHM, TOKEN_TTL_DAYS


def issue_token(user_id: int, role: str = "user", ttl: timedelta | None = None) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "role": role,
        "iat": now,
        "exp": now + (ttl or timedelta(days=TOKEN_TTL_DAYS)),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> Principal:
    """Verify a bearer token and turn it into a Principal. Raises Forbidden."""
    try:
        claims = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
        user_id = int(claims["sub"])
    except (jwt.PyJWTError, KeyError, ValueError):
        raise Forbidden("Invalid token")

    role = claims.get("role", "user")
    if role not in ROLES:
        raise Forbidden("Invalid token")
    return Principal(id=user_id, role=role)
