# storefront/api/deps.py
from fastapi import Depends, Request

from storefront.domain.errors import Forbidden, Unauthenticated
from storefront.domain.principal import Principal
from storefront.services.auth_service import decode_token


def get_principal(request: Request) -> Principal:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthenticated("Access token required")
    return decode_token(token.strip())


def require_admin(principal: Principal = Depends(get_principal)) -> Principal:
    if not principal.is_admin:
        raise Forbidden("Admin access required")
    return principal
