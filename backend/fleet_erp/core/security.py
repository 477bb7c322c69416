from __future__ import annotations

from typing import Any

from jose import JWTError, jwt

from fleet_erp.core.config import get_settings
from fleet_erp.core.exceptions import UnauthorizedError


def decode_token(token: str) -> dict[str, Any]:
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise UnauthorizedError("Invalid token") from exc
    return payload


def ensure_token_type(payload: dict[str, Any], expected: str) -> None:
    # Tokens without a type claim are treated as access tokens.
    token_type = payload.get("type", "access")
    if token_type != expected:
        raise UnauthorizedError("Invalid token type")
