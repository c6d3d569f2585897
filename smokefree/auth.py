"""Optional API key check for the recovery endpoints."""

import logging

from fastapi import HTTPException, Header, Request

from smokefree.config import settings

logger = logging.getLogger(__name__)


def extract_api_key(x_api_key: str | None, authorization: str | None) -> str | None:
    """X-API-Key wins; otherwise the token of an `Authorization: Bearer` header."""
    if x_api_key is not None:
        return x_api_key
    if authorization and authorization.startswith("Bearer "):
        return authorization.removeprefix("Bearer ").strip() or None
    return None


async def verify_api_key(
    request: Request,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
    authorization: str | None = Header(default=None),
) -> str:
    """Resolve the caller's key against SMOKEFREE_API_KEY.

    Unset means the service is open and every request passes. Rejections are
    logged with the path only, never the offered key.
    """
    if settings.api_key is None:
        return ""

    key = extract_api_key(x_api_key, authorization)
    if key is None:
        logger.warning("Rejected %s %s: no API key", request.method, request.url.path)
        raise HTTPException(status_code=401, detail="Missing API key")
    if key != settings.api_key:
        logger.warning("Rejected %s %s: wrong API key", request.method, request.url.path)
        raise HTTPException(status_code=401, detail="Invalid API key")

    return key
