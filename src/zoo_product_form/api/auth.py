"""Merchant admin authentication for the service catalog routes."""
import hmac
from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import APIKeyHeader

from ..config import Settings
from .dependencies import get_settings


merchant_key_header = APIKeyHeader(name="X-ZOO-API-KEY", auto_error=False)


async def require_api_key(
    api_key: Annotated[Optional[str], Security(merchant_key_header)] = None,
    settings: Settings = Depends(get_settings),
) -> str:
    """Admit a request carrying the configured merchant admin key.

    Raises:
        HTTPException: 500 when ZOO_API_KEY is unset, 401 when the header is
            missing or does not match
    """
    if not settings.admin_api_key:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="ZOO_API_KEY is not configured",
        )

    if not api_key or not hmac.compare_digest(
        api_key.encode(), settings.admin_api_key.encode()
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
            headers={"WWW-Authenticate": "API-Key"},
        )

    return api_key
