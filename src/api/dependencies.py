"""FastAPI dependencies for authentication and shared resources."""

import secrets
from datetime import datetime

from fastapi import Header, HTTPException, status

from core import config
from core.config import BillingConfig, get_billing_config
from models.entries import Month
from services.periods import now_local, resolve_reporting_month


async def verify_api_key(x_api_key: str = Header(..., alias="X-API-Key")) -> str:
    """
    Verify API key from X-API-Key header.

    Raises:
        HTTPException: 401 if key is missing or invalid
    """
    if not config.API_KEY:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "API key not configured on server",
                "code": "INTERNAL_ERROR",
                "details": [],
            },
        )

    # Use constant-time comparison to prevent timing attacks
    if not secrets.compare_digest(x_api_key, config.API_KEY):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error": "Invalid or missing API key",
                "code": "UNAUTHORIZED",
                "details": [],
            },
        )

    return x_api_key


def billing_config() -> BillingConfig:
    """Billing rules for the report endpoints."""
    return get_billing_config()


def current_time() -> datetime:
    """Now in the configured timezone."""
    return now_local()


def resolve_month_param(month: str | None, now: datetime) -> Month:
    """Month from a YYYY-MM query parameter, or the current reporting month."""
    if month:
        return Month.parse(month)
    return resolve_reporting_month(now)
