"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from modules.accounts.interfaces import IAccountStore
from shared.config import get_settings
from shared.exceptions import ExternalServiceError

from ..dependencies import get_account_store

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    storage: str
    backend: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(
    accounts: IAccountStore = Depends(get_account_store),
):
    """
    Readiness check endpoint.

    Probes the account store with a cheap lookup. Returns 503 when the
    store cannot be reached.
    """
    backend = get_settings().storage_backend
    try:
        accounts.exists_by_email("readiness-probe@quad.local")
    except ExternalServiceError as e:
        logger.warning(f"Readiness check failed: {e.message}")
        return JSONResponse(
            status_code=503,
            content=ReadinessResponse(status="not_ready", storage="unavailable", backend=backend).model_dump(),
        )
    return ReadinessResponse(status="ready", storage="connected", backend=backend)
