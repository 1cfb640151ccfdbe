"""Greeting and health check endpoints."""

from pydantic import BaseModel

from upload_api.core.logger import LogIcon, logger
from upload_api.core.router import Router
from upload_api.core.settings import settings as st

router = Router(__file__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    service: str
    version: str


@router.get("/")
async def greeting() -> str:
    return st.GREETING


@router.get("/health")
async def health_check() -> HealthResponse:
    logger.info("Health check requested", icon=LogIcon.HEALTHCHECK)
    return HealthResponse(status="healthy", service=st.API_NAME, version=st.API_VERSION)
