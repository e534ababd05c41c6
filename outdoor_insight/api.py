"""HTTP API for the outdoor-activity assessment."""

import hmac

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status

from .config import settings
from .data_sources import build_data_source
from .domain import AssessmentResult
from .forecast_service import get_outdoor_assessment
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="api")


def require_api_key(x_api_key: str | None = Header(default=None)):
    """Validate the X-API-Key header against the configured static key, if any."""
    if not settings.api_key:
        logger.debug("No API key configured; allowing all requests")
        return

    if not x_api_key:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing API key")

    if hmac.compare_digest(str(x_api_key), str(settings.api_key)):
        return

    logger.debug("Invalid API key provided")
    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


router = APIRouter(dependencies=[Depends(require_api_key)])
DATA_SOURCE = build_data_source(settings)


@router.get("/weather/outdoor-assessment", response_model=AssessmentResult)
def outdoor_assessment(
    latitude: float = Query(...),
    longitude: float = Query(...),
):
    """Return the outdoor-activity assessment for a coordinate."""
    logger.info("Outdoor assessment requested", extra={"latitude": latitude, "longitude": longitude})
    return get_outdoor_assessment(
        latitude,
        longitude,
        timezone=settings.timezone,
        data_source=DATA_SOURCE,
    )
