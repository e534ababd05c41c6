"""FastAPI application setup for Outdoor Insight."""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .api import router as api_router
from .errors import InvalidInputError, NetworkError, ParseError
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="main")

app = FastAPI(title="Outdoor Insight")


@app.exception_handler(InvalidInputError)
def invalid_input_handler(request: Request, exc: InvalidInputError):
    """Reject out-of-range coordinates."""
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


@app.exception_handler(NetworkError)
def network_error_handler(request: Request, exc: NetworkError):
    """Surface provider outages as a bad gateway."""
    logger.warning(
        "Forecast provider request failed",
        extra={"path": request.url.path, "status_code": exc.status_code, "error": str(exc)},
    )
    return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": str(exc)})


@app.exception_handler(ParseError)
def parse_error_handler(request: Request, exc: ParseError):
    """Surface malformed provider payloads as a bad gateway."""
    logger.warning("Forecast provider returned an unusable payload",
                   extra={"path": request.url.path, "error": str(exc)})
    return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": str(exc)})


# API routes
app.include_router(api_router, prefix="/api")
