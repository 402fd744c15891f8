"""bandje API layer - routes, schemas, and middleware."""

from bandje.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from bandje.api.routes import router
from bandje.api.schemas import ErrorResponse, HealthResponse

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "configure_cors",
    "router",
    "ErrorResponse",
    "HealthResponse",
]
