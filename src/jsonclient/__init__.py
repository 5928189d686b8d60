"""Typed HTTP/JSON request client built on httpx and pydantic."""

from .client import AsyncJsonClient, JsonClient
from .exceptions import JsonClientError, JsonClientHTTPError, JsonClientUsageError
from .models import ErrorResponse, ExceptionMetadata, JsonModel
from .options import Options

__version__ = "0.1.0"

__all__ = [
    "AsyncJsonClient",
    "ErrorResponse",
    "ExceptionMetadata",
    "JsonClient",
    "JsonClientError",
    "JsonClientHTTPError",
    "JsonClientUsageError",
    "JsonModel",
    "Options",
    "__version__",
]
