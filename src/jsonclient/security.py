"""Header redaction and base URI validation."""

from __future__ import annotations

from typing import Mapping
from urllib.parse import urlparse

from .exceptions import JsonClientUsageError


SENSITIVE_HEADERS = {
    "authorization",
    "proxy-authorization",
    "cookie",
    "x-api-key",
    "x-auth-token",
}


def sanitize_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Return headers with sensitive values redacted for logging."""
    redacted: dict[str, str] = {}
    for key, value in headers.items():
        if key.lower() in SENSITIVE_HEADERS:
            redacted[key] = "[REDACTED]"
        else:
            redacted[key] = value
    return redacted


def validate_base_url(url: str) -> None:
    """Reject base URIs that requests could not be resolved against."""
    if "\x00" in url:
        raise JsonClientUsageError("Invalid base_uri")
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        raise JsonClientUsageError("base_uri must include scheme and host")
    if parsed.scheme not in {"http", "https"}:
        raise JsonClientUsageError(f"Unsupported base_uri scheme: {parsed.scheme}")
