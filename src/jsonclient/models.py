"""Payload and error metadata models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

import httpx
from pydantic import BaseModel, ConfigDict

E = TypeVar("E")


class JsonModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ErrorResponse(JsonModel):
    """Default shape for decoded error bodies; unknown fields are kept."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    message: str | None = None
    error: str | None = None
    code: str | None = None


@dataclass(frozen=True)
class ExceptionMetadata(Generic[E]):
    status_code: int
    method: str
    uri: httpx.URL
    data: E | None = None
