"""Default and per-request options for the JsonClient."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


def _normalize_headers(headers: Mapping[str, str] | None) -> dict[str, str]:
    if not headers:
        return {}
    clean: dict[str, str] = {}
    for key, value in headers.items():
        clean[str(key)] = str(value)
    return clean


@dataclass(frozen=True)
class Options:
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(_normalize_headers(self.headers)))

    def merge(self, defaults: Options | None) -> Options:
        """Return new options with ``defaults`` filling in headers missing here.

        Header names compare case-insensitively; a per-call value is never
        overwritten by a default.
        """
        if defaults is None or not defaults.headers:
            return self
        merged = dict(self.headers)
        present = {key.lower() for key in merged}
        for key, value in defaults.headers.items():
            if key.lower() not in present:
                merged[key] = value
                present.add(key.lower())
        return Options(headers=merged)
