"""Synchronous and asynchronous typed JSON clients."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Mapping, NamedTuple
from urllib.parse import urlparse

import httpx
from pydantic import TypeAdapter, ValidationError

from .exceptions import JsonClientHTTPError, JsonClientUsageError
from .models import ErrorResponse, ExceptionMetadata
from .options import Options
from .security import sanitize_headers, validate_base_url

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
HTTP_ERROR_MESSAGE = "An exception occurred while executing the http request."


@lru_cache(maxsize=256)
def _adapter(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(Any if target is None else target)


def _encode_body(body: Any) -> bytes:
    return _adapter(None).dump_json(body, by_alias=True)


def _is_absolute(url: str) -> bool:
    parsed = urlparse(url)
    return bool(parsed.scheme and parsed.netloc)


def _query_string(params: Mapping[str, str]) -> str:
    # Keys and values go on the wire exactly as given, without percent-encoding.
    return "&".join(f"{key}={value}" for key, value in params.items())


class _PreparedRequest(NamedTuple):
    method: str
    url: str
    headers: dict[str, str]
    content: bytes | None


class _BaseJsonClient:
    def __init__(
        self,
        base_uri: str | httpx.URL | None = None,
        options: Options | None = None,
    ) -> None:
        self.base_uri = str(base_uri) if base_uri is not None else None
        if self.base_uri is not None:
            validate_base_url(self.base_uri)
        self.options = options or Options()

    def _url(self, path: str | None, params: Mapping[str, str] | None) -> str:
        target = path or ""
        if params:
            target += "?" + _query_string(params)

        if _is_absolute(target):
            return target
        if self.base_uri is None:
            raise JsonClientUsageError(f"Cannot resolve relative path {path!r} without a base_uri")
        if not target:
            return self.base_uri
        if target.startswith("?"):
            return self.base_uri + target
        return self.base_uri.rstrip("/") + "/" + target.lstrip("/")

    def _headers(self, options: Options | None, *, has_body: bool) -> dict[str, str]:
        merged = dict((options or Options()).merge(self.options).headers)
        if has_body:
            for key in [key for key in merged if key.lower() == "content-type"]:
                del merged[key]
            merged["Content-Type"] = JSON_CONTENT_TYPE
        return merged

    def _prepare(
        self,
        method: str | None,
        path: str | None,
        params: Mapping[str, str] | None,
        body: Any,
        options: Options | None,
    ) -> _PreparedRequest:
        if not method:
            raise JsonClientUsageError("method is required")
        if path is None and self.base_uri is None:
            raise JsonClientUsageError("path can not be None when the client has no base_uri")

        url = self._url(path, params)
        content = _encode_body(body) if body is not None else None
        headers = self._headers(options, has_body=content is not None)
        method = method.upper()
        logger.debug("%s %s headers=%s", method, url, sanitize_headers(headers))
        return _PreparedRequest(method, url, headers, content)

    @staticmethod
    def _decode_error_body(response: httpx.Response, error_type: Any) -> Any:
        if not response.content:
            return None
        try:
            return _adapter(error_type).validate_json(response.content)
        except (ValidationError, UnicodeDecodeError) as exc:
            logger.debug(
                "Discarding undecodable error body from %s %s: %s",
                response.request.method,
                response.request.url,
                exc,
            )
            return None

    @classmethod
    def _raise_for_status(cls, response: httpx.Response, error_type: Any) -> None:
        if response.is_success:
            return
        request = response.request
        metadata = ExceptionMetadata(
            status_code=response.status_code,
            method=request.method.upper(),
            uri=request.url,
            data=cls._decode_error_body(response, error_type),
        )

        cause: httpx.HTTPStatusError | None = None
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            cause = exc

        raise JsonClientHTTPError(
            HTTP_ERROR_MESSAGE,
            status_code=response.status_code,
            code=response.reason_phrase,
            metadata=metadata,
            cause=cause,
        ) from cause

    @staticmethod
    def _parse_response(response: httpx.Response, response_type: Any) -> Any:
        if not response.content:
            return None
        return _adapter(response_type).validate_json(response.content)

    def _handle_response(self, response: httpx.Response, response_type: Any, error_type: Any) -> Any:
        logger.debug(
            "%s %s -> %s",
            response.request.method,
            response.request.url,
            response.status_code,
        )
        self._raise_for_status(response, error_type)
        return self._parse_response(response, response_type)


class JsonClient(_BaseJsonClient):
    """Synchronous client."""

    def __init__(
        self,
        base_uri: str | httpx.URL | None = None,
        options: Options | None = None,
        *,
        httpx_client: httpx.Client | None = None,
    ) -> None:
        super().__init__(base_uri, options)
        self._httpx = httpx_client or httpx.Client()

    def __enter__(self) -> "JsonClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._httpx.close()

    def request(
        self,
        method: str,
        path: str | None = None,
        *,
        params: Mapping[str, str] | None = None,
        body: Any = None,
        options: Options | None = None,
        response_type: Any = None,
        error_type: Any = ErrorResponse,
    ) -> Any:
        prepared = self._prepare(method, path, params, body, options)
        response = self._httpx.request(
            prepared.method,
            prepared.url,
            headers=prepared.headers,
            content=prepared.content,
        )
        return self._handle_response(response, response_type, error_type)

    def get(self, path: str | None = None, **kwargs: Any) -> Any:
        return self.request("GET", path, **kwargs)

    def head(self, path: str | None = None, **kwargs: Any) -> Any:
        return self.request("HEAD", path, **kwargs)

    def delete(self, path: str | None = None, **kwargs: Any) -> Any:
        return self.request("DELETE", path, **kwargs)

    def post(self, path: str | None = None, body: Any = None, **kwargs: Any) -> Any:
        return self.request("POST", path, body=body, **kwargs)

    def put(self, path: str | None = None, body: Any = None, **kwargs: Any) -> Any:
        return self.request("PUT", path, body=body, **kwargs)

    def patch(self, path: str | None = None, body: Any = None, **kwargs: Any) -> Any:
        return self.request("PATCH", path, body=body, **kwargs)


class AsyncJsonClient(_BaseJsonClient):
    """Asynchronous client."""

    def __init__(
        self,
        base_uri: str | httpx.URL | None = None,
        options: Options | None = None,
        *,
        httpx_client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(base_uri, options)
        self._httpx = httpx_client or httpx.AsyncClient()

    async def __aenter__(self) -> "AsyncJsonClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._httpx.aclose()

    async def request(
        self,
        method: str,
        path: str | None = None,
        *,
        params: Mapping[str, str] | None = None,
        body: Any = None,
        options: Options | None = None,
        response_type: Any = None,
        error_type: Any = ErrorResponse,
    ) -> Any:
        prepared = self._prepare(method, path, params, body, options)
        response = await self._httpx.request(
            prepared.method,
            prepared.url,
            headers=prepared.headers,
            content=prepared.content,
        )
        return self._handle_response(response, response_type, error_type)

    async def get(self, path: str | None = None, **kwargs: Any) -> Any:
        return await self.request("GET", path, **kwargs)

    async def head(self, path: str | None = None, **kwargs: Any) -> Any:
        return await self.request("HEAD", path, **kwargs)

    async def delete(self, path: str | None = None, **kwargs: Any) -> Any:
        return await self.request("DELETE", path, **kwargs)

    async def post(self, path: str | None = None, body: Any = None, **kwargs: Any) -> Any:
        return await self.request("POST", path, body=body, **kwargs)

    async def put(self, path: str | None = None, body: Any = None, **kwargs: Any) -> Any:
        return await self.request("PUT", path, body=body, **kwargs)

    async def patch(self, path: str | None = None, body: Any = None, **kwargs: Any) -> Any:
        return await self.request("PATCH", path, body=body, **kwargs)
