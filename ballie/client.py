#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Shared HTTP client for the Ballie REST API.

Every service module talks to the API through one ``ApiClient``. The client
adds the bearer token, scopes paths under ``/tenant/<slug>`` and turns
HTTP or transport failures into ``ApiError`` with the server's message.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx

from ballie.config import Settings, clear_session
from ballie.utils import GENERIC_ERROR_MESSAGE, ApiError, clean_params

logger = logging.getLogger(__name__)

FileField = Tuple[str, Tuple[str, bytes, str]]


def unwrap(payload: Any) -> Any:
    """Strip the ``{success, message, data}`` envelope when present."""
    if isinstance(payload, dict) and "data" in payload and "success" in payload:
        return payload["data"]
    return payload


class ApiClient:
    """Thin wrapper over ``httpx.Client`` shared by all services."""

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.settings = settings
        self._http = httpx.Client(
            base_url=settings.base_url,
            headers={"Accept": "application/json"},
            timeout=settings.timeout,
            transport=transport,
        )

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def tenant_path(self, path: str) -> str:
        slug = self.settings.require_tenant()
        return f"/tenant/{slug}{path}"

    def scoped(self, path: str) -> str:
        slug = self.settings.tenant_slug
        if slug and not path.startswith("/tenant/"):
            return f"/tenant/{slug}{path}"
        return path

    def url_for(self, path: str, params: Optional[Dict[str, Any]] = None) -> str:
        return str(self._http.build_request("GET", self.scoped(path), params=clean_params(params)).url)

    def get(self, path: str, params: Optional[Dict[str, Any]] = None, scoped: bool = True) -> Any:
        return self.request("GET", path, params=params, scoped=scoped)

    def post(self, path: str, json: Optional[Dict[str, Any]] = None, scoped: bool = True) -> Any:
        return self.request("POST", path, json=json, scoped=scoped)

    def put(self, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("PUT", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def download(self, path: str, params: Optional[Dict[str, Any]] = None, accept: str = "*/*") -> bytes:
        response = self._send("GET", path, params=params, headers={"Accept": accept})
        return response.content

    def upload(
        self,
        path: str,
        data: Dict[str, str],
        files: Sequence[FileField],
        method: str = "POST",
    ) -> Any:
        response = self._send(method, path, data=data, files=list(files))
        return self._decode(response)

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        scoped: bool = True,
    ) -> Any:
        response = self._send(method, path, params=params, json=json, scoped=scoped)
        return self._decode(response)

    def _send(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, str]] = None,
        files: Optional[List[FileField]] = None,
        headers: Optional[Dict[str, str]] = None,
        scoped: bool = True,
    ) -> httpx.Response:
        url = self.scoped(path) if scoped else path
        req_headers = dict(headers or {})
        if self.settings.token:
            req_headers["Authorization"] = f"Bearer {self.settings.token}"

        try:
            response = self._http.request(
                method,
                url,
                params=clean_params(params),
                json=json,
                data=data,
                files=files,
                headers=req_headers,
            )
        except httpx.TimeoutException as exc:
            logger.warning("%s %s timed out", method, url)
            raise ApiError("NETWORK_ERROR", "Request timed out. Please try again.") from exc
        except httpx.TransportError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise ApiError("NETWORK_ERROR", str(exc) or GENERIC_ERROR_MESSAGE) from exc

        logger.debug("%s %s -> %s", method, url, response.status_code)
        if response.is_error:
            self._raise_for_response(response)
        return response

    def _decode(self, response: httpx.Response) -> Any:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(
                "INVALID_RESPONSE",
                "Server returned a non-JSON response",
                {"content_type": response.headers.get("content-type")},
                status=response.status_code,
            ) from exc

    def _raise_for_response(self, response: httpx.Response) -> None:
        status = response.status_code
        body: Dict[str, Any] = {}
        try:
            parsed = response.json()
            if isinstance(parsed, dict):
                body = parsed
        except ValueError:
            pass

        message = body.get("message") or body.get("error") or GENERIC_ERROR_MESSAGE
        details = None
        if body.get("errors"):
            details = {"errors": body["errors"]}

        if status == 401:
            self._drop_session()
            code = "AUTH_REQUIRED"
        elif status == 403:
            code = "FORBIDDEN"
        elif status == 404:
            code = "NOT_FOUND"
        elif status == 422:
            code = "VALIDATION_ERROR"
        else:
            code = f"HTTP_{status}"

        logger.warning(
            "%s %s failed with %s: %s",
            response.request.method,
            response.request.url.path,
            status,
            message,
        )
        raise ApiError(code, str(message), details, status=status)

    def _drop_session(self) -> None:
        clear_session(self.settings.session_path)
        self.settings.token = None
        self.settings.tenant_slug = None
        self.settings.tenant_id = None
