#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Login and workspace (tenant) selection."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ballie.client import ApiClient, unwrap
from ballie.config import clear_session, save_session
from ballie.utils import ApiError

logger = logging.getLogger(__name__)

DEFAULT_DEVICE_NAME = "Ballie CLI"


class AuthService:
    def __init__(self, client: ApiClient):
        self.client = client

    def check_email(self, email: str) -> Dict[str, Any]:
        """Which workspaces an email belongs to."""
        return unwrap(self.client.post("/auth/check-email", {"email": email}, scoped=False))

    def login(self, email: str, password: str, device_name: str = DEFAULT_DEVICE_NAME) -> Dict[str, Any]:
        """Log in; a user in several workspaces gets the list back instead of a token."""
        if not email or not password:
            raise ApiError("VALIDATION_ERROR", "Email and password are required")
        payload = self.client.post(
            "/auth/login",
            {"email": email, "password": password, "device_name": device_name},
            scoped=False,
        )
        return self._finish(payload)

    def select_tenant(
        self,
        email: str,
        password: str,
        tenant_id: int,
        device_name: str = DEFAULT_DEVICE_NAME,
    ) -> Dict[str, Any]:
        payload = self.client.post(
            "/auth/select-tenant",
            {
                "email": email,
                "password": password,
                "tenant_id": tenant_id,
                "device_name": device_name,
            },
            scoped=False,
        )
        return self._finish(payload)

    def logout(self) -> None:
        clear_session(self.client.settings.session_path)
        self.client.settings.token = None
        self.client.settings.tenant_slug = None
        self.client.settings.tenant_id = None
        logger.info("Session cleared")

    def _finish(self, payload: Any) -> Dict[str, Any]:
        data = unwrap(payload) or {}
        token: Optional[str] = data.get("token")
        if not token:
            if data.get("multiple_tenants"):
                return {"multiple_tenants": True, "tenants": data.get("tenants") or []}
            message = payload.get("message") if isinstance(payload, dict) else None
            raise ApiError("AUTH_FAILED", message or "Login failed")

        tenant = data.get("tenant") or {}
        settings = self.client.settings
        settings.token = token
        settings.tenant_slug = tenant.get("slug")
        settings.tenant_id = tenant.get("id")
        save_session(
            settings.session_path,
            {
                "auth_token": token,
                "tenant_slug": settings.tenant_slug,
                "tenant_id": settings.tenant_id,
                "user_data": data.get("user"),
            },
        )
        logger.info("Logged in to tenant %s", settings.tenant_slug)
        return {
            "multiple_tenants": False,
            "tenant": tenant,
            "user": data.get("user"),
        }
