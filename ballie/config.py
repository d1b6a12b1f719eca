#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Client settings and the on-disk login session.

Settings resolve in this order: explicit values (CLI flags), environment
variables, the session file, then defaults. The session file replaces the
mobile app's key-value storage and holds the bearer token plus the tenant
the user logged into.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from ballie.utils import ApiError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://ballie.co/api/v1"
DEFAULT_TIMEOUT = 30.0
DEFAULT_SESSION_PATH = Path.home() / ".ballie" / "session.json"

SESSION_KEYS = ("auth_token", "user_data", "tenant_slug", "tenant_id")


@dataclass
class Settings:
    base_url: str = DEFAULT_BASE_URL
    token: Optional[str] = None
    tenant_slug: Optional[str] = None
    tenant_id: Optional[int] = None
    timeout: float = DEFAULT_TIMEOUT
    session_path: Path = field(default_factory=lambda: DEFAULT_SESSION_PATH)

    def require_tenant(self) -> str:
        if not self.tenant_slug:
            raise ApiError(
                "TENANT_REQUIRED", "Tenant slug not found. Please login again."
            )
        return self.tenant_slug


def load_session(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        logger.warning("Ignoring unreadable session file %s", path)
        return {}
    return data if isinstance(data, dict) else {}


def save_session(path: Path, session: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    data = {key: session.get(key) for key in SESSION_KEYS if session.get(key) is not None}
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")


def clear_session(path: Path) -> None:
    path.unlink(missing_ok=True)


def load_settings(
    base_url: Optional[str] = None,
    session_path: Optional[str] = None,
    timeout: Optional[float] = None,
    env: Optional[Dict[str, str]] = None,
) -> Settings:
    env = os.environ if env is None else env
    path = Path(session_path or env.get("BALLIE_SESSION") or DEFAULT_SESSION_PATH)
    session = load_session(path)

    resolved_timeout = timeout
    if resolved_timeout is None and env.get("BALLIE_TIMEOUT"):
        try:
            resolved_timeout = float(env["BALLIE_TIMEOUT"])
        except ValueError:
            logger.warning("Invalid BALLIE_TIMEOUT %r", env["BALLIE_TIMEOUT"])

    tenant_id = session.get("tenant_id")
    return Settings(
        base_url=(base_url or env.get("BALLIE_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
        token=env.get("BALLIE_TOKEN") or session.get("auth_token"),
        tenant_slug=env.get("BALLIE_TENANT") or session.get("tenant_slug"),
        tenant_id=int(tenant_id) if tenant_id is not None else None,
        timeout=resolved_timeout if resolved_timeout is not None else DEFAULT_TIMEOUT,
        session_path=path,
    )
