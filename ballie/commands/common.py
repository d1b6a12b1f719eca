#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Helpers shared by the CLI commands."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any, Dict

from ballie.client import ApiClient
from ballie.config import Settings, load_settings
from ballie.exports import save_bytes
from ballie.utils import ApiError


def settings_from_args(args) -> Settings:
    return load_settings(
        base_url=getattr(args, "base_url", None),
        session_path=getattr(args, "session", None),
        timeout=getattr(args, "timeout", None),
    )


def open_client(args) -> ApiClient:
    return ApiClient(settings_from_args(args))


def parse_ids(values) -> list:
    try:
        return [int(v) for v in values]
    except ValueError as exc:
        raise ApiError("INVALID_ARGUMENT", f"IDs must be integers: {values}") from exc


def month_start() -> str:
    return date.today().replace(day=1).isoformat()


def write_output(data: bytes, output: str | Path) -> Dict[str, Any]:
    path = save_bytes(data, output)
    return {"status": "success", "path": str(path), "bytes": len(data)}
