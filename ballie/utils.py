#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Shared helpers for the ballie client and CLI."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from typing import Any, Dict, Optional

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None
    status: Optional[int] = None

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "error": True,
            "code": self.code,
            "message": self.message,
        }
        if self.status is not None:
            payload["status"] = self.status
        if self.details:
            payload["details"] = self.details
        return payload


def clean_params(params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Drop unset query values; booleans are sent as 1/0."""
    cleaned: Dict[str, Any] = {}
    for key, value in (params or {}).items():
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            value = "1" if value else "0"
        cleaned[key] = value
    return cleaned


def to_float(value: Any, default: float = 0.0) -> float:
    if value is None or value == "":
        return default
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).replace(",", ""))
    except ValueError:
        return default


def to_int(value: Any, default: int = 0) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def load_json_input() -> Dict[str, Any]:
    """Load JSON object from stdin."""
    try:
        data = json.load(sys.stdin)
    except json.JSONDecodeError as exc:
        raise ApiError(
            code="INVALID_JSON",
            message=f"Invalid JSON input: {exc}",
        ) from exc

    if not isinstance(data, dict):
        raise ApiError(
            code="INVALID_JSON",
            message="Input must be a JSON object",
        )
    return data


def print_json(data: Any) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2, default=str))


def print_error(err: ApiError) -> None:
    print_json(err.to_dict())


def handle_error(err: ApiError) -> None:
    print_error(err)
    sys.exit(1)
