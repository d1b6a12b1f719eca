#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Amount input helpers shared by the voucher forms."""

from __future__ import annotations

import re
from typing import Any

_NON_AMOUNT = re.compile(r"[^\d.]")


def normalize_amount_input(value: str) -> str:
    """Strip separators and stray characters, keeping a trailing dot while typing."""
    cleaned = _NON_AMOUNT.sub("", (value or "").replace(",", ""))
    if not cleaned:
        return ""
    has_trailing_dot = cleaned.endswith(".")
    parts = cleaned.split(".")
    int_part = parts[0]
    decimal_part = "".join(parts[1:])
    if has_trailing_dot:
        return f"{int_part}.{decimal_part}"
    return f"{int_part}.{decimal_part}" if decimal_part else int_part


def format_amount_input(value: str) -> str:
    """Format a normalised amount with thousand separators for display."""
    normalized = normalize_amount_input(value)
    if not normalized:
        return ""
    has_trailing_dot = normalized.endswith(".")
    int_part, _, decimal_part = normalized.partition(".")
    formatted_int = f"{int(int_part):,}" if int_part else "0"
    if has_trailing_dot:
        return f"{formatted_int}."
    if "." in normalized:
        return f"{formatted_int}.{decimal_part}"
    return formatted_int


def parse_amount(value: Any) -> float:
    """Blank or unparsable input counts as zero."""
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    normalized = normalize_amount_input(str(value))
    if not normalized or normalized == ".":
        return 0.0
    try:
        return float(normalized)
    except ValueError:
        return 0.0
