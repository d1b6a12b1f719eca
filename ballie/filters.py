#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""List filter state for the ledger account, voucher and CRM lists."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Optional

from ballie.utils import ApiError, clean_params

VIEW_MODES = ("list", "tree")
DIRECTIONS = ("asc", "desc")


def _check_choice(name: str, value: Optional[str], choices) -> None:
    if value is not None and value not in choices:
        raise ApiError(
            "INVALID_FILTER",
            f"Invalid {name}: {value}",
            {"allowed": list(choices)},
        )


class _Filters:
    """Shared behaviour; subclasses are dataclasses with ``page``/``search``."""

    def to_params(self) -> Dict[str, Any]:
        return clean_params(asdict(self))

    def set_page(self, page: int):
        if page < 1:
            raise ApiError("INVALID_FILTER", f"Page must be >= 1: {page}")
        return replace(self, page=page)

    def with_search(self, text: Optional[str]):
        return replace(self, search=text or None, page=1)

    def update(self, **changes: Any):
        """Apply filter changes; any change other than the page resets to page 1."""
        known = {f.name for f in fields(self)}
        unknown = set(changes) - known
        if unknown:
            raise ApiError("INVALID_FILTER", f"Unknown filters: {', '.join(sorted(unknown))}")
        if "page" not in changes:
            changes["page"] = 1
        return replace(self, **changes)


@dataclass(frozen=True)
class LedgerAccountFilters(_Filters):
    search: Optional[str] = None
    account_type: Optional[str] = None
    account_group_id: Optional[int] = None
    parent_id: Optional[int] = None
    status: Optional[str] = None
    has_balance: Optional[bool] = None
    level: Optional[int] = None
    sort: str = "code"
    direction: str = "asc"
    view_mode: str = "list"
    page: int = 1
    per_page: int = 20

    def __post_init__(self):
        _check_choice("view_mode", self.view_mode, VIEW_MODES)
        _check_choice("direction", self.direction, DIRECTIONS)
        _check_choice("status", self.status, ("all", "active", "inactive"))

    def clear(self) -> "LedgerAccountFilters":
        return LedgerAccountFilters(view_mode=self.view_mode)

    def toggle_view(self) -> "LedgerAccountFilters":
        return replace(self, view_mode="tree" if self.view_mode == "list" else "list")


@dataclass(frozen=True)
class VoucherFilters(_Filters):
    search: Optional[str] = None
    voucher_type_id: Optional[int] = None
    status: Optional[str] = None
    date_from: Optional[str] = None
    date_to: Optional[str] = None
    sort_by: str = "voucher_date"
    sort_direction: str = "desc"
    page: int = 1
    per_page: int = 20

    def __post_init__(self):
        _check_choice("status", self.status, ("draft", "posted"))
        _check_choice("sort_direction", self.sort_direction, DIRECTIONS)

    def clear(self) -> "VoucherFilters":
        return VoucherFilters()

    def active_count(self) -> int:
        return sum(
            1
            for value in (
                self.search,
                self.voucher_type_id,
                self.status,
                self.date_from,
                self.date_to,
            )
            if value
        )


@dataclass(frozen=True)
class PartyFilters(_Filters):
    """Customer/vendor list filters; ``party_type`` maps to customer_type/vendor_type."""

    search: Optional[str] = None
    party_type: Optional[str] = None
    status: Optional[str] = None
    sort: Optional[str] = None
    direction: Optional[str] = None
    page: int = 1
    per_page: int = 20

    def __post_init__(self):
        _check_choice("party_type", self.party_type, ("individual", "business"))
        _check_choice("status", self.status, ("active", "inactive"))
        _check_choice("direction", self.direction, DIRECTIONS)

    def clear(self) -> "PartyFilters":
        return PartyFilters()

    def to_params(self, type_key: str = "customer_type") -> Dict[str, Any]:
        params = asdict(self)
        params[type_key] = params.pop("party_type")
        return clean_params(params)
