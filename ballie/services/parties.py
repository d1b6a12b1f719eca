#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Shared CRM party service behind the customer and vendor services."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, Optional

from ballie.client import ApiClient, unwrap
from ballie.filters import PartyFilters
from ballie.models import Page, PaginationInfo, PartyStatistics, Statement, StatementLine
from ballie.utils import ApiError, to_float

logger = logging.getLogger(__name__)

STATEMENT_FORMATS = ("pdf", "excel")


def check_period(start_date: str, end_date: str) -> None:
    try:
        start = date.fromisoformat(start_date)
        end = date.fromisoformat(end_date)
    except (TypeError, ValueError) as exc:
        raise ApiError(
            "INVALID_DATE",
            "Dates must be YYYY-MM-DD",
            {"start_date": start_date, "end_date": end_date},
        ) from exc
    if start > end:
        raise ApiError(
            "INVALID_DATE",
            "Start date must not be after end date",
            {"start_date": start_date, "end_date": end_date},
        )


class PartyService:
    """Subclasses set ``kind`` (customer/vendor) and ``model``."""

    kind = ""
    model: Any = None

    def __init__(self, client: ApiClient):
        self.client = client

    @property
    def base_url(self) -> str:
        return f"/crm/{self.kind}s"

    @property
    def type_key(self) -> str:
        return f"{self.kind}_type"

    def _party(self, payload: Any):
        data = unwrap(payload)
        if isinstance(data, dict) and isinstance(data.get(self.kind), dict):
            data = data[self.kind]
        return self.model.from_dict(data or {})

    def list(self, filters: Optional[PartyFilters] = None) -> Page:
        filters = filters or PartyFilters()
        payload = self.client.get(self.base_url, filters.to_params(self.type_key)) or {}
        list_data = payload.get("data") or {}
        return Page(
            items=[self.model.from_dict(row) for row in list_data.get("data") or []],
            pagination=PaginationInfo.from_dict(list_data),
            statistics=PartyStatistics.from_dict(payload.get("statistics"), f"{self.kind}s")
            if payload.get("statistics")
            else None,
        )

    def create(self, data: Dict[str, Any]) -> Any:
        if data.get(self.type_key) not in ("individual", "business"):
            raise ApiError(
                "VALIDATION_ERROR",
                f"{self.type_key} must be individual or business",
                {"errors": {self.type_key: ["The selected type is invalid."]}},
            )
        party = self._party(self.client.post(self.base_url, data))
        logger.info("Created %s %s", self.kind, party.id)
        return party

    def show(self, party_id: int) -> Any:
        data = unwrap(self.client.get(f"{self.base_url}/{party_id}")) or {}
        party = self._party(data)
        if isinstance(data, dict) and data.get("outstanding_balance") is not None:
            party.outstanding_balance = to_float(data["outstanding_balance"])
        return party

    def update(self, party_id: int, data: Dict[str, Any]) -> Any:
        return self._party(self.client.put(f"{self.base_url}/{party_id}", data))

    def toggle_status(self, party_id: int) -> Any:
        return self._party(self.client.post(f"{self.base_url}/{party_id}/toggle-status"))

    def statements(self, filters: Optional[PartyFilters] = None) -> Page:
        filters = filters or PartyFilters()
        payload = self.client.get(f"{self.base_url}/statements", filters.to_params(self.type_key)) or {}
        list_data = payload.get("data") or {"data": []}
        stats = payload.get("statistics")
        return Page(
            items=[StatementLine.from_dict(row) for row in list_data.get("data") or []],
            pagination=PaginationInfo.from_dict(list_data),
            statistics={k: to_float(v) for k, v in stats.items()} if stats else None,
        )

    def statement(self, party_id: int, start_date: str, end_date: str) -> Statement:
        check_period(start_date, end_date)
        data = unwrap(
            self.client.get(
                f"{self.base_url}/{party_id}/statement",
                {"start_date": start_date, "end_date": end_date},
            )
        )
        return Statement.from_dict(data or {}, self.kind)

    def export_statement(self, party_id: int, start_date: str, end_date: str, fmt: str = "pdf") -> bytes:
        check_period(start_date, end_date)
        if fmt not in STATEMENT_FORMATS:
            raise ApiError("INVALID_FORMAT", f"Unknown statement format: {fmt}", {"allowed": list(STATEMENT_FORMATS)})
        return self.client.download(
            f"{self.base_url}/{party_id}/statement/{fmt}",
            {"start_date": start_date, "end_date": end_date},
        )

    def statement_url(self, party_id: int, start_date: str, end_date: str, fmt: str = "pdf") -> str:
        """Direct download link; the token travels as ``access_token``."""
        check_period(start_date, end_date)
        if fmt not in STATEMENT_FORMATS:
            raise ApiError("INVALID_FORMAT", f"Unknown statement format: {fmt}", {"allowed": list(STATEMENT_FORMATS)})
        self.client.settings.require_tenant()
        return self.client.url_for(
            f"{self.base_url}/{party_id}/statement/{fmt}",
            {
                "start_date": start_date,
                "end_date": end_date,
                "access_token": self.client.settings.token,
            },
        )
