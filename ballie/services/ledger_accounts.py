#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Ledger account (chart of accounts) service."""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from ballie.client import ApiClient, unwrap
from ballie.filters import LedgerAccountFilters
from ballie.models import LedgerAccount, LedgerAccountStatistics, Page, PaginationInfo
from ballie.utils import ApiError, to_float

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "code", "account_type", "account_group_id")
BULK_ACTIONS = ("activate", "deactivate", "delete")
EXPORT_FORMATS = ("excel", "pdf")


def _require_fields(data: Dict[str, Any]) -> None:
    missing = [name for name in REQUIRED_FIELDS if data.get(name) in (None, "")]
    if missing:
        raise ApiError(
            "VALIDATION_ERROR",
            f"Missing fields: {', '.join(missing)}",
            {"errors": {name: [f"The {name} field is required."] for name in missing}},
        )


def _account(payload: Any) -> LedgerAccount:
    data = unwrap(payload)
    if isinstance(data, dict) and isinstance(data.get("ledger_account"), dict):
        data = data["ledger_account"]
    return LedgerAccount.from_dict(data)


class LedgerAccountService:
    def __init__(self, client: ApiClient):
        self.client = client

    @property
    def base_url(self) -> str:
        return self.client.tenant_path("/accounting/ledger-accounts")

    def form_data(self) -> Dict[str, Any]:
        """Account groups, parent accounts and account types for the create form."""
        return unwrap(self.client.get(f"{self.base_url}/create"))

    def create(self, data: Dict[str, Any]) -> LedgerAccount:
        _require_fields(data)
        account = _account(self.client.post(self.base_url, data))
        logger.info("Created ledger account %s (%s)", account.code, account.id)
        return account

    def list(self, filters: Optional[LedgerAccountFilters] = None) -> Page:
        filters = filters or LedgerAccountFilters()
        data = unwrap(self.client.get(self.base_url, filters.to_params())) or {}
        return Page(
            items=[LedgerAccount.from_dict(row) for row in data.get("ledger_accounts") or []],
            pagination=PaginationInfo.from_dict(data.get("pagination")),
            statistics=LedgerAccountStatistics.from_dict(data.get("statistics")),
        )

    def iter_all(self, filters: Optional[LedgerAccountFilters] = None) -> Iterator[LedgerAccount]:
        filters = filters or LedgerAccountFilters()
        while True:
            page = self.list(filters)
            yield from page.items
            if not page.pagination.has_more:
                return
            filters = filters.set_page(page.pagination.current_page + 1)

    def show(self, account_id: int) -> LedgerAccount:
        return _account(self.client.get(f"{self.base_url}/{account_id}"))

    def update(self, account_id: int, data: Dict[str, Any]) -> LedgerAccount:
        _require_fields(data)
        return _account(self.client.put(f"{self.base_url}/{account_id}", data))

    def toggle(self, account_id: int) -> LedgerAccount:
        return _account(self.client.post(f"{self.base_url}/{account_id}/toggle"))

    def delete(self, account_id: int) -> None:
        self.client.delete(f"{self.base_url}/{account_id}")
        logger.info("Deleted ledger account %s", account_id)

    def search(self, query: str) -> List[LedgerAccount]:
        data = unwrap(self.client.get(f"{self.base_url}/search", {"search": query})) or {}
        return [LedgerAccount.from_dict(row) for row in data.get("accounts") or []]

    def balance(self, account_id: int) -> Dict[str, Any]:
        data = unwrap(self.client.get(f"{self.base_url}/{account_id}/balance")) or {}
        return {
            "current_balance": to_float(data.get("current_balance")),
            "formatted_balance": data.get("formatted_balance"),
        }

    def children(self, account_id: int) -> List[LedgerAccount]:
        data = unwrap(self.client.get(f"{self.base_url}/{account_id}/children")) or {}
        return [LedgerAccount.from_dict(row) for row in data.get("children") or []]

    def bulk_action(self, action: str, account_ids: List[int]) -> Dict[str, Any]:
        if action not in BULK_ACTIONS:
            raise ApiError("INVALID_ACTION", f"Unknown bulk action: {action}", {"allowed": list(BULK_ACTIONS)})
        if not account_ids:
            raise ApiError("INVALID_ACTION", "No accounts selected")
        return unwrap(
            self.client.post(
                f"{self.base_url}/bulk-action",
                {"action": action, "account_ids": list(account_ids)},
            )
        )

    def export(self, fmt: str, filters: Optional[LedgerAccountFilters] = None) -> bytes:
        if fmt not in EXPORT_FORMATS:
            raise ApiError("INVALID_FORMAT", f"Unknown export format: {fmt}", {"allowed": list(EXPORT_FORMATS)})
        params = (filters or LedgerAccountFilters()).to_params()
        return self.client.download(f"{self.base_url}/export/{fmt}", params)

    def import_file(self, path: str | Path) -> Dict[str, Any]:
        path = Path(path)
        if not path.exists():
            raise ApiError("FILE_NOT_FOUND", f"File not found: {path}")
        mime = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        result = unwrap(
            self.client.upload(
                f"{self.base_url}/import",
                data={},
                files=[("file", (path.name, path.read_bytes(), mime))],
            )
        )
        logger.info("Imported ledger accounts from %s", path)
        return result
