#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Voucher service: create, list and drive the draft/posted lifecycle."""

from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ballie.client import ApiClient, unwrap
from ballie.filters import VoucherFilters
from ballie.models import (
    LedgerAccountOption,
    Page,
    PaginationInfo,
    Voucher,
    VoucherStatistics,
    VoucherType,
)
from ballie.utils import ApiError, clean_params

logger = logging.getLogger(__name__)

BULK_ACTIONS = ("post", "unpost", "delete")


@dataclass
class VoucherFormData:
    voucher_types: List[VoucherType] = field(default_factory=list)
    ledger_accounts: List[LedgerAccountOption] = field(default_factory=list)
    selected_type: Optional[VoucherType] = None
    defaults: Dict[str, Any] = field(default_factory=dict)
    validation_rules: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VoucherFormData":
        selected = data.get("selected_type")
        return cls(
            voucher_types=[VoucherType.from_dict(t) for t in data.get("voucher_types") or []],
            ledger_accounts=[
                LedgerAccountOption.from_dict(a) for a in data.get("ledger_accounts") or []
            ],
            selected_type=VoucherType.from_dict(selected) if selected else None,
            defaults=data.get("defaults") or {},
            validation_rules=data.get("validation_rules") or {},
        )

    def account(self, account_id: int) -> Optional[LedgerAccountOption]:
        for account in self.ledger_accounts:
            if account.id == account_id:
                return account
        return None

    def type_by_code(self, code: str) -> Optional[VoucherType]:
        for voucher_type in self.voucher_types:
            if voucher_type.code.upper() == code.upper():
                return voucher_type
        return None


def _voucher(payload: Any) -> Voucher:
    data = unwrap(payload)
    if isinstance(data, dict) and isinstance(data.get("voucher"), dict):
        data = data["voucher"]
    return Voucher.from_dict(data or {})


def multipart_fields(
    payload: Mapping[str, Any],
    documents: Mapping[int, str | Path],
) -> Tuple[Dict[str, str], List[Tuple[str, Tuple[str, bytes, str]]]]:
    """Flatten a voucher payload into bracketed form fields plus entry files."""
    data: Dict[str, str] = {}
    for key, value in payload.items():
        if key == "entries" or value is None:
            continue
        data[key] = str(value)
    for index, entry in enumerate(payload.get("entries") or []):
        for key, value in entry.items():
            if value is None or key == "document":
                continue
            data[f"entries[{index}][{key}]"] = str(value)

    files = []
    for index, raw_path in sorted(documents.items()):
        path = Path(raw_path)
        if not path.exists():
            raise ApiError("FILE_NOT_FOUND", f"Attachment not found: {path}", {"index": index})
        mime = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        files.append((f"entries[{index}][document]", (path.name, path.read_bytes(), mime)))
    return data, files


class VoucherService:
    base_url = "/accounting/vouchers"

    def __init__(self, client: ApiClient):
        self.client = client

    def form_data(self, voucher_type: Optional[str] = None) -> VoucherFormData:
        params = {"type": voucher_type} if voucher_type else None
        data = unwrap(self.client.get(f"{self.base_url}/create", params)) or {}
        return VoucherFormData.from_dict(data)

    def create(
        self,
        payload: Dict[str, Any],
        documents: Optional[Mapping[int, str | Path]] = None,
    ) -> Voucher:
        if documents:
            data, files = multipart_fields(payload, documents)
            response = self.client.upload(self.base_url, data, files)
        else:
            response = self.client.post(self.base_url, payload)
        voucher = _voucher(response)
        logger.info("Created voucher %s (%s)", voucher.voucher_number, voucher.status)
        return voucher

    def list(self, filters: Optional[VoucherFilters] = None) -> Page:
        filters = filters or VoucherFilters()
        data = unwrap(self.client.get(self.base_url, filters.to_params())) or {}
        return Page(
            items=[Voucher.from_dict(row) for row in data.get("vouchers") or []],
            pagination=PaginationInfo.from_dict(data.get("pagination")),
            statistics=VoucherStatistics.from_dict(data.get("statistics")),
        )

    def show(self, voucher_id: int) -> Voucher:
        return _voucher(self.client.get(f"{self.base_url}/{voucher_id}"))

    def update(self, voucher_id: int, payload: Dict[str, Any]) -> Voucher:
        return _voucher(self.client.put(f"{self.base_url}/{voucher_id}", payload))

    def delete(self, voucher_id: int) -> None:
        self.client.delete(f"{self.base_url}/{voucher_id}")
        logger.info("Deleted voucher %s", voucher_id)

    def post(self, voucher_id: int) -> Voucher:
        voucher = _voucher(self.client.post(f"{self.base_url}/{voucher_id}/post"))
        logger.info("Posted voucher %s", voucher_id)
        return voucher

    def unpost(self, voucher_id: int) -> Voucher:
        voucher = _voucher(self.client.post(f"{self.base_url}/{voucher_id}/unpost"))
        logger.info("Unposted voucher %s", voucher_id)
        return voucher

    def duplicate(self, voucher_id: int) -> Dict[str, Any]:
        """Form data plus the source voucher, ready to prefill a new draft."""
        data = unwrap(self.client.get(f"{self.base_url}/{voucher_id}/duplicate")) or {}
        return {
            "form_data": VoucherFormData.from_dict(data),
            "voucher": Voucher.from_dict(data.get("voucher") or {}),
        }

    def bulk_action(self, action: str, voucher_ids: List[int]) -> Dict[str, Any]:
        if action not in BULK_ACTIONS:
            raise ApiError("INVALID_ACTION", f"Unknown bulk action: {action}", {"allowed": list(BULK_ACTIONS)})
        if not voucher_ids:
            raise ApiError("INVALID_ACTION", "No vouchers selected")
        return unwrap(
            self.client.post(
                f"{self.base_url}/bulk-action",
                {"action": action, "voucher_ids": list(voucher_ids)},
            )
        )

    def search(
        self,
        q: Optional[str] = None,
        status: Optional[str] = None,
        voucher_type_id: Optional[int] = None,
    ) -> List[Voucher]:
        params = clean_params({"q": q, "status": status, "voucher_type_id": voucher_type_id})
        data = unwrap(self.client.get(f"{self.base_url}/search", params))
        if isinstance(data, dict):
            data = data.get("vouchers") or []
        return [Voucher.from_dict(row) for row in data or []]

    def pdf(self, voucher_id: int) -> bytes:
        return self.client.download(f"{self.base_url}/{voucher_id}/pdf", accept="application/pdf")
