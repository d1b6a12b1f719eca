#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Voucher models."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from ballie.utils import ApiError, to_float, to_int

VOUCHER_STATUSES = ("draft", "posted")


def parse_account_id(value: Any, index: Optional[int] = None) -> Optional[int]:
    """Ledger account ids arrive as ints or numeric strings; blank means unset."""
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        details = {"index": index} if index is not None else None
        raise ApiError("INVALID_ENTRY", f"Invalid ledger account id: {value!r}", details) from exc


_ACTION_FLAGS = {
    "edit": "can_be_edited",
    "delete": "can_be_deleted",
    "post": "can_be_posted",
    "unpost": "can_be_unposted",
}
VOUCHER_ACTIONS = tuple(_ACTION_FLAGS)

# status -> actions allowed when the server sends no can_be_* flags
_STATUS_ACTIONS = {
    "draft": {"edit", "delete", "post"},
    "posted": {"unpost"},
}


@dataclass
class VoucherType:
    id: int
    name: str
    code: str
    description: str | None = None
    has_numbering: bool = False
    number_prefix: str | None = None
    number_suffix: str | None = None
    next_number: int | None = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VoucherType":
        return cls(
            id=to_int(data.get("id")),
            name=data.get("name") or "",
            code=data.get("code") or "",
            description=data.get("description"),
            has_numbering=bool(data.get("has_numbering", False)),
            number_prefix=data.get("number_prefix"),
            number_suffix=data.get("number_suffix"),
            next_number=data.get("next_number"),
        )


@dataclass
class LedgerAccountOption:
    id: int
    name: str
    code: str = ""
    display_name: str | None = None
    account_type: str = ""
    account_group_id: int | None = None
    account_group_name: str | None = None
    parent_id: int | None = None
    level: int = 1
    current_balance: float = 0.0

    @property
    def label(self) -> str:
        return self.display_name or f"{self.name} ({self.code})"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LedgerAccountOption":
        return cls(
            id=to_int(data.get("id")),
            name=data.get("name") or "",
            code=data.get("code") or "",
            display_name=data.get("display_name"),
            account_type=data.get("account_type") or "",
            account_group_id=data.get("account_group_id"),
            account_group_name=data.get("account_group_name"),
            parent_id=data.get("parent_id"),
            level=to_int(data.get("level"), 1),
            current_balance=to_float(data.get("current_balance")),
        )


@dataclass
class VoucherEntry:
    ledger_account_id: int | None
    debit_amount: float = 0.0
    credit_amount: float = 0.0
    description: str | None = None
    id: int | None = None
    ledger_account_name: str | None = None
    ledger_account_code: str | None = None
    document: str | None = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VoucherEntry":
        return cls(
            ledger_account_id=parse_account_id(data.get("ledger_account_id")),
            debit_amount=to_float(data.get("debit_amount")),
            credit_amount=to_float(data.get("credit_amount")),
            description=data.get("description"),
            id=data.get("id"),
            ledger_account_name=data.get("ledger_account_name"),
            ledger_account_code=data.get("ledger_account_code"),
            document=data.get("document"),
        )

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "ledger_account_id": self.ledger_account_id,
            "debit_amount": round(self.debit_amount, 2),
            "credit_amount": round(self.credit_amount, 2),
        }
        if self.description:
            payload["description"] = self.description
        return payload


@dataclass
class Voucher:
    id: int | None = None
    voucher_type_id: int | None = None
    voucher_type_name: str | None = None
    voucher_type_code: str | None = None
    voucher_number: str | None = None
    voucher_date: str | None = None
    narration: str | None = None
    reference_number: str | None = None
    total_amount: float = 0.0
    status: str = "draft"
    posted_at: str | None = None
    entries: List[VoucherEntry] = field(default_factory=list)
    flags: Dict[str, bool] = field(default_factory=dict)

    @property
    def total_debits(self) -> float:
        return sum(e.debit_amount for e in self.entries)

    @property
    def total_credits(self) -> float:
        return sum(e.credit_amount for e in self.entries)

    def is_balanced(self, tolerance: float = 0.01) -> bool:
        """An empty voucher is not balanced."""
        return abs(self.total_debits - self.total_credits) < tolerance and self.total_debits > 0

    def can(self, action: str) -> bool:
        if action not in _ACTION_FLAGS:
            raise ApiError("INVALID_ACTION", f"Unknown voucher action: {action}")
        flag = _ACTION_FLAGS[action]
        if flag in self.flags:
            return bool(self.flags[flag])
        return action in _STATUS_ACTIONS.get(self.status, set())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Voucher":
        flags = {
            key: bool(value)
            for key, value in data.items()
            if key.startswith("can_be_") and value is not None
        }
        return cls(
            id=data.get("id"),
            voucher_type_id=data.get("voucher_type_id"),
            voucher_type_name=data.get("voucher_type_name"),
            voucher_type_code=data.get("voucher_type_code"),
            voucher_number=data.get("voucher_number"),
            voucher_date=data.get("voucher_date"),
            narration=data.get("narration"),
            reference_number=data.get("reference_number"),
            total_amount=to_float(data.get("total_amount")),
            status=data.get("status") or "draft",
            posted_at=data.get("posted_at"),
            entries=[VoucherEntry.from_dict(e) for e in data.get("entries") or []],
            flags=flags,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["total_debits"] = round(self.total_debits, 2)
        data["total_credits"] = round(self.total_credits, 2)
        data["is_balanced"] = self.is_balanced()
        return data


@dataclass
class VoucherStatistics:
    total_vouchers: int = 0
    draft_vouchers: int = 0
    posted_vouchers: int = 0
    total_amount: float = 0.0

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "VoucherStatistics":
        data = data or {}
        return cls(
            total_vouchers=to_int(data.get("total_vouchers")),
            draft_vouchers=to_int(data.get("draft_vouchers")),
            posted_vouchers=to_int(data.get("posted_vouchers")),
            total_amount=to_float(data.get("total_amount")),
        )
