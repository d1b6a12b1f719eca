#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Ledger account models."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from ballie.utils import to_float, to_int

ACCOUNT_TYPES = ("assets", "liabilities", "equity", "income", "expenses", "other")


@dataclass
class AccountRef:
    id: int
    name: str
    code: str | None = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["AccountRef"]:
        if not data:
            return None
        return cls(id=to_int(data.get("id")), name=data.get("name") or "", code=data.get("code"))


@dataclass
class LedgerAccount:
    id: int
    name: str
    code: str
    account_type: str
    account_group_id: int | None = None
    account_group: AccountRef | None = None
    parent_id: int | None = None
    parent: AccountRef | None = None
    balance: float = 0.0
    formatted_balance: str | None = None
    description: str | None = None
    is_active: bool = True
    has_children: bool = False
    children_count: int = 0
    level: int = 1
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LedgerAccount":
        return cls(
            id=to_int(data.get("id")),
            name=data.get("name") or "",
            code=data.get("code") or "",
            account_type=data.get("account_type") or "other",
            account_group_id=data.get("account_group_id"),
            account_group=AccountRef.from_dict(data.get("account_group")),
            parent_id=data.get("parent_id"),
            parent=AccountRef.from_dict(data.get("parent")),
            balance=to_float(data.get("balance", data.get("current_balance"))),
            formatted_balance=data.get("formatted_balance"),
            description=data.get("description"),
            is_active=bool(data.get("is_active", True)),
            has_children=bool(data.get("has_children", False)),
            children_count=to_int(data.get("children_count")),
            level=to_int(data.get("level"), 1),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class LedgerAccountStatistics:
    total_accounts: int = 0
    active_accounts: int = 0
    with_balance: int = 0
    parent_accounts: int = 0

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "LedgerAccountStatistics":
        data = data or {}
        return cls(
            total_accounts=to_int(data.get("total_accounts")),
            active_accounts=to_int(data.get("active_accounts")),
            with_balance=to_int(data.get("with_balance")),
            parent_accounts=to_int(data.get("parent_accounts")),
        )
