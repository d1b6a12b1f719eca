#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Customer and vendor models."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

from ballie.models.account import AccountRef
from ballie.utils import to_float, to_int


@dataclass
class _Party:
    id: int
    party_type: str = "individual"
    company_name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    display_name: str | None = None
    email: str | None = None
    phone: str | None = None
    mobile: str | None = None
    status: str = "active"
    outstanding_balance: float = 0.0
    ledger_account: AccountRef | None = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str:
        if self.display_name:
            return self.display_name
        if self.company_name:
            return self.company_name
        return " ".join(p for p in (self.first_name, self.last_name) if p).strip()

    @classmethod
    def _from_dict(cls, data: Dict[str, Any], type_key: str):
        known = {
            "id",
            type_key,
            "company_name",
            "first_name",
            "last_name",
            "display_name",
            "email",
            "phone",
            "mobile",
            "status",
            "outstanding_balance",
            "ledger_account",
        }
        return cls(
            id=to_int(data.get("id")),
            party_type=data.get(type_key) or "individual",
            company_name=data.get("company_name"),
            first_name=data.get("first_name"),
            last_name=data.get("last_name"),
            display_name=data.get("display_name"),
            email=data.get("email"),
            phone=data.get("phone"),
            mobile=data.get("mobile"),
            status=data.get("status") or "active",
            outstanding_balance=to_float(data.get("outstanding_balance")),
            ledger_account=AccountRef.from_dict(data.get("ledger_account")),
            extra={k: v for k, v in data.items() if k not in known},
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["name"] = self.name
        return data


@dataclass
class Customer(_Party):
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Customer":
        return cls._from_dict(data, "customer_type")


@dataclass
class Vendor(_Party):
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Vendor":
        return cls._from_dict(data, "vendor_type")


@dataclass
class PartyStatistics:
    total: int = 0
    active: int = 0
    inactive: int = 0
    individual: int = 0
    business: int = 0

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]], noun: str) -> "PartyStatistics":
        """``noun`` is ``customers`` or ``vendors``, matching the API keys."""
        data = data or {}
        return cls(
            total=to_int(data.get(f"total_{noun}")),
            active=to_int(data.get(f"active_{noun}")),
            inactive=to_int(data.get(f"inactive_{noun}")),
            individual=to_int(data.get(f"individual_{noun}")),
            business=to_int(data.get(f"business_{noun}")),
        )
