#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Customer/vendor statement models."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

from ballie.utils import to_float, to_int


@dataclass
class StatementLine:
    """One row of the statements overview list."""

    id: int
    display_name: str
    running_balance: float = 0.0
    balance_type: str = "receivable"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StatementLine":
        return cls(
            id=to_int(data.get("id")),
            display_name=data.get("display_name") or "",
            running_balance=to_float(data.get("running_balance")),
            balance_type=data.get("balance_type") or "receivable",
        )


@dataclass
class StatementTransaction:
    date: str
    particulars: str
    voucher_type: str | None = None
    voucher_number: str | None = None
    debit: float = 0.0
    credit: float = 0.0
    running_balance: float | None = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StatementTransaction":
        running = data.get("running_balance")
        return cls(
            date=data.get("date") or "",
            particulars=data.get("particulars") or "",
            voucher_type=data.get("voucher_type"),
            voucher_number=data.get("voucher_number"),
            debit=to_float(data.get("debit")),
            credit=to_float(data.get("credit")),
            running_balance=to_float(running) if running is not None else None,
        )


@dataclass
class Statement:
    party_id: int
    party_name: str
    start_date: str
    end_date: str
    opening_balance: float = 0.0
    total_debits: float = 0.0
    total_credits: float = 0.0
    closing_balance: float = 0.0
    transactions: List[StatementTransaction] = field(default_factory=list)

    def computed_closing(self) -> float:
        return round(self.opening_balance + self.total_debits - self.total_credits, 2)

    def running_balances(self) -> List[float]:
        balance = self.opening_balance
        balances = []
        for tx in self.transactions:
            balance += tx.debit - tx.credit
            balances.append(round(balance, 2))
        return balances

    @classmethod
    def from_dict(cls, data: Dict[str, Any], party_key: str) -> "Statement":
        party = data.get(party_key) or {}
        period = data.get("period") or {}
        return cls(
            party_id=to_int(party.get("id")),
            party_name=party.get("display_name") or party.get("company_name") or "",
            start_date=period.get("start_date") or "",
            end_date=period.get("end_date") or "",
            opening_balance=to_float(data.get("opening_balance")),
            total_debits=to_float(data.get("total_debits")),
            total_credits=to_float(data.get("total_credits")),
            closing_balance=to_float(data.get("closing_balance")),
            transactions=[
                StatementTransaction.from_dict(tx) for tx in data.get("transactions") or []
            ],
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
