#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Voucher form state and client-side balance checks.

The server is the authority on double entry. These checks only mirror it so
a form can refuse to submit an obviously unbalanced voucher. Each voucher
type lays its entries out differently:

* journal style (JE, SI, PI): free debit/credit lines;
* payment (PE) / receipt (RE): user lines on one side, a single bank/cash
  leg on the other carrying their sum;
* contra (CN): one bank/cash account to another;
* credit note (CR) / debit note (DN): one customer/vendor leg against
  revenue/expense lines.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Sequence

from ballie.amounts import parse_amount
from ballie.models.voucher import LedgerAccountOption, VoucherEntry, parse_account_id
from ballie.utils import ApiError

BALANCE_TOLERANCE = 0.01


class VoucherTypeInfo(NamedTuple):
    id: int
    code: str
    name: str
    description: str


VOUCHER_TYPES = (
    VoucherTypeInfo(1, "SI", "Sales Invoice", "Record sales transactions"),
    VoucherTypeInfo(2, "PI", "Purchase Invoice", "Record purchase transactions"),
    VoucherTypeInfo(3, "JE", "Journal Entry", "Manual accounting entries"),
    VoucherTypeInfo(4, "PE", "Payment Entry", "Record payments made"),
    VoucherTypeInfo(5, "RE", "Receipt", "Record receipts received"),
    VoucherTypeInfo(6, "CN", "Contra", "Bank to bank transfers"),
    VoucherTypeInfo(7, "CR", "Credit Note", "Sales returns and adjustments"),
    VoucherTypeInfo(8, "DN", "Debit Note", "Purchase returns and adjustments"),
)
VOUCHER_TYPES_BY_CODE = {vt.code: vt for vt in VOUCHER_TYPES}

JOURNAL_CODES = {"JE", "SI", "PI"}
SAVE_ACTIONS = ("save", "save_and_post")


def voucher_type(code: str) -> VoucherTypeInfo:
    try:
        return VOUCHER_TYPES_BY_CODE[code.upper()]
    except KeyError as exc:
        raise ApiError(
            "INVALID_VOUCHER_TYPE",
            f"Unknown voucher type: {code}",
            {"allowed": sorted(VOUCHER_TYPES_BY_CODE)},
        ) from exc


# ---------------------------------------------------------------------------
# Account classifiers
# ---------------------------------------------------------------------------


def is_bank_cash_account(account: LedgerAccountOption) -> bool:
    account_type = (account.account_type or "").lower()
    name = (account.display_name or account.name or "").lower()
    return "asset" in account_type and ("bank" in name or "cash" in name)


def is_customer_account(account: LedgerAccountOption) -> bool:
    group = (account.account_group_name or "").lower()
    return "receivable" in group or re.search(r"\bar\b", group) is not None


def is_vendor_account(account: LedgerAccountOption) -> bool:
    group = (account.account_group_name or "").lower()
    return "payable" in group or re.search(r"\bap\b", group) is not None


def is_revenue_account(account: LedgerAccountOption) -> bool:
    account_type = (account.account_type or "").lower()
    return "income" in account_type or "revenue" in account_type


def is_expense_account(account: LedgerAccountOption) -> bool:
    account_type = (account.account_type or "").lower()
    return "expense" in account_type or "purchase" in account_type


def check_amount(value: Any, index: Optional[int] = None) -> Any:
    """Numbers pass through untouched; negative or non-finite amounts are refused.

    Strings are left for ``parse_amount``, which drops separators, so a minus
    sign in text input is refused here rather than silently stripped.
    """
    details = {"index": index} if index is not None else None
    if isinstance(value, bool):
        raise ApiError("INVALID_ENTRY", f"Invalid amount: {value!r}", details)
    if isinstance(value, (int, float)):
        if not math.isfinite(value) or value < 0:
            raise ApiError("INVALID_ENTRY", f"Amount must be a non-negative number: {value!r}", details)
        return value
    if isinstance(value, str) and "-" in value:
        raise ApiError("INVALID_ENTRY", f"Amount must be a non-negative number: {value!r}", details)
    return value


# ---------------------------------------------------------------------------
# Form state reducer
# ---------------------------------------------------------------------------


@dataclass
class FormEntry:
    ledger_account_id: Optional[int] = None
    debit_amount: str | float = ""
    credit_amount: str | float = ""
    description: str = ""
    document: Optional[str] = None

    @property
    def debit(self) -> float:
        return parse_amount(self.debit_amount)

    @property
    def credit(self) -> float:
        return parse_amount(self.credit_amount)

    def to_entry(self) -> VoucherEntry:
        return VoucherEntry(
            ledger_account_id=self.ledger_account_id,
            debit_amount=self.debit,
            credit_amount=self.credit,
            description=self.description or None,
            document=self.document,
        )


@dataclass
class FormState:
    voucher_date: str
    voucher_number: str = ""
    narration: str = ""
    reference_number: str = ""
    entries: List[FormEntry] = field(default_factory=list)


HEADER_FIELDS = ("voucher_date", "voucher_number", "narration", "reference_number")
ENTRY_FIELDS = ("ledger_account_id", "debit_amount", "credit_amount", "description", "document")


def initial_state(voucher_date: Optional[str] = None) -> FormState:
    return FormState(
        voucher_date=voucher_date or date.today().isoformat(),
        entries=[FormEntry(), FormEntry()],
    )


def reduce(state: FormState, action: Dict[str, Any]) -> FormState:
    """Return the next form state; the input state is never mutated."""
    kind = action.get("type")
    if kind == "SET_FIELD":
        if action["field"] not in HEADER_FIELDS:
            return state
        return replace(state, **{action["field"]: action["value"]})
    if kind == "ADD_ENTRY":
        return replace(state, entries=[*state.entries, FormEntry()])
    if kind == "UPDATE_ENTRY":
        if action["field"] not in ENTRY_FIELDS:
            return state
        index = action["index"]
        entries = [
            replace(entry, **{action["field"]: action["value"]}) if i == index else entry
            for i, entry in enumerate(state.entries)
        ]
        return replace(state, entries=entries)
    if kind == "REMOVE_ENTRY":
        index = action["index"]
        return replace(state, entries=[e for i, e in enumerate(state.entries) if i != index])
    return state


# ---------------------------------------------------------------------------
# Balance checks
# ---------------------------------------------------------------------------


@dataclass
class BalanceSummary:
    total_debits: float
    total_credits: float
    is_balanced: bool

    @property
    def difference(self) -> float:
        return round(self.total_debits - self.total_credits, 2)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "debit_total": round(self.total_debits, 2),
            "credit_total": round(self.total_credits, 2),
            "difference": self.difference,
            "is_balanced": self.is_balanced,
        }


def calculate_balance(entries: Iterable[VoucherEntry]) -> BalanceSummary:
    """Journal rule: balanced iff |debits - credits| < 0.01 and debits > 0."""
    entries = list(entries)
    total_debits = sum(e.debit_amount for e in entries)
    total_credits = sum(e.credit_amount for e in entries)
    balanced = abs(total_debits - total_credits) < BALANCE_TOLERANCE and total_debits > 0
    return BalanceSummary(total_debits, total_credits, balanced)


def form_balance(state: FormState) -> BalanceSummary:
    return calculate_balance(e.to_entry() for e in state.entries)


def can_save(state: FormState) -> bool:
    summary = form_balance(state)
    return (
        summary.is_balanced
        and len(state.entries) >= 2
        and all(e.ledger_account_id for e in state.entries)
    )


def validate_entries(entries: Sequence[VoucherEntry]) -> None:
    """Each line carries exactly one of debit or credit."""
    for index, entry in enumerate(entries):
        if entry.ledger_account_id is None:
            raise ApiError(
                "INVALID_ENTRY", "Each entry must have a ledger account", {"index": index}
            )
        if entry.debit_amount > 0 and entry.credit_amount > 0:
            raise ApiError(
                "INVALID_ENTRY",
                "Each entry must have either debit OR credit, not both",
                {"index": index},
            )
        if entry.debit_amount == 0 and entry.credit_amount == 0:
            raise ApiError(
                "INVALID_ENTRY",
                "Each entry must have either debit or credit amount",
                {"index": index},
            )


def ensure_balanced(entries: Sequence[VoucherEntry]) -> BalanceSummary:
    summary = calculate_balance(entries)
    if not summary.is_balanced:
        raise ApiError(
            "NOT_BALANCED",
            f"Debits and credits differ: debit {summary.total_debits:.2f}, "
            f"credit {summary.total_credits:.2f}",
            summary.to_dict(),
        )
    return summary


def payment_entries(
    bank_account_id: Optional[int],
    lines: Sequence[FormEntry],
    kind: str = "payment",
) -> List[VoucherEntry]:
    """Lines sit on one side; the bank/cash leg carries their sum on the other.

    Payment lines are debits and the bank is credited. Receipt lines are
    credits and the bank is debited.
    """
    if kind not in ("payment", "receipt"):
        raise ApiError("INVALID_VOUCHER_TYPE", f"Unknown bank voucher kind: {kind}")
    entries: List[VoucherEntry] = []
    for line in lines:
        amount = line.debit if kind == "payment" else line.credit
        entries.append(
            VoucherEntry(
                ledger_account_id=line.ledger_account_id,
                debit_amount=amount if kind == "payment" else 0.0,
                credit_amount=amount if kind == "receipt" else 0.0,
                description=line.description or None,
                document=line.document,
            )
        )
    total = round(sum(e.debit_amount + e.credit_amount for e in entries), 2)
    if bank_account_id is not None and total > 0:
        entries.append(
            VoucherEntry(
                ledger_account_id=bank_account_id,
                debit_amount=total if kind == "receipt" else 0.0,
                credit_amount=total if kind == "payment" else 0.0,
            )
        )
    return entries


def payment_balance(
    bank_account_id: Optional[int],
    lines: Sequence[FormEntry],
    kind: str = "payment",
) -> BalanceSummary:
    entries = payment_entries(bank_account_id, lines, kind)
    summary = calculate_balance(entries)
    if bank_account_id is None:
        summary.is_balanced = False
    return summary


def contra_entries(
    from_account_id: Optional[int],
    to_account_id: Optional[int],
    amount: Any,
    particulars: str = "",
) -> List[VoucherEntry]:
    value = parse_amount(check_amount(amount))
    from_account_id = parse_account_id(from_account_id)
    to_account_id = parse_account_id(to_account_id)
    if from_account_id is None or to_account_id is None:
        raise ApiError("INVALID_ENTRY", "Both from and to accounts are required")
    if from_account_id == to_account_id:
        raise ApiError("INVALID_ENTRY", "From and to accounts must be different")
    if value <= 0:
        raise ApiError("INVALID_ENTRY", "Transfer amount must be greater than zero")
    description = particulars or None
    return [
        VoucherEntry(to_account_id, debit_amount=value, description=description),
        VoucherEntry(from_account_id, credit_amount=value, description=description),
    ]


def note_entries(
    kind: str,
    party_account_id: Optional[int],
    amount: Any,
    lines: Sequence[Dict[str, Any]],
) -> List[VoucherEntry]:
    """Credit note: customer credited, revenue lines debited. Debit note mirrors it."""
    if kind not in ("credit", "debit"):
        raise ApiError("INVALID_VOUCHER_TYPE", f"Unknown note kind: {kind}")
    party_account_id = parse_account_id(party_account_id)
    if party_account_id is None:
        raise ApiError("INVALID_ENTRY", "Party account is required")
    note_amount = parse_amount(check_amount(amount))
    entries: List[VoucherEntry] = []
    for index, line in enumerate(lines):
        value = parse_amount(check_amount(line.get("amount"), index))
        entries.append(
            VoucherEntry(
                ledger_account_id=parse_account_id(line.get("ledger_account_id"), index),
                debit_amount=value if kind == "credit" else 0.0,
                credit_amount=value if kind == "debit" else 0.0,
                description=line.get("description") or None,
            )
        )
    entries.insert(
        0,
        VoucherEntry(
            ledger_account_id=party_account_id,
            debit_amount=note_amount if kind == "debit" else 0.0,
            credit_amount=note_amount if kind == "credit" else 0.0,
        ),
    )
    return entries


def build_entries(code: str, data: Dict[str, Any]) -> List[VoucherEntry]:
    """Lay out entries for a voucher type from a typed form payload."""
    code = voucher_type(code).code
    if code in JOURNAL_CODES:
        return [
            FormEntry(**_entry_fields(e, i)).to_entry()
            for i, e in enumerate(data.get("entries") or [])
        ]
    if code in ("PE", "RE"):
        kind = "payment" if code == "PE" else "receipt"
        side = "debit_amount" if kind == "payment" else "credit_amount"
        lines = [
            FormEntry(**{**_entry_fields(e, i), side: check_amount(e.get("amount", e.get(side, "")), i)})
            for i, e in enumerate(data.get("entries") or [])
        ]
        return payment_entries(parse_account_id(data.get("bank_account_id")), lines, kind)
    if code == "CN":
        return contra_entries(
            data.get("from_account_id"),
            data.get("to_account_id"),
            data.get("amount"),
            data.get("particulars") or "",
        )
    kind = "credit" if code == "CR" else "debit"
    return note_entries(
        kind,
        data.get("party_account_id"),
        data.get("amount"),
        data.get("entries") or [],
    )


def _entry_fields(raw: Dict[str, Any], index: int) -> Dict[str, Any]:
    fields = {k: raw[k] for k in ENTRY_FIELDS if k in raw}
    for key in ("debit_amount", "credit_amount"):
        if fields.get(key) is None:
            fields.pop(key, None)
        else:
            fields[key] = check_amount(fields[key], index)
    fields["ledger_account_id"] = parse_account_id(raw.get("ledger_account_id"), index)
    return fields


def build_payload(
    voucher_type_id: int,
    voucher_date: str,
    entries: Sequence[VoucherEntry],
    voucher_number: str = "",
    narration: str = "",
    reference_number: str = "",
    action: str = "save",
) -> Dict[str, Any]:
    if action not in SAVE_ACTIONS:
        raise ApiError("INVALID_ACTION", f"Unknown save action: {action}")
    payload: Dict[str, Any] = {
        "voucher_type_id": voucher_type_id,
        "voucher_date": voucher_date,
        "entries": [e.to_payload() for e in entries],
        "action": action,
    }
    if voucher_number:
        payload["voucher_number"] = voucher_number
    if narration:
        payload["narration"] = narration
    if reference_number:
        payload["reference_number"] = reference_number
    return payload
