#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Write statements and server exports to disk."""

from __future__ import annotations

from pathlib import Path

import openpyxl

from ballie.models import Statement

STATEMENT_HEADER = ["Date", "Particulars", "Voucher Type", "Voucher No", "Debit", "Credit", "Balance"]


def write_statement_xlsx(statement: Statement, path: str | Path) -> Path:
    """Statement workbook: period header, opening row, transactions, totals."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Statement"
    ws.append(["Statement", statement.party_name])
    ws.append(["Period", f"{statement.start_date} to {statement.end_date}"])
    ws.append([])
    ws.append(STATEMENT_HEADER)
    ws.append(["", "Opening Balance", "", "", "", "", statement.opening_balance])

    computed = statement.running_balances()
    for tx, balance in zip(statement.transactions, computed):
        ws.append(
            [
                tx.date,
                tx.particulars,
                tx.voucher_type or "",
                tx.voucher_number or "",
                tx.debit,
                tx.credit,
                tx.running_balance if tx.running_balance is not None else balance,
            ]
        )

    ws.append(["", "Total", "", "", statement.total_debits, statement.total_credits, ""])
    ws.append(["", "Closing Balance", "", "", "", "", statement.closing_balance])

    wb.save(path)
    wb.close()
    return path


def save_bytes(data: bytes, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path
