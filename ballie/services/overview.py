#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Accounting overview: three independent statistics fetches merged once all resolve."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict

from ballie.client import ApiClient, unwrap
from ballie.utils import to_float, to_int

logger = logging.getLogger(__name__)

PAGE_1 = {"page": 1, "per_page": 1}


def _statistics(client: ApiClient, path: str) -> Dict[str, Any]:
    data = unwrap(client.get(path, PAGE_1)) or {}
    stats = data.get("statistics") if isinstance(data, dict) else None
    return stats or {}


def accounting_overview(client: ApiClient) -> Dict[str, Any]:
    ledger_path = client.tenant_path("/accounting/ledger-accounts")
    bank_path = client.tenant_path("/banking/banks")
    with ThreadPoolExecutor(max_workers=3) as pool:
        ledger = pool.submit(_statistics, client, ledger_path)
        vouchers = pool.submit(_statistics, client, "/accounting/vouchers")
        banks = pool.submit(_statistics, client, bank_path)
        ledger_stats = ledger.result()
        voucher_stats = vouchers.result()
        bank_stats = banks.result()

    logger.debug("Overview statistics fetched")
    return {
        "total_accounts": to_int(ledger_stats.get("total_accounts")),
        "pending_vouchers": to_int(voucher_stats.get("draft_vouchers")),
        "bank_balance": to_float(bank_stats.get("total_balance")),
        "needs_reconciliation": to_int(bank_stats.get("needs_reconciliation")),
    }
