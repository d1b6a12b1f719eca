from .account import AccountRef, LedgerAccount, LedgerAccountStatistics
from .pagination import Page, PaginationInfo
from .party import Customer, PartyStatistics, Vendor
from .statement import Statement, StatementLine, StatementTransaction
from .voucher import (
    LedgerAccountOption,
    Voucher,
    VoucherEntry,
    VoucherStatistics,
    VoucherType,
)

__all__ = [
    "AccountRef",
    "Customer",
    "LedgerAccount",
    "LedgerAccountOption",
    "LedgerAccountStatistics",
    "Page",
    "PaginationInfo",
    "PartyStatistics",
    "Statement",
    "StatementLine",
    "StatementTransaction",
    "Vendor",
    "Voucher",
    "VoucherEntry",
    "VoucherStatistics",
    "VoucherType",
]
