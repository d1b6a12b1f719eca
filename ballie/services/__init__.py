from .auth import AuthService
from .customers import CustomerService
from .ledger_accounts import LedgerAccountService
from .overview import accounting_overview
from .vendors import VendorService
from .vouchers import VoucherFormData, VoucherService

__all__ = [
    "AuthService",
    "CustomerService",
    "LedgerAccountService",
    "VendorService",
    "VoucherFormData",
    "VoucherService",
    "accounting_overview",
]
