from .auth import add_login_parser, add_logout_parser
from .overview import add_parser as add_overview_parser
from .accounts import add_parser as add_accounts_parser
from .vouchers import add_parser as add_vouchers_parser
from .customers import add_parser as add_customers_parser
from .vendors import add_parser as add_vendors_parser

__all__ = [
    "add_login_parser",
    "add_logout_parser",
    "add_overview_parser",
    "add_accounts_parser",
    "add_vouchers_parser",
    "add_customers_parser",
    "add_vendors_parser",
]
