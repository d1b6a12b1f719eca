import json

import httpx
import pytest

from ballie.filters import LedgerAccountFilters, PartyFilters, VoucherFilters
from ballie.services import (
    AuthService,
    CustomerService,
    LedgerAccountService,
    VendorService,
    VoucherService,
)
from ballie.services.vouchers import multipart_fields
from ballie.utils import ApiError

PREFIX = "/api/v1/tenant/acme"
LEDGER = f"{PREFIX}/accounting/ledger-accounts"
VOUCHERS = f"{PREFIX}/accounting/vouchers"


def _ok(data):
    return 200, {"success": True, "data": data}


def test_ledger_account_list_and_paging(make_client):
    pages = {
        "1": {"ledger_accounts": [{"id": 1, "code": "1000", "name": "Cash", "account_type": "assets"}],
              "pagination": {"current_page": 1, "last_page": 2, "per_page": 1, "total": 2},
              "statistics": {"total_accounts": 2, "active_accounts": 2}},
        "2": {"ledger_accounts": [{"id": 2, "code": "2000", "name": "Loan", "account_type": "liabilities",
                                   "current_balance": "1,500.00"}],
              "pagination": {"current_page": 2, "last_page": 2, "per_page": 1, "total": 2}},
    }

    def handler(request):
        return httpx.Response(200, json={"success": True, "data": pages[request.url.params["page"]]})

    client, recorder = make_client({("GET", LEDGER): handler})
    service = LedgerAccountService(client)

    page = service.list(LedgerAccountFilters(search="c", per_page=1))
    assert page.items[0].name == "Cash"
    assert page.pagination.has_more
    assert page.statistics.total_accounts == 2
    assert recorder.requests[0].url.params["search"] == "c"

    accounts = list(service.iter_all(LedgerAccountFilters(per_page=1)))
    assert [a.code for a in accounts] == ["1000", "2000"]
    assert accounts[1].balance == 1500.0


def test_ledger_account_create_requires_fields(make_client):
    client, recorder = make_client({})
    with pytest.raises(ApiError) as exc:
        LedgerAccountService(client).create({"name": "Cash"})
    assert exc.value.code == "VALIDATION_ERROR"
    assert set(exc.value.details["errors"]) == {"code", "account_type", "account_group_id"}
    assert recorder.requests == []


def test_ledger_account_actions(make_client):
    account = {"id": 7, "code": "1100", "name": "Bank", "account_type": "assets", "is_active": False}
    client, recorder = make_client(
        {
            ("POST", f"{LEDGER}/7/toggle"): _ok({"ledger_account": account}),
            ("GET", f"{LEDGER}/7/balance"): _ok({"current_balance": "2500.5", "formatted_balance": "₦2,500.50"}),
            ("GET", f"{LEDGER}/search"): _ok({"accounts": [account]}),
            ("POST", f"{LEDGER}/bulk-action"): _ok({"affected": 2}),
            ("GET", f"{LEDGER}/export/excel"): (200, b"PK\x03\x04"),
        }
    )
    service = LedgerAccountService(client)
    assert service.toggle(7).is_active is False
    assert service.balance(7)["current_balance"] == 2500.5
    assert service.search("ban")[0].id == 7
    assert service.bulk_action("deactivate", [1, 2]) == {"affected": 2}
    assert json.loads(recorder.requests[-1].content) == {"action": "deactivate", "account_ids": [1, 2]}
    assert service.export("excel").startswith(b"PK")

    with pytest.raises(ApiError):
        service.bulk_action("archive", [1])
    with pytest.raises(ApiError):
        service.bulk_action("delete", [])
    with pytest.raises(ApiError):
        service.export("csv")


def test_ledger_accounts_need_a_tenant(make_client, settings):
    settings.tenant_slug = None
    client, _ = make_client({})
    with pytest.raises(ApiError) as exc:
        LedgerAccountService(client).list()
    assert exc.value.code == "TENANT_REQUIRED"


def test_multipart_fields_flatten_entries(tmp_path):
    receipt = tmp_path / "receipt.pdf"
    receipt.write_bytes(b"%PDF")
    payload = {
        "voucher_type_id": 4,
        "voucher_date": "2025-01-15",
        "narration": None,
        "entries": [
            {"ledger_account_id": 3, "debit_amount": 80.0, "credit_amount": 0.0},
            {"ledger_account_id": 9, "debit_amount": 0.0, "credit_amount": 80.0},
        ],
    }
    data, files = multipart_fields(payload, {0: receipt})
    assert data["voucher_type_id"] == "4"
    assert "narration" not in data
    assert data["entries[1][ledger_account_id]"] == "9"
    assert data["entries[0][debit_amount]"] == "80.0"
    assert files == [("entries[0][document]", ("receipt.pdf", b"%PDF", "application/pdf"))]

    with pytest.raises(ApiError) as exc:
        multipart_fields(payload, {1: tmp_path / "missing.png"})
    assert exc.value.code == "FILE_NOT_FOUND"


def test_voucher_create_with_attachment_is_multipart(make_client, tmp_path):
    receipt = tmp_path / "receipt.pdf"
    receipt.write_bytes(b"%PDF")
    created = {"voucher": {"id": 11, "voucher_number": "PV-0011", "status": "draft"}}
    client, recorder = make_client({("POST", VOUCHERS): _ok(created)})
    payload = {
        "voucher_type_id": 4,
        "voucher_date": "2025-01-15",
        "action": "save",
        "entries": [{"ledger_account_id": 3, "debit_amount": 80.0, "credit_amount": 0.0}],
    }
    voucher = VoucherService(client).create(payload, {0: receipt})
    assert voucher.id == 11
    request = recorder.requests[0]
    assert request.headers["content-type"].startswith("multipart/form-data")
    assert b'name="entries[0][document]"; filename="receipt.pdf"' in request.content


def test_voucher_list_and_lifecycle(make_client):
    client, recorder = make_client(
        {
            ("GET", VOUCHERS): _ok(
                {
                    "vouchers": [{"id": 1, "status": "draft"}],
                    "pagination": {"current_page": 1, "last_page": 1, "total": 1},
                    "statistics": {"total_vouchers": 5, "draft_vouchers": 2, "posted_vouchers": 3},
                }
            ),
            ("POST", f"{VOUCHERS}/1/post"): _ok({"voucher": {"id": 1, "status": "posted"}}),
            ("POST", f"{VOUCHERS}/1/unpost"): _ok({"voucher": {"id": 1, "status": "draft"}}),
            ("GET", f"{VOUCHERS}/1/duplicate"): _ok(
                {"voucher_types": [{"id": 3, "name": "Journal", "code": "JV"}],
                 "voucher": {"id": 1, "narration": "Rent", "entries": []}}
            ),
        }
    )
    service = VoucherService(client)
    page = service.list(VoucherFilters(status="draft"))
    assert page.statistics.draft_vouchers == 2
    assert recorder.requests[0].url.params["status"] == "draft"
    assert service.post(1).status == "posted"
    assert service.unpost(1).status == "draft"
    duplicate = service.duplicate(1)
    assert duplicate["voucher"].narration == "Rent"
    assert duplicate["form_data"].type_by_code("jv").id == 3


def test_party_list_unwraps_nested_page(make_client):
    body = {
        "success": True,
        "data": {
            "current_page": 1,
            "last_page": 3,
            "per_page": 20,
            "total": 41,
            "data": [{"id": 5, "customer_type": "business", "company_name": "Acme Ltd"}],
        },
        "statistics": {"total_customers": 41, "active_customers": 40, "business_customers": 12},
    }
    client, recorder = make_client({("GET", f"{PREFIX}/crm/customers"): (200, body)})
    page = CustomerService(client).list(PartyFilters(party_type="business"))
    assert page.items[0].name == "Acme Ltd"
    assert page.items[0].party_type == "business"
    assert page.pagination.last_page == 3
    assert page.statistics.active == 40
    assert recorder.requests[0].url.params["customer_type"] == "business"


def test_vendor_show_applies_outstanding_balance(make_client):
    client, _ = make_client(
        {
            ("GET", f"{PREFIX}/crm/vendors/8"): _ok(
                {"vendor": {"id": 8, "vendor_type": "individual", "first_name": "Ada", "last_name": "Obi"},
                 "outstanding_balance": "12,000.00"}
            )
        }
    )
    vendor = VendorService(client).show(8)
    assert vendor.name == "Ada Obi"
    assert vendor.outstanding_balance == 12000.0


def test_party_create_requires_type(make_client):
    client, _ = make_client({})
    with pytest.raises(ApiError) as exc:
        VendorService(client).create({"first_name": "Ada"})
    assert exc.value.details == {"errors": {"vendor_type": ["The selected type is invalid."]}}


def test_statement_and_links(make_client):
    statement = {
        "customer": {"id": 5, "display_name": "Acme Ltd"},
        "period": {"start_date": "2025-01-01", "end_date": "2025-01-31"},
        "opening_balance": 100,
        "total_debits": 500,
        "total_credits": 200,
        "closing_balance": 400,
        "transactions": [
            {"date": "2025-01-03", "particulars": "Invoice", "debit": 500, "credit": 0},
            {"date": "2025-01-20", "particulars": "Receipt", "debit": 0, "credit": 200},
        ],
    }
    client, recorder = make_client({("GET", f"{PREFIX}/crm/customers/5/statement"): _ok(statement)})
    service = CustomerService(client)
    result = service.statement(5, "2025-01-01", "2025-01-31")
    assert result.party_name == "Acme Ltd"
    assert result.computed_closing() == result.closing_balance == 400
    assert result.running_balances() == [600, 400]
    assert recorder.requests[0].url.params["end_date"] == "2025-01-31"

    url = service.statement_url(5, "2025-01-01", "2025-01-31", "excel")
    assert url.startswith("http://api.test/api/v1/tenant/acme/crm/customers/5/statement/excel?")
    assert "access_token=tok-123" in url

    with pytest.raises(ApiError) as exc:
        service.statement(5, "2025-02-01", "2025-01-01")
    assert exc.value.code == "INVALID_DATE"
    with pytest.raises(ApiError):
        service.export_statement(5, "2025-01-01", "2025-01-31", "csv")


def test_login_single_tenant_saves_session(make_client, settings):
    settings.token = None
    settings.tenant_slug = None
    login = {
        "user": {"id": 1, "name": "Ada"},
        "token": "new-token",
        "tenant": {"id": 2, "slug": "beta", "name": "Beta Ltd"},
        "multiple_tenants": False,
    }
    client, recorder = make_client({("POST", "/api/v1/auth/login"): _ok(login)})
    result = AuthService(client).login("ada@example.com", "secret")
    assert result["tenant"]["slug"] == "beta"
    assert settings.token == "new-token"
    assert settings.tenant_slug == "beta"
    saved = json.loads(settings.session_path.read_text())
    assert saved["auth_token"] == "new-token"
    assert saved["tenant_id"] == 2
    assert json.loads(recorder.requests[0].content)["device_name"] == "Ballie CLI"

    AuthService(client).logout()
    assert not settings.session_path.exists()
    assert settings.token is None


def test_login_with_several_tenants_returns_choices(make_client, settings):
    tenants = [{"id": 1, "name": "Acme"}, {"id": 2, "name": "Beta"}]
    client, _ = make_client(
        {("POST", "/api/v1/auth/login"): _ok({"multiple_tenants": True, "tenants": tenants})}
    )
    result = AuthService(client).login("ada@example.com", "secret")
    assert result == {"multiple_tenants": True, "tenants": tenants}
    assert not settings.session_path.exists()


def test_ledger_account_export_sends_filters(make_client):
    client, recorder = make_client({("GET", f"{LEDGER}/export/pdf"): (200, b"%PDF")})
    data = LedgerAccountService(client).export(
        "pdf", LedgerAccountFilters(account_type="assets", status="active")
    )
    assert data == b"%PDF"
    params = recorder.requests[0].url.params
    assert params["account_type"] == "assets"
    assert params["status"] == "active"
