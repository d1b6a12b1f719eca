import pytest

from ballie.filters import LedgerAccountFilters, PartyFilters, VoucherFilters
from ballie.utils import ApiError


def test_clear_resets_page_and_search():
    filters = LedgerAccountFilters(search="cash", account_type="assets", page=4, status="active")
    cleared = filters.clear()
    assert cleared.page == 1
    assert cleared.search is None
    assert cleared.account_type is None
    assert cleared.status is None


def test_clear_keeps_view_mode():
    filters = LedgerAccountFilters(search="bank", view_mode="tree", page=3)
    assert filters.clear().view_mode == "tree"


def test_toggle_view_preserves_other_filters():
    filters = LedgerAccountFilters(search="bank", account_type="assets", page=2, has_balance=True)
    toggled = filters.toggle_view()
    assert toggled.view_mode == "tree"
    assert toggled.search == "bank"
    assert toggled.account_type == "assets"
    assert toggled.page == 2
    assert toggled.has_balance is True
    assert toggled.toggle_view() == filters


def test_changing_a_filter_resets_page():
    filters = LedgerAccountFilters(page=5)
    assert filters.update(account_type="income").page == 1
    assert filters.with_search("rent").page == 1
    assert filters.update(page=7).page == 7
    assert filters.set_page(2).page == 2


def test_invalid_filters():
    with pytest.raises(ApiError):
        LedgerAccountFilters(view_mode="grid")
    with pytest.raises(ApiError):
        LedgerAccountFilters().set_page(0)
    with pytest.raises(ApiError) as exc:
        LedgerAccountFilters().update(colour="red")
    assert exc.value.code == "INVALID_FILTER"


def test_ledger_params_drop_unset_values():
    params = LedgerAccountFilters(search="", has_balance=True, level=2).to_params()
    assert "search" not in params
    assert "account_type" not in params
    assert params["has_balance"] == "1"
    assert params["level"] == 2
    assert params["sort"] == "code"
    assert params["page"] == 1


def test_voucher_filters():
    filters = VoucherFilters(search="JV", status="draft", date_from="2025-01-01", page=3)
    assert filters.active_count() == 3
    cleared = filters.clear()
    assert cleared == VoucherFilters()
    assert cleared.active_count() == 0
    assert filters.to_params()["sort_direction"] == "desc"
    with pytest.raises(ApiError):
        VoucherFilters(status="void")


def test_party_filters_rename_type_key():
    filters = PartyFilters(party_type="business", search="acme")
    assert filters.to_params("vendor_type") == {
        "search": "acme",
        "vendor_type": "business",
        "page": 1,
        "per_page": 20,
    }
    assert filters.clear() == PartyFilters()
