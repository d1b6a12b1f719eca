import pytest

from ballie.models import Voucher, VoucherEntry
from ballie.utils import ApiError


def test_voucher_is_balanced():
    voucher = Voucher(
        entries=[
            VoucherEntry(ledger_account_id=1, debit_amount=1000),
            VoucherEntry(ledger_account_id=2, credit_amount=1000),
        ]
    )
    assert voucher.is_balanced()


def test_voucher_not_balanced():
    voucher = Voucher(
        entries=[
            VoucherEntry(ledger_account_id=1, debit_amount=1000),
            VoucherEntry(ledger_account_id=2, credit_amount=900),
        ]
    )
    assert not voucher.is_balanced()


def test_voucher_within_tolerance():
    voucher = Voucher(
        entries=[
            VoucherEntry(ledger_account_id=1, debit_amount=100.005),
            VoucherEntry(ledger_account_id=2, credit_amount=100),
        ]
    )
    assert voucher.is_balanced()


def test_voucher_actions_follow_status_without_flags():
    draft = Voucher(status="draft")
    posted = Voucher(status="posted")
    assert draft.can("post") and draft.can("edit") and draft.can("delete")
    assert not draft.can("unpost")
    assert posted.can("unpost")
    assert not posted.can("edit")
    assert not posted.can("delete")


def test_voucher_server_flags_win():
    voucher = Voucher.from_dict(
        {"id": 3, "status": "draft", "can_be_posted": False, "can_be_edited": True}
    )
    assert not voucher.can("post")
    assert voucher.can("edit")
    assert voucher.can("delete")


def test_voucher_unknown_action():
    with pytest.raises(ApiError) as exc:
        Voucher().can("approve")
    assert exc.value.code == "INVALID_ACTION"


def test_voucher_from_dict_parses_amount_strings():
    voucher = Voucher.from_dict(
        {
            "id": 9,
            "voucher_number": "JV-0009",
            "status": "posted",
            "total_amount": "1,250.50",
            "entries": [
                {"ledger_account_id": "4", "debit_amount": "1250.50", "credit_amount": "0"},
                {"ledger_account_id": 7, "debit_amount": 0, "credit_amount": "1,250.50"},
            ],
        }
    )
    assert voucher.total_amount == 1250.5
    assert voucher.entries[0].ledger_account_id == 4
    data = voucher.to_dict()
    assert data["total_debits"] == 1250.5
    assert data["total_credits"] == 1250.5
    assert data["is_balanced"] is True


def test_entry_payload_rounds_and_omits_blank_description():
    entry = VoucherEntry(ledger_account_id=5, debit_amount=10.456)
    assert entry.to_payload() == {
        "ledger_account_id": 5,
        "debit_amount": 10.46,
        "credit_amount": 0.0,
    }


def test_empty_voucher_is_not_balanced():
    voucher = Voucher()
    assert not voucher.is_balanced()
    assert voucher.to_dict()["is_balanced"] is False


def test_entry_with_bad_account_id():
    with pytest.raises(ApiError) as exc:
        VoucherEntry.from_dict({"ledger_account_id": "cash", "debit_amount": 10})
    assert exc.value.code == "INVALID_ENTRY"
