from ballie.amounts import format_amount_input, normalize_amount_input, parse_amount


def test_normalize_strips_separators_and_letters():
    assert normalize_amount_input("1,234.50") == "1234.50"
    assert normalize_amount_input("₦ 2,000") == "2000"
    assert normalize_amount_input("") == ""


def test_normalize_keeps_trailing_dot_and_merges_extra_dots():
    assert normalize_amount_input("12.") == "12."
    assert normalize_amount_input("1.2.3") == "1.23"


def test_format_adds_thousand_separators():
    assert format_amount_input("1234567") == "1,234,567"
    assert format_amount_input("1234.5") == "1,234.5"
    assert format_amount_input("1234.") == "1,234."
    assert format_amount_input(".5") == "0.5"


def test_parse_amount():
    assert parse_amount("1,000.25") == 1000.25
    assert parse_amount("") == 0.0
    assert parse_amount(None) == 0.0
    assert parse_amount(".") == 0.0
    assert parse_amount("abc") == 0.0
    assert parse_amount(42) == 42.0
