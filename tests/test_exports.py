import openpyxl

from ballie.exports import save_bytes, write_statement_xlsx
from ballie.models import Statement, StatementTransaction


def _statement():
    return Statement(
        party_id=5,
        party_name="Acme Ltd",
        start_date="2025-01-01",
        end_date="2025-01-31",
        opening_balance=100.0,
        total_debits=500.0,
        total_credits=200.0,
        closing_balance=400.0,
        transactions=[
            StatementTransaction("2025-01-03", "Sales invoice", "SI", "SI-0001", debit=500.0),
            StatementTransaction("2025-01-20", "Receipt", "RE", "RV-0004", credit=200.0, running_balance=400.0),
        ],
    )


def test_write_statement_xlsx(tmp_path):
    path = write_statement_xlsx(_statement(), tmp_path / "out" / "acme.xlsx")
    wb = openpyxl.load_workbook(path)
    ws = wb["Statement"]
    rows = [list(row) for row in ws.iter_rows(values_only=True)]
    wb.close()

    assert rows[0][:2] == ["Statement", "Acme Ltd"]
    assert rows[1][1] == "2025-01-01 to 2025-01-31"
    assert rows[3][0] == "Date"
    assert rows[4][1] == "Opening Balance" and rows[4][6] == 100
    assert rows[5][:2] == ["2025-01-03", "Sales invoice"]
    assert rows[5][6] == 600
    assert rows[6][6] == 400
    assert rows[7][4:6] == [500, 200]
    assert rows[8][1] == "Closing Balance" and rows[8][6] == 400


def test_save_bytes(tmp_path):
    path = save_bytes(b"%PDF-1.4", tmp_path / "a" / "b.pdf")
    assert path.read_bytes() == b"%PDF-1.4"
