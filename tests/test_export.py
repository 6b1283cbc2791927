from datetime import date

from financeirox.services.export import EXPORT_COLUMNS, transactions_to_csv
from models import Transaction


def test_empty_export_has_header_only():
    assert transactions_to_csv([]) == ";".join(EXPORT_COLUMNS) + "\n"


def test_expense_row():
    tx = Transaction(
        id="abc",
        user_email="a@example.com",
        type="EXPENSE",
        amount=1500.5,
        occurred_at=date(2026, 10, 1),
        expense_category="Posto",
        pay_method="CASH",
    )

    csv_text = transactions_to_csv([tx])

    assert csv_text.splitlines()[1] == "EXPENSE;2026-10-01;1500.50;;Posto;CASH;;;abc"
