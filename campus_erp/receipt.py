"""
campus_erp/receipt.py

Plain-text fee receipts. The UI decides whether to show, download or print
the text; nothing here touches files.
"""

from __future__ import annotations

from datetime import date
from numbers import Real

from campus_erp.roster import StudentRecord

CURRENCY = "₹"


def format_amount(amount: Real) -> str:
    """15000 -> '15000', 99.5 -> '99.50'."""
    if float(amount).is_integer():
        return str(int(amount))
    return f"{float(amount):.2f}"


def format_receipt(record: StudentRecord, today: date, currency: str = CURRENCY) -> str:
    """
    Render the receipt for ``record`` as of ``today``.

    Layout (one field per line):
        Receipt
        ID: <id>
        Name: <name>
        Amount Paid: <currency><amount>
        Date: <YYYY-MM-DD>
    """
    lines = [
        "Receipt",
        f"ID: {record.id}",
        f"Name: {record.name}",
        f"Amount Paid: {currency}{format_amount(record.fees_paid)}",
        f"Date: {today.isoformat()}",
    ]
    return "\n".join(lines)


def receipt_filename(record: StudentRecord, today: date) -> str:
    return f"receipt_{record.id}_{today.isoformat()}.txt"
