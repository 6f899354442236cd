"""
Human-readable rendering of amounts and ledgers.
"""

from decimal import Decimal
from typing import Dict, Optional

from potsweep.ledger import Ledger

CURRENCY_SYMBOLS = {
    "GBP": "£",
    "EUR": "€",
    "USD": "$",
}


def format_currency(amount: int, currency: str = "GBP") -> str:
    """
    Format an amount in minor units, e.g. ``format_currency(-1234, "GBP") == "-£12.34"``.

    Currencies without a known symbol are shown as ``12.34 XYZ``.
    """
    sign = "-" if amount < 0 else ""
    major = Decimal(abs(amount)).scaleb(-2)
    symbol = CURRENCY_SYMBOLS.get(currency.upper())
    if symbol is None:
        return f"{sign}{major:,.2f} {currency.upper()}"
    return f"{sign}{symbol}{major:,.2f}"


def ledger_summary(ledger: Ledger, account_names: Optional[Dict[str, str]] = None) -> str:
    """
    Render a ledger as text: per account a header line, then one line per transaction.

    Accounts are listed in id order; within an account withdrawals come first.
    """
    account_names = account_names or {}
    lines = []
    for account_id, transactions in ledger.sorted_items():
        if transactions.is_empty():
            continue
        name = account_names.get(account_id)
        lines.append(f"{account_id} ({name}):" if name else f"{account_id}:")
        for pot, amount in transactions:
            lines.append(f"{pot.name}: {format_currency(amount, pot.currency)}")
    return "\n".join(lines)
