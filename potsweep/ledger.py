"""
Ledger of computed, not yet executed, pot transactions grouped by account.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple

from potsweep.domain import Pot

logger = logging.getLogger(__name__)


@dataclass
class Transactions:
    """
    Transactions for a single account.

    Both lists hold ``(pot, magnitude)`` pairs with a positive magnitude, in
    the order they were pushed.
    """

    withdrawals: List[Tuple[Pot, int]] = field(default_factory=list)
    deposits: List[Tuple[Pot, int]] = field(default_factory=list)

    def push(self, pot: Pot, amount: int) -> None:
        """Add a signed transaction: negative withdraws from the pot, positive deposits."""
        if amount < 0:
            self.withdrawals.append((pot, -amount))
        elif amount > 0:
            self.deposits.append((pot, amount))
        else:
            logger.debug(f"[LEDGER] Dropping zero transaction for pot {pot.name}")

    def is_empty(self) -> bool:
        return not self.withdrawals and not self.deposits

    def __iter__(self) -> Iterator[Tuple[Pot, int]]:
        """Yield withdrawals as negative amounts, then deposits as positive amounts."""
        for pot, amount in self.withdrawals:
            yield pot, -amount
        for pot, amount in self.deposits:
            yield pot, amount

    def __len__(self) -> int:
        return len(self.withdrawals) + len(self.deposits)


class Ledger:
    """Mapping of account id to its Transactions. Entries are created on first push."""

    def __init__(self):
        self._transactions: Dict[str, Transactions] = {}

    def push(self, account_id: str, pot: Pot, amount: int) -> None:
        if account_id not in self._transactions:
            self._transactions[account_id] = Transactions()
        self._transactions[account_id].push(pot, amount)

    def is_empty(self) -> bool:
        return all(t.is_empty() for t in self._transactions.values())

    def get(self, account_id: str) -> Transactions:
        return self._transactions.get(account_id, Transactions())

    def sorted_items(self) -> List[Tuple[str, Transactions]]:
        """Entries ordered by account id, for display."""
        return sorted(self._transactions.items(), key=lambda item: item[0])

    def __iter__(self) -> Iterator[Tuple[str, Transactions]]:
        return iter(self._transactions.items())

    def __len__(self) -> int:
        return len(self._transactions)

    def __repr__(self) -> str:
        return f"<Ledger accounts={sorted(self._transactions)}>"
