"""
Ratio operation - split the current account's spare cash between pots by weight.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from potsweep.domain import State
from potsweep.ledger import Ledger

from .account_utils import account_snapshot, find_current_account
from .allocator import calculate_ratio_deposits
from .pot_resolver import resolve_pots

logger = logging.getLogger(__name__)


@dataclass
class Ratio:
    """
    Deposit the cash above ``account_goal`` into pots in proportion to their weights.

    ``pots`` maps pot name to an integer weight; goals are not required.
    """

    NAME = "Ratio"

    pots: Dict[str, int] = field(default_factory=dict)
    account_id: Optional[str] = None
    account_goal: int = 0

    def name(self) -> str:
        return self.NAME

    def transactions(self, state: State) -> Ledger:
        account = find_current_account(state.accounts, self.account_id)
        balance, live_pots = account_snapshot(state, account)

        names = list(self.pots)
        pots = resolve_pots(live_pots, names, account.id, require_goal=False)
        spare_cash = balance - self.account_goal * 100
        logger.info(f"[RATIO] balance={balance} spare_cash={spare_cash} weights={self.pots}")

        ledger = Ledger()
        weighted = [(pot, self.pots[name]) for pot, name in zip(pots, names)]
        for pot, amount in calculate_ratio_deposits(spare_cash, weighted):
            ledger.push(account.id, pot, amount)
        return ledger
