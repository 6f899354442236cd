"""
Sweep operation - push surplus down an ordered list of pots toward their goals.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from potsweep.domain import State
from potsweep.ledger import Ledger

from .account_utils import account_snapshot, find_current_account
from .allocator import calculate_transactions
from .pot_resolver import resolve_pots

logger = logging.getLogger(__name__)


@dataclass
class Sweep:
    """
    Move through a list of pots, sweeping money above each goal into the pots
    further down the list that are below theirs.

    Every pot of the account must have a goal amount set.
    """

    NAME = "Sweep"

    pots: List[str] = field(default_factory=list)
    account_id: Optional[str] = None
    account_goal: int = 0  # major units; the current account keeps this much

    def name(self) -> str:
        return self.NAME

    def transactions(self, state: State) -> Ledger:
        """
        Build the Ledger for this sweep from a live state.

        Raises:
            NotFound: The account or one of the configured pots does not exist
            NoPotGoal: A pot of the account has no goal amount
        """
        account = find_current_account(state.accounts, self.account_id)
        balance, live_pots = account_snapshot(state, account)

        pots = resolve_pots(live_pots, self.pots, account.id)
        logger.info(f"[SWEEP] Resolved pots for {account.id}: {[p.name for p in pots]}")

        ledger = Ledger()
        for pot, amount in calculate_transactions(balance, self.account_goal * 100, pots):
            ledger.push(account.id, pot, amount)
        return ledger
