"""
Asyncio facade over the Monzo wrapper.

monzo_apy is a blocking library, so each call runs in a worker thread and
many calls can be in flight at once from a single event loop. Results are
converted to the plain types in ``potsweep.domain``.
"""

import asyncio
import logging
from typing import TYPE_CHECKING, List

from potsweep.domain import Account, Balance, Pot

if TYPE_CHECKING:
    from .client import MonzoClient

logger = logging.getLogger(__name__)


class AccountClient:
    """The account operations the core relies on, as coroutines."""

    def __init__(self, monzo_client: "MonzoClient"):
        self.monzo_client = monzo_client

    async def accounts(self) -> List[Account]:
        accounts = await asyncio.to_thread(self.monzo_client.get_accounts)
        return [Account.from_api(a) for a in accounts or []]

    async def balance(self, account_id: str) -> Balance:
        balance = await asyncio.to_thread(self.monzo_client.get_balance, account_id)
        return Balance.from_api(balance)

    async def pots(self, account_id: str) -> List[Pot]:
        pots = await asyncio.to_thread(self.monzo_client.get_pots, account_id)
        return [Pot.from_api(p, account_id) for p in pots or []]

    async def withdraw_from_pot(self, pot_id: str, account_id: str, amount: int) -> Pot:
        logger.info(f"[MONZO] Withdrawing {amount} from pot {pot_id} into {account_id}")
        pot = await asyncio.to_thread(
            self.monzo_client.withdraw_from_pot, pot_id, account_id, amount
        )
        return Pot.from_api(pot, account_id)

    async def deposit_into_pot(self, pot_id: str, account_id: str, amount: int) -> Pot:
        logger.info(f"[MONZO] Depositing {amount} from {account_id} into pot {pot_id}")
        pot = await asyncio.to_thread(
            self.monzo_client.deposit_to_pot, pot_id, account_id, amount
        )
        return Pot.from_api(pot, account_id)
