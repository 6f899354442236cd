"""
Fetch the live account state an operation is computed against.
"""

import asyncio
import logging
from typing import Any, Optional

from potsweep.automation.account_utils import find_current_account
from potsweep.domain import State

logger = logging.getLogger(__name__)


async def fetch_state(client: Any, account_id: Optional[str] = None) -> State:
    """
    List the accounts, pick the one to work on and fetch its balance and pots together.

    Args:
        client: AccountClient
        account_id: Explicit account id, or None for the default retail account

    Returns:
        State with every account and the chosen account's balance and pots

    Raises:
        NotFound: No account matches
        ClientError: Any API call failed
    """
    accounts = await client.accounts()
    account = find_current_account(accounts, account_id)

    balance, pots = await asyncio.gather(client.balance(account.id), client.pots(account.id))
    logger.info(
        f"[STATE] Received account data for {account.id}: balance={balance.balance}, "
        f"{len(pots)} pots"
    )

    return State(
        accounts=accounts,
        balances={account.id: balance},
        pots={account.id: pots},
    )
