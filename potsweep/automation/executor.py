"""
Apply a Ledger against the Monzo API.

For every account all withdrawals are issued together, and only once each of
them has succeeded are the deposits issued. This keeps the money being moved
in the current account before any deposit relies on it. Different accounts are
processed concurrently and independently.

Every call of a phase is awaited before its outcome is known. Nothing is
retried and nothing is rolled back: the first failure is raised to
the caller and the transfers that already went through stay applied.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Iterable, List, Tuple

from potsweep.domain import Pot
from potsweep.errors import ClientError
from potsweep.ledger import Ledger, Transactions

logger = logging.getLogger(__name__)


async def _transfer(
    call: Callable[[str, str, int], Awaitable[Any]],
    verb: str,
    pot: Pot,
    account_id: str,
    amount: int,
) -> Any:
    logger.debug(f"[EXECUTOR] {verb} {amount} for pot {pot.name} ({pot.id})")
    try:
        return await call(pot.id, account_id, amount)
    except ClientError as e:
        logger.error(f"[EXECUTOR] {verb} failed for pot {pot.name} on account {account_id}: {e}")
        raise


async def _join(coros: Iterable[Awaitable[Any]]) -> List[Any]:
    """Await every coroutine to the end, then raise the first failure that happened."""
    errors: List[Exception] = []

    async def run(coro: Awaitable[Any]) -> Any:
        try:
            return await coro
        except Exception as e:
            errors.append(e)

    results = await asyncio.gather(*(run(coro) for coro in coros))
    if errors:
        raise errors[0]
    return results


async def _fan_out(
    call: Callable[[str, str, int], Awaitable[Any]],
    verb: str,
    account_id: str,
    batch: List[Tuple[Pot, int]],
) -> List[Any]:
    return await _join(_transfer(call, verb, pot, account_id, amount) for pot, amount in batch)


async def process_transactions(client: Any, account_id: str, transactions: Transactions) -> None:
    """
    Apply one account's transactions: every withdrawal, then every deposit.

    Args:
        client: AccountClient (or anything with the same async pot methods)
        account_id: The current account the money moves through
        transactions: The account's entry from a Ledger

    Raises:
        ClientError: A withdrawal failed (no deposit was issued) or a deposit failed
    """
    if transactions.withdrawals:
        await _fan_out(client.withdraw_from_pot, "withdraw", account_id, transactions.withdrawals)
        logger.info(
            f"[EXECUTOR] Processed {len(transactions.withdrawals)} withdrawals for account {account_id}"
        )

    if transactions.deposits:
        await _fan_out(client.deposit_into_pot, "deposit", account_id, transactions.deposits)
        logger.info(
            f"[EXECUTOR] Processed {len(transactions.deposits)} deposits for account {account_id}"
        )


async def process_ledger(client: Any, ledger: Ledger) -> None:
    """
    Apply every account of a Ledger concurrently.

    A failure in one account does not stop the others; once every account has
    finished, the failure that happened first is raised.
    """
    await _join(
        process_transactions(client, account_id, transactions)
        for account_id, transactions in ledger
        if not transactions.is_empty()
    )
