"""
Run the configured operations against live accounts.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Sequence

from potsweep.automation import Operation, compute, operation_account_id, operation_name
from potsweep.automation.account_utils import find_current_account
from potsweep.automation.executor import process_ledger
from potsweep.formatting import ledger_summary
from potsweep.ledger import Ledger
from potsweep.services.state_service import fetch_state

logger = logging.getLogger(__name__)


@dataclass
class OperationResult:
    name: str
    account_id: str
    ledger: Ledger
    executed: bool = False


async def run_operation(
    client: Any,
    op: Operation,
    dry_run: bool = False,
    out: Callable[[str], None] = print,
) -> OperationResult:
    """
    Fetch fresh state, compute the operation's ledger, show it and apply it.

    Args:
        client: AccountClient
        op: The operation to run
        dry_run: Compute and show the ledger without applying it
        out: Where the human-readable progress goes

    Raises:
        PotSweepError: Resolution failed (nothing was applied) or an API call failed
    """
    name = operation_name(op)
    state = await fetch_state(client, operation_account_id(op))
    account = find_current_account(state.accounts, operation_account_id(op))

    out(f"Running {name}, account: {account.id}")
    ledger = compute(op, state)
    result = OperationResult(name=name, account_id=account.id, ledger=ledger)

    if ledger.is_empty():
        out("nothing to do ...")
        return result

    out(ledger_summary(ledger, {account.id: account.description}))
    if dry_run:
        logger.info(f"[SWEEP] Dry run, not applying {name} for {account.id}")
        return result

    await process_ledger(client, ledger)
    result.executed = True
    logger.info(f"[SWEEP] {name} applied for account {account.id}")
    return result


async def run_operations(
    client: Any,
    operations: Sequence[Operation],
    dry_run: bool = False,
    out: Callable[[str], None] = print,
) -> List[OperationResult]:
    """Run operations one after another, in file order, stopping at the first error."""
    results = []
    for op in operations:
        results.append(await run_operation(client, op, dry_run=dry_run, out=out))
    return results
