"""
Waterfall allocation of spare cash across an ordered list of pots.

All arithmetic is done on integer minor units.
"""

import logging
from typing import List, Sequence, Tuple

from potsweep.domain import Pot

logger = logging.getLogger(__name__)

Transaction = Tuple[Pot, int]


def split_withdrawals(pots: Sequence[Pot]) -> Tuple[List[Transaction], List[Transaction]]:
    """
    Partition pots by their distance from goal, keeping the original order.

    Returns:
        (withdrawals, remainder): pots over their goal with a negative diff,
        and pots under their goal with a positive diff. Pots exactly on goal
        appear in neither.
    """
    withdrawals: List[Transaction] = []
    remainder: List[Transaction] = []
    for pot in pots:
        diff = pot.diff
        if diff < 0:
            withdrawals.append((pot, diff))
        elif diff > 0:
            remainder.append((pot, diff))
    return withdrawals, remainder


def calculate_transactions(
    current_account_balance: int,
    current_account_goal: int,
    pots: Sequence[Pot],
) -> List[Transaction]:
    """
    Compute the signed transactions that move every pot toward its goal.

    Surplus in pots above goal is withdrawn first. The cash left over after
    the current account goal and those withdrawals is then handed down the
    list of pots below goal, each capped at its own need, until it runs out.

    A negative starting spare cash is allowed and simply results in no deposits.

    Args:
        current_account_balance: Current account balance in minor units
        current_account_goal: Amount to leave in the current account, in minor units
        pots: Resolved pots, in priority order

    Returns:
        List of (pot, amount): withdrawals (negative) then deposits (positive)
    """
    withdrawals, remainder = split_withdrawals(pots)

    total_withdrawals = sum(-diff for _pot, diff in withdrawals)
    spare_cash = current_account_balance - current_account_goal - total_withdrawals

    logger.info(
        f"[SWEEP] balance={current_account_balance} goal={current_account_goal} "
        f"withdrawals={total_withdrawals} spare_cash={spare_cash}"
    )

    deposits: List[Transaction] = []
    for pot, diff in remainder:
        if spare_cash <= 0:
            break
        deposit = min(spare_cash, diff)
        spare_cash -= deposit
        deposits.append((pot, deposit))

    return withdrawals + deposits


def calculate_ratio_deposits(
    spare_cash: int, weighted_pots: Sequence[Tuple[Pot, int]]
) -> List[Transaction]:
    """
    Share spare cash between pots in proportion to their weights, rounding down.

    Nothing is deposited when there is no spare cash.
    """
    if spare_cash <= 0:
        return []

    denominator = sum(weight for _pot, weight in weighted_pots)
    return [(pot, weight * spare_cash // denominator) for pot, weight in weighted_pots]
