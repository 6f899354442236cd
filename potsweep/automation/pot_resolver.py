"""
Resolve configured pot names to live pots for one account.
"""

import logging
from typing import List, Sequence

from potsweep.domain import Pot
from potsweep.errors import NoPotGoal, NotFound

logger = logging.getLogger(__name__)


def normalise_pot_name(name: str) -> str:
    """Drop non-ASCII characters (emoji), lowercase and trim whitespace."""
    ascii_only = "".join(c for c in name if c.isascii())
    return ascii_only.lower().strip()


def resolve_pots(
    pots: Sequence[Pot],
    pot_names: Sequence[str],
    account_id: str,
    require_goal: bool = True,
) -> List[Pot]:
    """
    Match each configured pot name to a live pot, keeping the configured order.

    Only pots belonging to ``account_id`` that are not deleted are candidates.
    A matched pot is removed from the pool, so the same pot can never be
    matched twice.

    Args:
        pots: Every pot returned by the API for the account
        pot_names: Configured pot names, in priority order
        account_id: The account the pots must belong to
        require_goal: Fail if any candidate pot has no goal amount

    Returns:
        List[Pot]: One pot per configured name, in configured order

    Raises:
        NoPotGoal: A candidate pot has no goal amount and one is required
        NotFound: A configured name has no remaining match
    """
    candidates = [p for p in pots if p.account_id == account_id and not p.deleted]

    if require_goal:
        for pot in candidates:
            if pot.goal_amount is None:
                raise NoPotGoal(pot.name)

    logger.debug(
        f"[RESOLVER] {len(candidates)} candidate pots for account {account_id}: "
        f"{[p.name for p in candidates]}"
    )

    resolved = []
    for name in pot_names:
        wanted = normalise_pot_name(name)
        index = next(
            (i for i, pot in enumerate(candidates) if normalise_pot_name(pot.name) == wanted),
            None,
        )
        if index is None:
            raise NotFound(name)
        resolved.append(candidates.pop(index))

    return resolved
