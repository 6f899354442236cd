"""Account selection helpers shared by all operations."""

from typing import List, Optional, Sequence, Tuple

from potsweep.domain import Account, Pot, State
from potsweep.errors import NotFound


def find_current_account(
    accounts: Sequence[Account], account_id: Optional[str] = None
) -> Account:
    """Pick the account an operation works on.

    An explicit ``account_id`` always wins. Without one, the first open retail
    account is used.

    Raises:
        NotFound: No account matches.
    """
    if account_id:
        account = next((a for a in accounts if a.id == account_id), None)
        if account is None:
            raise NotFound(account_id, kind="account")
        return account

    account = next((a for a in accounts if a.is_retail and not a.closed), None)
    if account is None:
        raise NotFound("default retail account", kind="account")
    return account


def account_snapshot(state: State, account: Account) -> Tuple[int, List[Pot]]:
    """Return the live balance and pots fetched for ``account``.

    Raises:
        NotFound: The state holds no balance for the account.
    """
    balance = state.balances.get(account.id)
    if balance is None:
        raise NotFound(account.id, kind="account")
    return balance.balance, state.pots.get(account.id, [])
