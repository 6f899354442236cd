"""
Plain data types for the live account snapshot an operation is computed against.

Amounts are always integers in minor currency units (pence for GBP).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

RETAIL_ACCOUNT_TYPES = ("uk_retail", "uk_retail_joint")


@dataclass(frozen=True)
class Pot:
    """A Monzo pot, as seen at the time the state was fetched."""

    id: str
    name: str
    account_id: str
    balance: int
    currency: str = "GBP"
    goal_amount: Optional[int] = None
    deleted: bool = False

    @property
    def diff(self) -> int:
        """Distance from the goal; negative means the pot holds a surplus."""
        return self.goal_amount - self.balance

    @classmethod
    def from_api(cls, pot: Any, account_id: Optional[str] = None) -> "Pot":
        """Build a Pot from a monzo_apy pot object."""
        pot_account_id = (
            getattr(pot, "current_account_id", None)
            or getattr(pot, "pot_current_id", None)
            or account_id
        )
        return cls(
            id=pot.id,
            name=pot.name,
            account_id=pot_account_id,
            balance=int(pot.balance),
            currency=getattr(pot, "currency", "GBP"),
            goal_amount=getattr(pot, "goal_amount", None),
            deleted=bool(getattr(pot, "deleted", False)),
        )


@dataclass(frozen=True)
class Account:
    """A Monzo account. Only retail accounts can be picked as the default."""

    id: str
    description: str = ""
    type: str = "uk_retail"
    closed: bool = False

    @property
    def is_retail(self) -> bool:
        return self.type in RETAIL_ACCOUNT_TYPES

    @classmethod
    def from_api(cls, account: Any) -> "Account":
        return cls(
            id=account.id,
            description=getattr(account, "description", "") or "",
            type=getattr(account, "type", "") or "",
            closed=bool(getattr(account, "closed", False)),
        )


@dataclass(frozen=True)
class Balance:
    balance: int
    currency: str = "GBP"

    @classmethod
    def from_api(cls, balance: Any) -> "Balance":
        return cls(
            balance=int(balance.balance),
            currency=getattr(balance, "currency", "GBP"),
        )


@dataclass
class State:
    """
    Live snapshot used to compute one operation.

    ``balances`` and ``pots`` are keyed by account id and only hold the
    accounts that were fetched in detail.
    """

    accounts: List[Account] = field(default_factory=list)
    balances: Dict[str, Balance] = field(default_factory=dict)
    pots: Dict[str, List[Pot]] = field(default_factory=dict)

    def account(self, account_id: str) -> Optional[Account]:
        return next((a for a in self.accounts if a.id == account_id), None)
