"""
The operations a config file can list, dispatched by variant.
"""

from typing import Optional, Union

from potsweep.domain import State
from potsweep.ledger import Ledger

from .ratio import Ratio
from .sweep import Sweep

Operation = Union[Sweep, Ratio]


def operation_name(op: Operation) -> str:
    match op:
        case Sweep():
            return Sweep.NAME
        case Ratio():
            return Ratio.NAME
    raise TypeError(f"unknown operation: {op!r}")


def operation_account_id(op: Operation) -> Optional[str]:
    """The explicitly configured account id, or None to use the default account."""
    match op:
        case Sweep(account_id=account_id) | Ratio(account_id=account_id):
            return account_id
    raise TypeError(f"unknown operation: {op!r}")


def compute(op: Operation, state: State) -> Ledger:
    """Compute the Ledger an operation wants applied to ``state``."""
    match op:
        case Sweep():
            return op.transactions(state)
        case Ratio():
            return op.transactions(state)
    raise TypeError(f"unknown operation: {op!r}")
