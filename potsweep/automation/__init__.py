"""
Operations that turn a live account state into a Ledger, and the executor that applies it.
"""

from .operations import Operation, compute, operation_account_id, operation_name
from .ratio import Ratio
from .sweep import Sweep

__all__ = [
    "Operation",
    "Ratio",
    "Sweep",
    "compute",
    "operation_account_id",
    "operation_name",
]
