"""
potsweep - rebalance money between a Monzo current account and its pots.
"""

__version__ = "0.3.0"
