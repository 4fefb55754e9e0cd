"""Beancount ledger syntax tree, formatting, inventories, tolerances and validation errors."""

__version__ = "0.1.0"

__all__ = [
    "account",
    "amount",
    "comments",
    "deltas",
    "errors",
    "formatter",
    "inventory",
    "metrics",
    "model",
]