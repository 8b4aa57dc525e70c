"""Reconcile dependency licenses against a hand-maintained manifest."""

__version__ = "0.1.0"
