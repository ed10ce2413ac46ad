"""Stellar portfolio snapshots and performance tracking."""

__version__ = "0.1.0"
