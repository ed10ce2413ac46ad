"""Ledger and valuation providers module."""

from stellar_portfolio.providers.ledger_client import LedgerClient, is_valid_public_key
from stellar_portfolio.providers.valuation_resolver import ValuationResolver
from stellar_portfolio.providers.stub_provider import StubLedgerClient, StubValuationResolver

__all__ = [
    "LedgerClient",
    "is_valid_public_key",
    "ValuationResolver",
    "StubLedgerClient",
    "StubValuationResolver",
]
