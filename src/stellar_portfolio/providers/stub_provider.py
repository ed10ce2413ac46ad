"""Stub ledger and valuation providers for offline/testing use."""

import random
from decimal import Decimal
from typing import Optional

from stellar_portfolio.core.exceptions import ValuationUnavailableError
from stellar_portfolio.domain.models import NATIVE_ASSET_CODE, RawBalance


# Deterministic USD prices keyed by asset code
_STUB_PRICES: dict[str, Decimal] = {
    NATIVE_ASSET_CODE: Decimal("0.1200"),
    "USDC": Decimal("1.0000"),
    "EURC": Decimal("1.0800"),
    "AQUA": Decimal("0.0021"),
    "yXLM": Decimal("0.1195"),
}


class StubValuationResolver:
    """
    Stub resolver with fixed prices for common Stellar assets.

    Unknown assets are not priced.
    """

    def __init__(self, prices: Optional[dict[str, Decimal]] = None):
        self._prices = dict(_STUB_PRICES if prices is None else prices)

    def resolve(self, asset_code: str, asset_issuer: Optional[str], amount: Decimal) -> Decimal:
        """Return amount * fixed price."""
        price = self._prices.get(asset_code)
        if price is None:
            label = f"{asset_code}:{asset_issuer}" if asset_issuer else asset_code
            raise ValuationUnavailableError(label)
        return amount * price


class StubLedgerClient:
    """
    Stub ledger client with deterministic balances.

    Known keys return their configured balances; any other key gets a
    seeded random XLM balance so the app produces snapshots offline.
    """

    def __init__(
        self,
        balances: Optional[dict[str, list[RawBalance]]] = None,
        seed: int = 42,
    ):
        self._balances = dict(balances or {})
        self._seed = seed

    def get_balances(self, public_key: str) -> list[RawBalance]:
        """Return stub balances for the account."""
        if public_key in self._balances:
            return list(self._balances[public_key])
        rng = random.Random(f"{self._seed}:{public_key}")
        amount = Decimal(str(100 + rng.random() * 9900)).quantize(Decimal("0.0000001"))
        return [RawBalance(asset_code=NATIVE_ASSET_CODE, amount=amount)]

    def account_exists(self, public_key: str) -> bool:
        """Stub: every key is treated as funded."""
        return True
