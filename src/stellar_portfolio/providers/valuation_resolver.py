"""Valuation resolver protocol."""

from decimal import Decimal
from typing import Optional, Protocol


class ValuationResolver(Protocol):
    """
    Protocol for pricing ledger assets in USD.

    Rate sourcing lives behind this boundary.
    """

    def resolve(self, asset_code: str, asset_issuer: Optional[str], amount: Decimal) -> Decimal:
        """
        Return the USD value of amount units of the asset.

        Raises ValuationUnavailableError when the asset cannot be priced.
        """
        ...
