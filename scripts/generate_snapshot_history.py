#!/usr/bin/env python3
"""
Generate a demo user with backdated portfolio snapshots.
Populates a data directory so history and 24h/7d/30d performance have data.

Usage: from project root:
  python scripts/generate_snapshot_history.py [DATA_DIR] [START_DATE]
"""

import random
import sys
from datetime import timedelta
from decimal import Decimal
from pathlib import Path

# Add src to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from stellar_portfolio.app_context import AppContext
from stellar_portfolio.core.timezone import now_utc, parse_datetime_utc
from stellar_portfolio.domain.models import RawBalance
from stellar_portfolio.providers import StubLedgerClient, StubValuationResolver
from stellar_portfolio.repositories.sqlalchemy import (
    SqlAlchemySnapshotRepository,
    SqlAlchemyStellarAccountRepository,
    SqlAlchemyUserRepository,
    get_session,
)
from stellar_portfolio.services import SnapshotService

BASE32_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
USDC_ISSUER = "GA5ZSEJYB37JRC5AVCIA5MOP4RHTM335X2KGX3IHOJAPP5RE34K4KZVN"

BASE_PRICES = {
    "XLM": Decimal("0.1200"),
    "USDC": Decimal("1.0000"),
    "AQUA": Decimal("0.0021"),
}


def random_public_key(rng: random.Random) -> str:
    return "G" + "".join(rng.choice(BASE32_ALPHABET) for _ in range(55))


def generate_snapshot_history(data_dir: Path, days: int = 45, start: str = None) -> None:
    """Create one user, two linked accounts and one snapshot per day."""
    rng = random.Random(7)
    start_at = parse_datetime_utc(start) if start else now_utc() - timedelta(days=days)

    main_key = random_public_key(rng)
    savings_key = random_public_key(rng)
    ledger = StubLedgerClient(balances={
        main_key: [
            RawBalance(asset_code="XLM", amount=Decimal("15000")),
            RawBalance(asset_code="USDC", amount=Decimal("750.50"), asset_issuer=USDC_ISSUER),
        ],
        savings_key: [
            RawBalance(asset_code="XLM", amount=Decimal("4200")),
            RawBalance(asset_code="AQUA", amount=Decimal("125000")),
        ],
    })

    context = AppContext(data_dir=data_dir, ledger_client=ledger)
    context.initialize()

    user = context.users.create_user(display_name="Demo User")
    print(f"✓ User created: {user.user_id}")
    context.accounts.link_account(user.user_id, main_key, label="Main")
    context.accounts.link_account(user.user_id, savings_key, label="Savings")
    print("✓ Linked 2 Stellar accounts")

    db = get_session()
    try:
        drift = Decimal("1")
        for day in range(days + 1):
            # Random walk on XLM-denominated assets; USDC stays pegged
            drift *= Decimal(str(round(rng.uniform(0.96, 1.05), 4)))
            prices = dict(BASE_PRICES)
            prices["XLM"] = BASE_PRICES["XLM"] * drift
            prices["AQUA"] = BASE_PRICES["AQUA"] * drift

            taken_at = start_at + timedelta(days=day)
            service = SnapshotService(
                snapshot_repo=SqlAlchemySnapshotRepository(db),
                account_repo=SqlAlchemyStellarAccountRepository(db),
                user_directory=SqlAlchemyUserRepository(db),
                ledger_client=ledger,
                valuation_resolver=StubValuationResolver(prices=prices),
                clock=lambda taken_at=taken_at: taken_at,
            )
            snapshot = service.create_snapshot(user.user_id)
            print(f"  {taken_at:%Y-%m-%d}  ${snapshot.total_value_usd:,.2f}")
    finally:
        db.close()
        context.close()

    print("=" * 60)
    print(f"✓ Generated {days + 1} snapshots in {context.data_dir}")


if __name__ == "__main__":
    target = Path(sys.argv[1]) if len(sys.argv) > 1 else Path.home() / ".stellar-portfolio"
    generate_snapshot_history(target, start=sys.argv[2] if len(sys.argv) > 2 else None)
