"""Batch snapshot runner: one snapshot per known user, failures isolated."""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable

from stellar_portfolio.core.exceptions import AppError, StoreUnavailableError
from stellar_portfolio.domain.models import PortfolioSnapshot
from stellar_portfolio.domain.views import SnapshotRunResult
from stellar_portfolio.repositories.protocols import UserDirectory

logger = logging.getLogger(__name__)


class SnapshotRunner:
    """
    Drives snapshot creation across all users.

    Each user is processed in its own worker job through create_snapshot,
    which must not share mutable state (e.g. DB sessions) between calls.
    Per-user failures are logged and counted; StoreUnavailableError aborts
    the run and propagates. Scheduled and manual runs use the same entry point.
    """

    def __init__(
        self,
        user_directory: UserDirectory,
        create_snapshot: Callable[[str], PortfolioSnapshot],
        max_workers: int = 4,
    ):
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        self._users = user_directory
        self._create_snapshot = create_snapshot
        self._max_workers = max_workers

    def run_for_all_users(self) -> SnapshotRunResult:
        """Create a snapshot for every user and return success/failure counts."""
        user_ids = self._users.list_user_ids()
        result = SnapshotRunResult()
        if not user_ids:
            logger.info("Snapshot run skipped: no users")
            return result

        logger.info("Starting snapshot run for %d users", len(user_ids))
        workers = min(self._max_workers, len(user_ids))

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="snapshot") as executor:
            futures = {
                executor.submit(self._create_snapshot, user_id): user_id
                for user_id in user_ids
            }
            try:
                for future in as_completed(futures):
                    user_id = futures[future]
                    try:
                        future.result()
                    except StoreUnavailableError:
                        raise
                    except AppError as e:
                        logger.warning("Snapshot failed for user %s: %s", user_id, e.message)
                        result.failed += 1
                        result.failures[user_id] = e.message
                    except Exception as e:
                        logger.exception("Unexpected error creating snapshot for user %s", user_id)
                        result.failed += 1
                        result.failures[user_id] = str(e) or type(e).__name__
                    else:
                        result.success += 1
            except StoreUnavailableError:
                for future in futures:
                    future.cancel()
                logger.error("Snapshot run aborted: store unavailable")
                raise

        logger.info(
            "Snapshot run finished: %d succeeded, %d failed",
            result.success, result.failed,
        )
        return result
