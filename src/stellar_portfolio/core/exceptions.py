"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class ValuationUnavailableError(AppError):
    """Raised when an asset cannot be priced in USD."""

    def __init__(self, asset: str, reason: str = "no price available"):
        super().__init__(
            f"Valuation unavailable for {asset}: {reason}",
            code="VALUATION_UNAVAILABLE",
        )


class LedgerUnavailableError(AppError):
    """Raised when balances cannot be fetched from the ledger network."""

    def __init__(self, public_key: str, reason: str):
        super().__init__(
            f"Could not fetch balances for {public_key}: {reason}",
            code="LEDGER_UNAVAILABLE",
        )


class NoSnapshotDataError(AppError):
    """Raised when performance is requested before any snapshot exists."""

    def __init__(self, user_id: str):
        super().__init__(
            f"Portfolio performance not yet available for user {user_id}",
            code="NO_SNAPSHOT_DATA",
        )


class DuplicateAccountError(AppError):
    """Raised when a public key is already linked to a user."""

    def __init__(self, public_key: str):
        super().__init__(
            f"Stellar account {public_key} is already linked to a user",
            code="DUPLICATE_ACCOUNT",
        )


class AccountLimitExceededError(AppError):
    """Raised when a user already has the maximum number of active accounts."""

    def __init__(self, limit: int):
        super().__init__(
            f"Maximum number of Stellar accounts ({limit}) reached",
            code="ACCOUNT_LIMIT_EXCEEDED",
        )


class StoreUnavailableError(AppError):
    """Raised when the persistence layer cannot be reached."""

    def __init__(self, reason: str):
        super().__init__(f"Store unavailable: {reason}", code="STORE_UNAVAILABLE")
