"""Custom exception hierarchy for chit-fund."""


class ChitFundError(Exception):
    """Base exception for all chit-fund errors."""


class LoanValidationError(ChitFundError):
    """Raised when a loan request field fails validation.

    ``field`` names the offending input so callers can surface the
    message next to the right form control.
    """

    field: str | None = None

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        if field is not None:
            self.field = field


class InvalidAmountError(LoanValidationError):
    """Raised when a principal is non-positive, non-finite or unparsable."""

    field = "total_amount"


class InvalidTermError(LoanValidationError):
    """Raised when a term is non-positive, non-integer or out of range."""

    field = "term_months"


class InvalidDateError(LoanValidationError):
    """Raised when an issue date cannot be parsed."""

    field = "issue_date"


class EntityNotFoundError(ChitFundError):
    """Raised when a referenced entity does not exist."""


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a foreign key reference is violated."""


class InvalidMemberError(EntityNotFoundError):
    """Raised when a member reference cannot be resolved to an eligible member."""

    field = "member_id"


class InstallmentNotFoundError(EntityNotFoundError):
    """Raised when a payment targets an installment the loan does not own."""


class InvalidEntityStateError(ChitFundError):
    """Raised when an entity is in an invalid state for the operation."""


class AlreadyPaidError(InvalidEntityStateError):
    """Raised when a payment targets an installment that is already settled."""


class ConcurrentModificationError(ChitFundError):
    """Raised when a loan was changed by another writer since it was read."""


class AuthorizationError(ChitFundError):
    """Raised when the acting member lacks the manager capability."""


class ConfigurationError(ChitFundError):
    """Raised when configuration is invalid or missing."""


class SinkError(ChitFundError):
    """Raised when a sink operation fails."""
