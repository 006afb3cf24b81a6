"""
Domain-specific exceptions for the expenses app.

Validation errors mean a record was rejected before any computation ran.
Computation errors mean a record passed validation but its split cannot be
evaluated. Views convert both into HTTP responses with distinct status codes.
"""


class ExpenseServiceError(Exception):
    """Base exception for all expense service errors."""
    code = 'expense_error'

    def __init__(self, message, record_id=None):
        super().__init__(message)
        self.record_id = record_id


class RecordValidationError(ExpenseServiceError):
    """Raised when an expense record is malformed."""
    code = 'invalid_record'


class MissingPayerError(RecordValidationError):
    """Raised when a record has no payer."""
    code = 'missing_payer'


class EmptyParticipantsError(RecordValidationError):
    """Raised when a record is split among nobody."""
    code = 'empty_participants'


class NonPositiveAmountError(RecordValidationError):
    """Raised when a record amount is zero or negative."""
    code = 'non_positive_amount'


class MissingLabelError(RecordValidationError):
    """Raised when a record has neither a tag nor a custom name."""
    code = 'missing_label'


class MissingWeightsError(RecordValidationError):
    """Raised when a weighted split has no weights."""
    code = 'missing_weights'


class InvalidWeightsError(RecordValidationError):
    """Raised when weights are negative or name non-participants."""
    code = 'invalid_weights'


class MissingCustomSharesError(RecordValidationError):
    """Raised when a custom split has no custom shares."""
    code = 'missing_custom_shares'


class InvalidCustomSharesError(RecordValidationError):
    """Raised when custom shares are negative or name non-participants."""
    code = 'invalid_custom_shares'


class CustomTotalMismatchError(RecordValidationError):
    """Raised when custom shares don't add up to the amount (enforcement enabled)."""
    code = 'custom_total_mismatch'


class InvalidSettlementError(RecordValidationError):
    """Raised when a settlement record is not a payment between two players."""
    code = 'invalid_settlement'


class UnknownParticipantError(RecordValidationError):
    """Raised when a record references someone outside the roster."""
    code = 'unknown_participant'


class SplitComputationError(ExpenseServiceError):
    """Raised when a valid record's split cannot be computed."""
    code = 'split_computation_failed'


class ZeroTotalWeightError(SplitComputationError):
    """Raised when every weight of a weighted split is zero."""
    code = 'zero_total_weight'


class TeamNotFoundError(ExpenseServiceError):
    """Raised when a team does not exist."""
    code = 'team_not_found'


class PlayerInUseError(ExpenseServiceError):
    """Raised when deleting a player that expenses still reference."""
    code = 'player_in_use'
