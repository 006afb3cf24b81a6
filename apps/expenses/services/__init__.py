"""
Expenses app services layer.

The engine modules (records, validation, split_calculation,
balance_aggregation, settlement_planning, share_editing) are pure functions
over in-memory records. ``ledger`` is the only module that talks to the ORM.
"""

from .exceptions import (
    ExpenseServiceError,
    RecordValidationError,
    MissingPayerError,
    EmptyParticipantsError,
    NonPositiveAmountError,
    MissingLabelError,
    MissingWeightsError,
    InvalidWeightsError,
    MissingCustomSharesError,
    InvalidCustomSharesError,
    CustomTotalMismatchError,
    InvalidSettlementError,
    UnknownParticipantError,
    SplitComputationError,
    ZeroTotalWeightError,
    TeamNotFoundError,
    PlayerInUseError,
)

from .records import (
    SHARE_TOLERANCE,
    ExpenseRecord,
    Participant,
    RecordKind,
    SplitMethod,
    Transfer,
)

from .validation import (
    validate_record,
    validate_records,
)

from .split_calculation import (
    compute_shares,
)

from .balance_aggregation import (
    aggregate_balances,
)

from .settlement_planning import (
    SETTLEMENT_EPSILON,
    SETTLEMENT_LABEL,
    plan_settlements,
    apply_transfers,
    settlement_to_expense_record,
)

from .share_editing import (
    SplitDraft,
)


__all__ = [
    # Exceptions
    'ExpenseServiceError',
    'RecordValidationError',
    'MissingPayerError',
    'EmptyParticipantsError',
    'NonPositiveAmountError',
    'MissingLabelError',
    'MissingWeightsError',
    'InvalidWeightsError',
    'MissingCustomSharesError',
    'InvalidCustomSharesError',
    'CustomTotalMismatchError',
    'InvalidSettlementError',
    'UnknownParticipantError',
    'SplitComputationError',
    'ZeroTotalWeightError',
    'TeamNotFoundError',
    'PlayerInUseError',

    # Records
    'SHARE_TOLERANCE',
    'ExpenseRecord',
    'Participant',
    'RecordKind',
    'SplitMethod',
    'Transfer',

    # Engine
    'validate_record',
    'validate_records',
    'compute_shares',
    'aggregate_balances',
    'SETTLEMENT_EPSILON',
    'SETTLEMENT_LABEL',
    'plan_settlements',
    'apply_transfers',
    'settlement_to_expense_record',
    'SplitDraft',
]
