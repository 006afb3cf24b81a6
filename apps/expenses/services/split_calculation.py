"""
Split calculation.

Turns one expense record into the amount each participant owes for it.
"""

from decimal import Decimal
from typing import Dict

from .exceptions import ZeroTotalWeightError
from .records import ExpenseRecord, SplitMethod
from .validation import validate_record


def compute_shares(record: ExpenseRecord, *, validate: bool = True) -> Dict[str, Decimal]:
    """
    Compute each participant's owed share of a record.

    Shares are exact ``Decimal`` quotients, not rounded to cents, so they add
    up to ``record.amount`` within ``SHARE_TOLERANCE`` (for custom splits
    only when the caller supplied shares that do).

    Split rules:
        - EQUAL: ``amount / len(participants)`` each.
        - WEIGHTED: ``amount * weight / total_weight``; a participant without
          a weight entry has weight 0.
        - CUSTOM: the supplied share; a participant missing from
          ``custom_shares`` owes 0.

    Args:
        record: The expense record.
        validate: Run ``validate_record`` first. Callers that already
            validated the whole ledger pass False.

    Returns:
        dict: Participant id -> owed share, in ``record.participants`` order.

    Raises:
        RecordValidationError: If validation is on and the record is invalid.
        ZeroTotalWeightError: If a weighted split's weights add up to zero.

    Example:
        >>> record = ExpenseRecord(
        ...     id='r1', amount=Decimal('100'), payer='a', participants=('a', 'b'),
        ...     split_method=SplitMethod.WEIGHTED, weights={'a': 1, 'b': 3},
        ...     custom_name='Court rental',
        ... )
        >>> compute_shares(record)
        {'a': Decimal('25'), 'b': Decimal('75')}
    """
    if validate:
        validate_record(record)

    participants = record.participants

    if record.split_method is SplitMethod.WEIGHTED:
        weights = {pid: record.weights.get(pid, Decimal('0')) for pid in participants}
        total_weight = sum(weights.values(), Decimal('0'))
        if total_weight == 0:
            raise ZeroTotalWeightError(
                "Weighted split has a total weight of zero", record_id=record.id
            )
        return {
            pid: record.amount * weight / total_weight
            for pid, weight in weights.items()
        }

    if record.split_method is SplitMethod.CUSTOM:
        return {
            pid: record.custom_shares.get(pid, Decimal('0'))
            for pid in participants
        }

    per_person = record.amount / len(participants)
    return {pid: per_person for pid in participants}
