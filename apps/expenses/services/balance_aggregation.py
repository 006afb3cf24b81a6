"""
Balance aggregation.

Folds a team's expense records into one net balance per player. A positive
balance means the group owes that player money, a negative one means the
player owes the group.
"""

from decimal import Decimal
from typing import Dict, Iterable, Sequence

from .records import ExpenseRecord, Participant
from .split_calculation import compute_shares
from .validation import validate_records


def aggregate_balances(
    records: Iterable[ExpenseRecord],
    participants: Sequence[Participant],
    *,
    enforce_custom_total: bool = False,
) -> Dict[str, Decimal]:
    """
    Compute every participant's net balance.

    The payer of each record is credited the full amount, then each
    participant is debited their share. A settlement record (one receiver,
    equal split) therefore credits the payer and debits only the receiver.

    The whole ledger is validated before anything is summed, so an invalid
    record raises instead of yielding a partial balance map.

    Args:
        records: Expense and settlement records.
        participants: The team roster. Every player starts at zero and the
            returned dict keeps roster order.
        enforce_custom_total: Passed through to validation.

    Returns:
        dict: Participant id -> balance. Balances add up to zero when every
        custom split adds up to its amount.

    Raises:
        RecordValidationError: If any record is invalid or references a
            player outside ``participants``.
        ZeroTotalWeightError: If a weighted record has zero total weight.
    """
    records = list(records)
    validate_records(records, participants, enforce_custom_total=enforce_custom_total)

    balances = {p.id: Decimal('0') for p in participants}
    for record in records:
        balances[record.payer] += record.amount
        for participant_id, share in compute_shares(record, validate=False).items():
            balances[participant_id] -= share

    return balances
