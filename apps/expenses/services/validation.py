"""
Record validation.

Every check here runs before any share or balance is computed, so a bad
record fails the whole calculation instead of producing a partial result.
"""

from decimal import Decimal
from typing import Iterable

from .exceptions import (
    CustomTotalMismatchError,
    EmptyParticipantsError,
    InvalidCustomSharesError,
    InvalidSettlementError,
    InvalidWeightsError,
    MissingCustomSharesError,
    MissingLabelError,
    MissingPayerError,
    MissingWeightsError,
    NonPositiveAmountError,
    UnknownParticipantError,
)
from .records import SHARE_TOLERANCE, ExpenseRecord, Participant, SplitMethod


def _check_mapping(mapping, participants, error_class, name, record_id):
    outsiders = sorted(set(mapping) - set(participants))
    if outsiders:
        raise error_class(
            f"{name} given for non-participants: {', '.join(outsiders)}",
            record_id=record_id,
        )
    for participant_id, value in mapping.items():
        if not value.is_finite() or value < 0:
            raise error_class(
                f"{name} for {participant_id} must be a non-negative number",
                record_id=record_id,
            )


def validate_record(record: ExpenseRecord, *, enforce_custom_total: bool = False) -> None:
    """
    Check a single record's structural invariants.

    Args:
        record: The record to check.
        enforce_custom_total: Also require custom shares to add up to the
            amount. Off by default, existing data is not guaranteed to meet it.

    Raises:
        NonPositiveAmountError: amount is not a positive finite number.
        MissingPayerError: payer is empty.
        MissingLabelError: neither tag nor custom name is set.
        EmptyParticipantsError: participants is empty.
        InvalidSettlementError: a settlement isn't one payer paying one
            other player via an equal split.
        MissingWeightsError / InvalidWeightsError: weighted split problems.
        MissingCustomSharesError / InvalidCustomSharesError /
        CustomTotalMismatchError: custom split problems.
    """
    record_id = record.id

    if not record.amount.is_finite() or record.amount <= 0:
        raise NonPositiveAmountError(
            f"Amount must be positive, got {record.amount}", record_id=record_id
        )

    if not record.payer:
        raise MissingPayerError("Expense has no payer", record_id=record_id)

    if not record.tag_id and not record.custom_name.strip():
        raise MissingLabelError(
            "Expense needs a tag or a custom name", record_id=record_id
        )

    if not record.participants:
        raise EmptyParticipantsError(
            "Expense must be split between at least one player", record_id=record_id
        )

    if record.is_settlement:
        if record.split_method is not SplitMethod.EQUAL:
            raise InvalidSettlementError(
                "Settlement must use an equal split", record_id=record_id
            )
        if len(record.participants) != 1:
            raise InvalidSettlementError(
                "Settlement must have exactly one receiver", record_id=record_id
            )
        if record.participants[0] == record.payer:
            raise InvalidSettlementError(
                "Settlement payer and receiver must differ", record_id=record_id
            )

    if record.split_method is SplitMethod.WEIGHTED:
        if record.weights is None:
            raise MissingWeightsError(
                "Weighted split requires weights", record_id=record_id
            )
        _check_mapping(record.weights, record.participants, InvalidWeightsError, 'Weight', record_id)

    elif record.split_method is SplitMethod.CUSTOM:
        if record.custom_shares is None:
            raise MissingCustomSharesError(
                "Custom split requires custom shares", record_id=record_id
            )
        _check_mapping(
            record.custom_shares, record.participants, InvalidCustomSharesError, 'Custom share', record_id
        )
        if enforce_custom_total:
            total = sum(record.custom_shares.values(), Decimal('0'))
            if abs(total - record.amount) > SHARE_TOLERANCE:
                raise CustomTotalMismatchError(
                    f"Custom shares add up to {total}, expected {record.amount}",
                    record_id=record_id,
                )


def validate_records(
    records: Iterable[ExpenseRecord],
    participants: Iterable[Participant],
    *,
    enforce_custom_total: bool = False,
) -> None:
    """
    Validate a whole ledger against its roster.

    Raises:
        UnknownParticipantError: A record names a payer or participant that
            is not in ``participants``.
        RecordValidationError: Any error raised by ``validate_record``.
    """
    roster = {p.id for p in participants}
    for record in records:
        validate_record(record, enforce_custom_total=enforce_custom_total)
        unknown = [
            pid for pid in (record.payer, *record.participants) if pid not in roster
        ]
        if unknown:
            raise UnknownParticipantError(
                f"Expense references unknown players: {', '.join(dict.fromkeys(unknown))}",
                record_id=record.id,
            )
