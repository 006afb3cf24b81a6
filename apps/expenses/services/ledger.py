"""
Team ledger service.

Bridges the ORM and the expense engine: loads a team's roster and records,
computes balances and a settlement plan, and writes new records after they
pass the same validation the engine applies.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from .balance_aggregation import aggregate_balances
from .exceptions import PlayerInUseError, TeamNotFoundError
from .records import ExpenseRecord, Participant, Transfer
from .share_editing import SplitDraft
from .settlement_planning import (
    SETTLEMENT_EPSILON,
    SETTLEMENT_LABEL,
    plan_settlements,
    settlement_to_expense_record,
)
from .split_calculation import compute_shares
from .validation import validate_records

logger = logging.getLogger(__name__)


CENT = Decimal('0.01')


def money(value) -> Decimal:
    """Round to cents for display; never returns negative zero."""
    return Decimal(value).quantize(CENT) + 0


def _setting(name, default):
    return getattr(settings, name, default)


def settlement_epsilon() -> Decimal:
    return Decimal(str(_setting('EXPENSES_SETTLEMENT_EPSILON', SETTLEMENT_EPSILON)))


def enforce_custom_total() -> bool:
    return bool(_setting('EXPENSES_ENFORCE_CUSTOM_TOTAL', False))


def ledger_currency() -> str:
    """Currency code amounts are shown in; display only."""
    return _setting('EXPENSES_CURRENCY', 'CZK')


@dataclass(frozen=True)
class LedgerSummary:
    """Balances and suggested payments for one team."""

    participants: List[Participant]
    balances: Dict[str, Decimal]
    transfers: List[Transfer]

    def names(self) -> Dict[str, str]:
        return {p.id: p.name for p in self.participants}


def get_team(team_id: UUID):
    from apps.expenses.models import Team

    try:
        return Team.objects.get(id=team_id)
    except Team.DoesNotExist:
        raise TeamNotFoundError(f"Team with ID {team_id} not found")


def load_team_ledger(team_id: UUID):
    """
    Load a team's roster and records as engine types.

    Returns:
        tuple: (list[Participant], list[ExpenseRecord]), roster in roster
        order and records oldest first.

    Raises:
        TeamNotFoundError: If the team doesn't exist.
    """
    team = get_team(team_id)
    participants = [player.to_participant() for player in team.players.all()]
    expenses = (
        team.expenses
        .prefetch_related('participants')
        .order_by('date', 'created_at')
    )
    records = [expense.to_record() for expense in expenses]
    return participants, records


def compute_team_summary(team_id: UUID) -> LedgerSummary:
    """
    Compute current balances and a settlement plan for a team.

    Nothing is cached; the summary is rebuilt from the stored records on
    every call.

    Raises:
        TeamNotFoundError: If the team doesn't exist.
        RecordValidationError: If a stored record is invalid.
        SplitComputationError: If a stored record can't be split.
    """
    participants, records = load_team_ledger(team_id)
    balances = aggregate_balances(
        records, participants, enforce_custom_total=enforce_custom_total()
    )
    transfers = plan_settlements(balances, epsilon=settlement_epsilon())
    logger.debug(
        "Computed ledger for team %s: %d records, %d transfers",
        team_id, len(records), len(transfers),
    )
    return LedgerSummary(participants=participants, balances=balances, transfers=transfers)


def check_record(team, record: ExpenseRecord) -> None:
    """
    Validate a record against a team's roster and make sure it can be split.

    Raises:
        RecordValidationError: If the record is invalid.
        ZeroTotalWeightError: If a weighted split has zero total weight.
    """
    participants = [player.to_participant() for player in team.players.all()]
    validate_records([record], participants, enforce_custom_total=enforce_custom_total())
    compute_shares(record, validate=False)


def _stored_mapping(mapping):
    if mapping is None:
        return None
    return {key: str(value) for key, value in mapping.items()}


@transaction.atomic
def save_expense(*, team, record: ExpenseRecord, instance=None):
    """
    Persist a record, replacing ``instance`` entirely when given.

    Edits are full replacements: every field of the stored expense is
    overwritten from ``record``.

    Args:
        team: Team the expense belongs to.
        record: Validated-or-not engine record; it is checked here.
        instance: Existing ``Expense`` to overwrite, or None to create.

    Returns:
        Expense: The saved expense.

    Raises:
        RecordValidationError: If the record is invalid.
        SplitComputationError: If the record can't be split.
    """
    from apps.expenses.models import Expense

    check_record(team, record)

    expense = instance or Expense()
    expense.team = team
    expense.tag_id = record.tag_id
    expense.custom_name = record.custom_name
    expense.amount = record.amount
    expense.payer_id = record.payer
    expense.split_method = record.split_method.value
    expense.kind = record.kind.value
    expense.weights = _stored_mapping(record.weights)
    expense.custom_shares = _stored_mapping(record.custom_shares)
    expense.date = record.date or expense.date or timezone.localdate()
    expense.save()
    expense.participants.set(record.participants)

    logger.info(
        "Saved %s %s for team %s (%s %s)",
        record.kind.value, expense.id, team.id, record.split_method.value, record.amount,
    )
    return expense


def record_settlement(*, team_id: UUID, transfer: Transfer, date=None):
    """
    Store a planned transfer as a settlement record.

    The stored record is built by ``settlement_to_expense_record``, so the
    next summary shows the payment as done.

    Raises:
        TeamNotFoundError: If the team doesn't exist.
        RecordValidationError: If the transfer names unknown players, pays
            oneself, or has a non-positive amount.
    """
    team = get_team(team_id)
    transfer = Transfer(transfer.from_id, transfer.to_id, money(transfer.amount))
    record = settlement_to_expense_record(
        transfer,
        date=date,
        label=_setting('EXPENSES_SETTLEMENT_LABEL', SETTLEMENT_LABEL),
    )
    expense = save_expense(team=team, record=record)
    logger.info(
        "Recorded settlement: %s paid %s %s (team %s)",
        transfer.from_id, transfer.to_id, transfer.amount, team.id,
    )
    return expense


def player_in_use(player) -> bool:
    """True if any expense names the player as payer or participant."""
    return player.expenses_paid.exists() or player.shared_expenses.exists()


@transaction.atomic
def delete_player(*, player) -> None:
    """
    Remove a player from the roster.

    Raises:
        PlayerInUseError: If any expense still names the player.
    """
    if player_in_use(player):
        raise PlayerInUseError(
            f"{player.name} still appears in expenses and cannot be removed"
        )
    player.delete()
    logger.info("Removed player %s from team %s", player.name, player.team_id)


@transaction.atomic
def delete_tag(*, tag) -> None:
    """
    Delete an expense tag, keeping its expenses labelled.

    ``ExpenseTag.delete`` copies the tag's name into the custom name of
    every expense that relied on the tag for its label.
    """
    tag.delete()
    logger.info("Removed tag %s from team %s", tag.name, tag.team_id)


def build_record(
    *,
    payer,
    amount,
    participants,
    split_method,
    weights=None,
    custom_shares=None,
    tag=None,
    custom_name: str = '',
    date=None,
    kind,
    record_id: Optional[str] = None,
) -> ExpenseRecord:
    """Assemble an engine record from validated request data via ``SplitDraft``."""
    draft = SplitDraft(split_method=split_method)
    for player in participants:
        draft = draft.add_participant(player.id)
    for player_id, weight in (weights or {}).items():
        draft = draft.set_weight(player_id, weight)
    for player_id, share in (custom_shares or {}).items():
        draft = draft.set_custom_share(player_id, share)

    return draft.build(
        record_id=record_id or '',
        payer=str(payer.id) if payer else None,
        amount=amount,
        tag_id=str(tag.id) if tag else None,
        custom_name=custom_name,
        date=date,
        kind=kind,
    )
