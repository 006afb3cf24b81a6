"""
Settlement planning.

Turns a balance map into a short list of player-to-player payments that
brings every balance back to zero, and converts a planned payment into the
settlement record that, once stored, reflects it in the ledger.
"""

from datetime import date as date_type
from decimal import Decimal
from typing import Dict, List, Mapping, Optional
from uuid import uuid4

from .records import ExpenseRecord, RecordKind, SplitMethod, Transfer

SETTLEMENT_EPSILON = Decimal('0.01')
SETTLEMENT_LABEL = 'Settlement Payment'


def plan_settlements(
    balances: Mapping[str, Decimal],
    epsilon: Decimal = SETTLEMENT_EPSILON,
) -> List[Transfer]:
    """
    Greedily match the largest debtors with the largest creditors.

    Algorithm:
        1. Players above ``epsilon`` are creditors, players below
           ``-epsilon`` are debtors. Anyone in between is considered settled.
        2. Both lists are sorted by remaining amount, largest first. The sort
           is stable, so players with equal amounts keep the order they have
           in ``balances`` (roster order when it comes from
           ``aggregate_balances``).
        3. The current debtor pays the current creditor the smaller of the
           two remaining amounts. Whichever side drops below ``epsilon``
           moves on to the next player.
        4. Stop when either list runs out.

    This is not guaranteed to give the fewest possible payments, but it
    never needs more than ``creditors + debtors - 1`` of them and always
    returns the same plan for the same balances.

    Args:
        balances: Participant id -> balance.
        epsilon: Amounts smaller than this are treated as zero.

    Returns:
        list[Transfer]: Payments in the order they were matched.

    Example:
        >>> plan_settlements({'a': Decimal('60'), 'b': Decimal('-30'), 'c': Decimal('-30')})
        [Transfer(from_id='b', to_id='a', amount=Decimal('30')), Transfer(from_id='c', to_id='a', amount=Decimal('30'))]
    """
    epsilon = Decimal(str(epsilon))

    creditors = [[pid, Decimal(b)] for pid, b in balances.items() if b > epsilon]
    debtors = [[pid, -Decimal(b)] for pid, b in balances.items() if b < -epsilon]

    creditors.sort(key=lambda entry: entry[1], reverse=True)
    debtors.sort(key=lambda entry: entry[1], reverse=True)

    transfers = []
    creditor_index = debtor_index = 0

    while creditor_index < len(creditors) and debtor_index < len(debtors):
        creditor = creditors[creditor_index]
        debtor = debtors[debtor_index]

        amount = min(creditor[1], debtor[1])
        transfers.append(Transfer(from_id=debtor[0], to_id=creditor[0], amount=amount))

        creditor[1] -= amount
        debtor[1] -= amount

        if creditor[1] < epsilon:
            creditor_index += 1
        if debtor[1] < epsilon:
            debtor_index += 1

    return transfers


def apply_transfers(
    balances: Mapping[str, Decimal],
    transfers: List[Transfer],
) -> Dict[str, Decimal]:
    """Return a copy of ``balances`` with every transfer paid."""
    result = dict(balances)
    for transfer in transfers:
        result[transfer.from_id] = result.get(transfer.from_id, Decimal('0')) + transfer.amount
        result[transfer.to_id] = result.get(transfer.to_id, Decimal('0')) - transfer.amount
    return result


def settlement_to_expense_record(
    transfer: Transfer,
    *,
    record_id: Optional[str] = None,
    date: Optional[date_type] = None,
    label: str = SETTLEMENT_LABEL,
) -> ExpenseRecord:
    """
    Build the record that marks a planned transfer as paid.

    The debtor becomes the payer and the creditor the only participant of an
    equal split, so aggregating it credits the debtor and debits the
    creditor by exactly ``transfer.amount``.
    """
    return ExpenseRecord(
        id=record_id or str(uuid4()),
        amount=transfer.amount,
        payer=transfer.from_id,
        participants=(transfer.to_id,),
        split_method=SplitMethod.EQUAL,
        custom_name=label,
        date=date or date_type.today(),
        kind=RecordKind.SETTLEMENT,
    )
