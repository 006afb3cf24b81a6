"""
Domain records for the expense engine.

These are plain, immutable value objects. The ORM models in
``apps.expenses.models`` convert themselves into these types before any
calculation runs, so the engine never touches the database.
"""

from dataclasses import dataclass, field
from datetime import date as date_type
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


# Largest gap allowed between the sum of computed shares and the record amount.
SHARE_TOLERANCE = Decimal('0.005')


class SplitMethod(str, Enum):
    EQUAL = 'equal'
    # Weight is usually the number of games a player took part in.
    WEIGHTED = 'weighted'
    CUSTOM = 'custom'


class RecordKind(str, Enum):
    """Distinguishes a shared cost from a direct payment between two players."""

    EXPENSE = 'expense'
    SETTLEMENT = 'settlement'


@dataclass(frozen=True)
class Participant:
    id: str
    name: str = ''


def _freeze(mapping):
    if mapping is None:
        return None
    return MappingProxyType({str(key): Decimal(str(value)) for key, value in mapping.items()})


@dataclass(frozen=True)
class ExpenseRecord:
    """
    One expense (or settlement) as the engine sees it.

    Attributes:
        id: Record identifier.
        amount: Total amount paid, in currency units.
        payer: Participant id of whoever fronted the money.
        participants: Participant ids the amount is divided among. The payer
            does not need to be one of them.
        split_method: Rule used to divide ``amount``.
        weights: Participant id -> weight, required for WEIGHTED.
        custom_shares: Participant id -> owed amount, required for CUSTOM.
        tag_id: Optional expense tag reference.
        custom_name: Free-text label used when no tag is set.
        date: Day the expense happened.
        kind: EXPENSE for shared costs, SETTLEMENT for a recorded payment.
    """

    id: str
    amount: Decimal
    payer: Optional[str]
    participants: Tuple[str, ...]
    split_method: SplitMethod = SplitMethod.EQUAL
    weights: Optional[Mapping[str, Decimal]] = None
    custom_shares: Optional[Mapping[str, Decimal]] = None
    tag_id: Optional[str] = None
    custom_name: str = ''
    date: Optional[date_type] = None
    kind: RecordKind = RecordKind.EXPENSE

    def __post_init__(self):
        object.__setattr__(self, 'amount', Decimal(str(self.amount)))
        object.__setattr__(
            self, 'participants', tuple(dict.fromkeys(str(p) for p in self.participants))
        )
        object.__setattr__(self, 'split_method', SplitMethod(self.split_method))
        object.__setattr__(self, 'kind', RecordKind(self.kind))
        object.__setattr__(self, 'weights', _freeze(self.weights))
        object.__setattr__(self, 'custom_shares', _freeze(self.custom_shares))
        if self.payer is not None:
            object.__setattr__(self, 'payer', str(self.payer))

    @property
    def is_settlement(self) -> bool:
        return self.kind is RecordKind.SETTLEMENT


@dataclass(frozen=True)
class Transfer:
    """A suggested payment: ``from_id`` pays ``amount`` to ``to_id``."""

    from_id: str
    to_id: str
    amount: Decimal = field(default=Decimal('0'))

    def as_dict(self):
        return {'from': self.from_id, 'to': self.to_id, 'amount': self.amount}
