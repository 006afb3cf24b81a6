"""
Immutable editing state for an expense split.

Every change returns a new ``SplitDraft``; the maps inside a draft are never
mutated, so two drafts can't share a weights or custom-shares dict.
"""

from dataclasses import dataclass, replace
from datetime import date as date_type
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .records import ExpenseRecord, RecordKind, SplitMethod


def _without(mapping, key):
    if mapping is None:
        return None
    return MappingProxyType({k: v for k, v in mapping.items() if k != key})


def _with(mapping, key, value):
    updated = dict(mapping or {})
    updated[key] = Decimal(str(value))
    return MappingProxyType(updated)


@dataclass(frozen=True)
class SplitDraft:
    """
    An expense split being edited.

    Removing a participant also drops their weight and custom share, so a
    finished draft never carries entries for players who left the split.

    Example::

        draft = (
            SplitDraft(split_method=SplitMethod.WEIGHTED)
            .add_participant('anna')
            .add_participant('ben')
            .set_weight('anna', 2)
            .set_weight('ben', 1)
        )
        record = draft.build(
            record_id='r1', payer='anna', amount=Decimal('30'), custom_name='Balls',
        )
    """

    split_method: SplitMethod = SplitMethod.EQUAL
    participants: Tuple[str, ...] = ()
    weights: Optional[Mapping[str, Decimal]] = None
    custom_shares: Optional[Mapping[str, Decimal]] = None

    def __post_init__(self):
        object.__setattr__(self, 'split_method', SplitMethod(self.split_method))

    @classmethod
    def from_record(cls, record: ExpenseRecord) -> 'SplitDraft':
        """Start editing an existing record."""
        return cls(
            split_method=record.split_method,
            participants=record.participants,
            weights=record.weights,
            custom_shares=record.custom_shares,
        )

    def with_method(self, split_method) -> 'SplitDraft':
        return replace(self, split_method=SplitMethod(split_method))

    def add_participant(self, participant_id) -> 'SplitDraft':
        participant_id = str(participant_id)
        if participant_id in self.participants:
            return self
        return replace(self, participants=self.participants + (participant_id,))

    def remove_participant(self, participant_id) -> 'SplitDraft':
        participant_id = str(participant_id)
        return replace(
            self,
            participants=tuple(p for p in self.participants if p != participant_id),
            weights=_without(self.weights, participant_id),
            custom_shares=_without(self.custom_shares, participant_id),
        )

    def set_weight(self, participant_id, weight) -> 'SplitDraft':
        return replace(self, weights=_with(self.weights, str(participant_id), weight))

    def set_custom_share(self, participant_id, amount) -> 'SplitDraft':
        return replace(
            self, custom_shares=_with(self.custom_shares, str(participant_id), amount)
        )

    def clear_custom_share(self, participant_id) -> 'SplitDraft':
        return replace(self, custom_shares=_without(self.custom_shares, str(participant_id)))

    def build(
        self,
        *,
        record_id: str,
        payer: Optional[str],
        amount,
        tag_id: Optional[str] = None,
        custom_name: str = '',
        date: Optional[date_type] = None,
        kind: RecordKind = RecordKind.EXPENSE,
    ) -> ExpenseRecord:
        """
        Produce a full record from the draft.

        Only the map matching the split method is carried over. A map that
        was never set stays None, so validation reports it as missing.
        """
        return ExpenseRecord(
            id=record_id,
            amount=amount,
            payer=payer,
            participants=self.participants,
            split_method=self.split_method,
            weights=self.weights if self.split_method is SplitMethod.WEIGHTED else None,
            custom_shares=self.custom_shares if self.split_method is SplitMethod.CUSTOM else None,
            tag_id=tag_id,
            custom_name=custom_name,
            date=date,
            kind=kind,
        )
