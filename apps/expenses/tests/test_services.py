"""
Unit tests for the expense engine.

Tests cover:
- Split calculation for equal, weighted and custom splits
- Balance aggregation and the zero-sum property
- Settlement planning and settlement-as-expense records
- Record validation
- Immutable split drafts

None of these touch the database.
"""

import random
from datetime import date
from decimal import Decimal

import pytest

from apps.expenses.services import (
    SETTLEMENT_EPSILON,
    SHARE_TOLERANCE,
    CustomTotalMismatchError,
    EmptyParticipantsError,
    ExpenseRecord,
    InvalidCustomSharesError,
    InvalidSettlementError,
    InvalidWeightsError,
    MissingCustomSharesError,
    MissingLabelError,
    MissingPayerError,
    MissingWeightsError,
    NonPositiveAmountError,
    Participant,
    RecordKind,
    RecordValidationError,
    SplitComputationError,
    SplitDraft,
    SplitMethod,
    Transfer,
    UnknownParticipantError,
    ZeroTotalWeightError,
    aggregate_balances,
    apply_transfers,
    compute_shares,
    plan_settlements,
    settlement_to_expense_record,
    validate_record,
)


A, B, C = 'a', 'b', 'c'
ROSTER = [Participant(A, 'Anna'), Participant(B, 'Ben'), Participant(C, 'Cara')]


def make_record(**overrides):
    fields = {
        'id': 'r1',
        'amount': Decimal('90'),
        'payer': A,
        'participants': (A, B, C),
        'custom_name': 'Dinner',
        'date': date(2024, 3, 1),
    }
    fields.update(overrides)
    return ExpenseRecord(**fields)


def random_ledger(rng, roster, count):
    """
    Build ``count`` valid records whose shares are whole currency units.

    Amounts are chosen so every split divides exactly, which keeps every
    balance an exact whole number.
    """
    ids = [p.id for p in roster]
    records = []
    for index in range(count):
        members = rng.sample(ids, rng.randint(1, len(ids)))
        payer = rng.choice(ids)
        method = rng.choice(list(SplitMethod))
        fields = {
            'id': f'r{index}',
            'payer': payer,
            'participants': members,
            'split_method': method,
            'custom_name': f'Expense {index}',
        }
        if method is SplitMethod.EQUAL:
            fields['amount'] = Decimal(len(members) * rng.randint(1, 50))
        elif method is SplitMethod.WEIGHTED:
            weights = {pid: rng.randint(0, 4) for pid in members}
            weights[members[0]] += 1
            fields['weights'] = weights
            fields['amount'] = Decimal(sum(weights.values()) * rng.randint(1, 20))
        else:
            shares = {pid: Decimal(rng.randint(0, 60)) for pid in members}
            shares[members[0]] += 1
            fields['custom_shares'] = shares
            fields['amount'] = sum(shares.values())
        records.append(ExpenseRecord(**fields))
    return records


def random_balances(rng, size):
    """Balances in whole cents that add up to exactly zero, none within a cent of it."""
    while True:
        cents = [rng.choice([-1, 1]) * rng.randint(2, 50000) for _ in range(size - 1)]
        last = -sum(cents)
        if last == 0 or abs(last) >= 2:
            break
    values = cents + [last]
    return {f'p{i}': Decimal(v) / 100 for i, v in enumerate(values)}


# =============================================================================
# Split Calculation Tests
# =============================================================================

class TestSplitCalculation:
    """Tests for split_calculation.compute_shares."""

    def test_equal_split_divides_amount(self):
        """Equal split gives everyone amount / k."""
        shares = compute_shares(make_record(amount=Decimal('90')))

        assert shares == {A: Decimal('30'), B: Decimal('30'), C: Decimal('30')}

    def test_equal_split_uneven_amount_sums_to_total(self):
        """100 between three doesn't divide evenly but still sums to 100."""
        shares = compute_shares(make_record(amount=Decimal('100')))

        assert len(shares) == 3
        for share in shares.values():
            assert abs(share - Decimal('100') / 3) < Decimal('1e-20')
        assert abs(sum(shares.values()) - Decimal('100')) < SHARE_TOLERANCE

    def test_equal_split_payer_not_participating(self):
        """The payer doesn't have to be one of the participants."""
        shares = compute_shares(make_record(participants=(B, C), amount=Decimal('50')))

        assert shares == {B: Decimal('25'), C: Decimal('25')}

    def test_weighted_split_is_proportional(self):
        """Weighted shares follow the weights and add up to the amount."""
        record = make_record(
            amount=Decimal('100'),
            participants=(A, B),
            split_method=SplitMethod.WEIGHTED,
            weights={A: 1, B: 3},
        )

        shares = compute_shares(record)

        assert shares == {A: Decimal('25'), B: Decimal('75')}

    def test_weighted_split_missing_weight_counts_as_zero(self):
        """A participant without a weight entry owes nothing."""
        record = make_record(
            amount=Decimal('60'),
            split_method=SplitMethod.WEIGHTED,
            weights={A: 2, B: 1},
        )

        shares = compute_shares(record)

        assert shares[C] == Decimal('0')
        assert shares[A] == Decimal('40')
        assert shares[B] == Decimal('20')

    def test_weighted_split_fractional_weights(self):
        """Weights don't have to be whole numbers."""
        record = make_record(
            amount=Decimal('10'),
            split_method=SplitMethod.WEIGHTED,
            weights={A: '0.5', B: '1.5', C: '2'},
        )

        shares = compute_shares(record)

        assert shares == {A: Decimal('1.25'), B: Decimal('3.75'), C: Decimal('5')}

    def test_weighted_split_zero_total_weight_raises(self):
        """All-zero weights are a computation error, not a silent zero share."""
        record = make_record(
            split_method=SplitMethod.WEIGHTED,
            weights={A: 0, B: 0, C: 0},
        )

        with pytest.raises(ZeroTotalWeightError) as exc_info:
            compute_shares(record)

        assert isinstance(exc_info.value, SplitComputationError)
        assert not isinstance(exc_info.value, RecordValidationError)
        assert exc_info.value.record_id == 'r1'

    def test_custom_split_passes_shares_through(self):
        """Custom shares are returned exactly as given."""
        record = make_record(
            split_method=SplitMethod.CUSTOM,
            custom_shares={A: '10', B: '20.50', C: '59.50'},
        )

        shares = compute_shares(record)

        assert shares == {A: Decimal('10'), B: Decimal('20.50'), C: Decimal('59.50')}

    def test_custom_split_missing_participant_owes_zero(self):
        """A participant left out of custom_shares contributes exactly 0."""
        record = make_record(
            split_method=SplitMethod.CUSTOM,
            custom_shares={A: '40', B: '50'},
        )

        shares = compute_shares(record)

        assert shares[C] == Decimal('0')
        assert shares[A] == Decimal('40')
        assert shares[B] == Decimal('50')

    def test_custom_split_total_not_enforced_by_default(self):
        """Custom shares that don't add up to the amount are accepted."""
        record = make_record(
            split_method=SplitMethod.CUSTOM,
            custom_shares={A: '10', B: '10', C: '10'},
        )

        shares = compute_shares(record)

        assert sum(shares.values()) == Decimal('30')

    def test_shares_validate_first(self):
        """Invalid records never reach the split."""
        with pytest.raises(EmptyParticipantsError):
            compute_shares(make_record(participants=()))


# =============================================================================
# Balance Aggregation Tests
# =============================================================================

class TestBalanceAggregation:
    """Tests for balance_aggregation.aggregate_balances."""

    def test_scenario_equal_split(self):
        """90 paid by Anna, split three ways."""
        balances = aggregate_balances([make_record()], ROSTER)

        assert balances == {A: Decimal('60'), B: Decimal('-30'), C: Decimal('-30')}

    def test_scenario_weighted_split(self):
        """100 paid by Anna, weighted 1:3 with Ben."""
        record = make_record(
            amount=Decimal('100'),
            participants=(A, B),
            split_method=SplitMethod.WEIGHTED,
            weights={A: 1, B: 3},
        )

        balances = aggregate_balances([record], ROSTER[:2])

        assert balances == {A: Decimal('75'), B: Decimal('-75')}

    def test_every_roster_member_appears(self):
        """Players without any records still get a zero balance."""
        balances = aggregate_balances([], ROSTER)

        assert balances == {A: Decimal('0'), B: Decimal('0'), C: Decimal('0')}
        assert list(balances) == [A, B, C]

    def test_single_participant_record_acts_as_settlement(self):
        """A one-person equal split moves money between exactly two players."""
        record = make_record(amount=Decimal('25'), payer=B, participants=(A,))

        balances = aggregate_balances([record], ROSTER)

        assert balances == {A: Decimal('-25'), B: Decimal('25'), C: Decimal('0')}

    def test_settlement_record_behaves_like_single_participant_expense(self):
        """Marking the kind explicitly doesn't change the balance effect."""
        as_expense = make_record(amount=Decimal('25'), payer=B, participants=(A,))
        as_settlement = make_record(
            amount=Decimal('25'), payer=B, participants=(A,), kind=RecordKind.SETTLEMENT
        )

        assert aggregate_balances([as_expense], ROSTER) == aggregate_balances([as_settlement], ROSTER)

    def test_conservation_over_random_ledgers(self):
        """Balances always add up to zero."""
        rng = random.Random(20240301)
        for _ in range(50):
            records = random_ledger(rng, ROSTER, rng.randint(1, 25))
            balances = aggregate_balances(records, ROSTER)
            assert abs(sum(balances.values())) < Decimal('1e-6')

    def test_conservation_with_uneven_equal_splits(self):
        """Thirds that don't terminate still cancel out."""
        records = [
            make_record(id='r1', amount=Decimal('100')),
            make_record(id='r2', amount=Decimal('10'), payer=B),
            make_record(id='r3', amount=Decimal('0.01'), payer=C, participants=(A, B, C)),
        ]

        balances = aggregate_balances(records, ROSTER)

        assert abs(sum(balances.values())) < Decimal('1e-6')

    def test_unknown_payer_fails_closed(self):
        """A record naming someone off the roster rejects the whole ledger."""
        records = [make_record(), make_record(id='r2', payer='zed')]

        with pytest.raises(UnknownParticipantError) as exc_info:
            aggregate_balances(records, ROSTER)

        assert exc_info.value.record_id == 'r2'

    def test_unknown_participant_fails_closed(self):
        with pytest.raises(UnknownParticipantError):
            aggregate_balances([make_record(participants=(A, 'zed'))], ROSTER)

    def test_invalid_record_fails_closed(self):
        """No partial balances are returned when one record is bad."""
        records = [make_record(), make_record(id='r2', amount=Decimal('0'))]

        with pytest.raises(NonPositiveAmountError):
            aggregate_balances(records, ROSTER)

    def test_zero_weight_record_fails_closed(self):
        records = [
            make_record(),
            make_record(id='r2', split_method=SplitMethod.WEIGHTED, weights={A: 0}),
        ]

        with pytest.raises(ZeroTotalWeightError):
            aggregate_balances(records, ROSTER)

    def test_custom_total_enforcement_is_optional(self):
        """Mismatched custom shares only fail when enforcement is asked for."""
        record = make_record(
            split_method=SplitMethod.CUSTOM,
            custom_shares={A: '10', B: '10', C: '10'},
        )

        aggregate_balances([record], ROSTER)
        with pytest.raises(CustomTotalMismatchError):
            aggregate_balances([record], ROSTER, enforce_custom_total=True)

    def test_idempotent(self):
        """Recomputing from the same records gives identical results."""
        rng = random.Random(7)
        records = random_ledger(rng, ROSTER, 30)

        first = aggregate_balances(records, ROSTER)
        second = aggregate_balances(records, ROSTER)

        assert first == second
        assert list(first) == list(second)
        assert plan_settlements(first) == plan_settlements(second)


# =============================================================================
# Settlement Planning Tests
# =============================================================================

class TestSettlementPlanning:
    """Tests for settlement_planning.plan_settlements and friends."""

    def test_scenario_one_creditor_two_debtors(self):
        balances = {A: Decimal('60'), B: Decimal('-30'), C: Decimal('-30')}

        transfers = plan_settlements(balances)

        assert transfers == [
            Transfer(from_id=B, to_id=A, amount=Decimal('30')),
            Transfer(from_id=C, to_id=A, amount=Decimal('30')),
        ]

    def test_scenario_single_transfer(self):
        transfers = plan_settlements({A: Decimal('75'), B: Decimal('-75')})

        assert transfers == [Transfer(from_id=B, to_id=A, amount=Decimal('75'))]

    def test_largest_amounts_are_matched_first(self):
        balances = {
            A: Decimal('10'),
            B: Decimal('50'),
            C: Decimal('-20'),
            'd': Decimal('-40'),
        }

        transfers = plan_settlements(balances)

        assert transfers[0] == Transfer(from_id='d', to_id=B, amount=Decimal('40'))
        assert transfers[1] == Transfer(from_id=C, to_id=B, amount=Decimal('10'))
        assert transfers[2] == Transfer(from_id=C, to_id=A, amount=Decimal('10'))

    def test_ties_keep_input_order(self):
        """Equal amounts are matched in the order the balances are listed."""
        balances = {
            C: Decimal('-10'),
            A: Decimal('10'),
            B: Decimal('10'),
            'd': Decimal('-10'),
        }

        transfers = plan_settlements(balances)

        assert [(t.from_id, t.to_id) for t in transfers] == [(C, A), ('d', B)]

    def test_balances_within_epsilon_are_ignored(self):
        balances = {A: Decimal('0.01'), B: Decimal('-0.01'), C: Decimal('0')}

        assert plan_settlements(balances) == []

    def test_custom_epsilon(self):
        balances = {A: Decimal('0.5'), B: Decimal('-0.5')}

        assert plan_settlements(balances, epsilon=Decimal('1')) == []
        assert len(plan_settlements(balances)) == 1

    def test_all_zero_needs_no_transfers(self):
        assert plan_settlements({A: Decimal('0'), B: Decimal('0')}) == []
        assert plan_settlements({}) == []

    def test_transfers_settle_random_balances(self):
        """Applying the plan brings every balance within epsilon of zero."""
        rng = random.Random(42)
        for _ in range(100):
            balances = random_balances(rng, rng.randint(2, 8))

            transfers = plan_settlements(balances)
            settled = apply_transfers(balances, transfers)

            assert all(abs(b) < SETTLEMENT_EPSILON for b in settled.values())
            assert all(t.amount > 0 for t in transfers)

    def test_transfer_count_bound(self):
        """Never more than creditors + debtors - 1 transfers."""
        rng = random.Random(99)
        for _ in range(100):
            balances = random_balances(rng, rng.randint(2, 10))
            creditors = sum(1 for b in balances.values() if b > SETTLEMENT_EPSILON)
            debtors = sum(1 for b in balances.values() if b < -SETTLEMENT_EPSILON)

            transfers = plan_settlements(balances)

            if creditors and debtors:
                assert len(transfers) <= creditors + debtors - 1
            else:
                assert transfers == []

    def test_per_player_totals_match_balances(self):
        """Each debtor pays, and each creditor receives, their full balance."""
        rng = random.Random(5)
        balances = random_balances(rng, 7)

        transfers = plan_settlements(balances)

        for pid, balance in balances.items():
            paid = sum((t.amount for t in transfers if t.from_id == pid), Decimal('0'))
            received = sum((t.amount for t in transfers if t.to_id == pid), Decimal('0'))
            assert abs(received - paid - balance) < SETTLEMENT_EPSILON

    def test_ledger_settles_to_zero(self):
        """Plans from real ledgers settle them completely."""
        rng = random.Random(11)
        for _ in range(30):
            records = random_ledger(rng, ROSTER, rng.randint(1, 15))
            balances = aggregate_balances(records, ROSTER)

            settled = apply_transfers(balances, plan_settlements(balances))

            assert all(abs(b) < SETTLEMENT_EPSILON for b in settled.values())

    def test_apply_transfers_does_not_mutate_input(self):
        balances = {A: Decimal('30'), B: Decimal('-30')}

        apply_transfers(balances, plan_settlements(balances))

        assert balances == {A: Decimal('30'), B: Decimal('-30')}


class TestSettlementRecords:
    """Tests for settlement_to_expense_record."""

    def test_record_shape(self):
        transfer = Transfer(from_id=B, to_id=A, amount=Decimal('30'))

        record = settlement_to_expense_record(transfer, record_id='s1', date=date(2024, 3, 2))

        assert record.id == 's1'
        assert record.payer == B
        assert record.participants == (A,)
        assert record.split_method is SplitMethod.EQUAL
        assert record.kind is RecordKind.SETTLEMENT
        assert record.amount == Decimal('30')
        assert record.custom_name == 'Settlement Payment'
        assert record.date == date(2024, 3, 2)
        validate_record(record)

    def test_generated_id_and_date(self):
        record = settlement_to_expense_record(Transfer(B, A, Decimal('5')))

        assert record.id
        assert record.date == date.today()

    def test_scenario_settlement_zeroes_balances(self):
        """Recording the payment clears both balances and leaves nothing to plan."""
        opening = make_record(amount=Decimal('60'), participants=(A, B))
        roster = ROSTER[:2]
        assert aggregate_balances([opening], roster) == {A: Decimal('30'), B: Decimal('-30')}

        payment = make_record(id='r2', amount=Decimal('30'), payer=B, participants=(A,))
        balances = aggregate_balances([opening, payment], roster)

        assert all(abs(b) < SETTLEMENT_EPSILON for b in balances.values())
        assert plan_settlements(balances) == []

    def test_recording_every_planned_transfer_settles_ledger(self):
        """Storing each planned transfer as a record zeroes the ledger."""
        records = [
            make_record(id='r1', amount=Decimal('90')),
            make_record(id='r2', amount=Decimal('45'), payer=C, participants=(B, C)),
        ]
        balances = aggregate_balances(records, ROSTER)

        settlements = [
            settlement_to_expense_record(t, record_id=f's{i}')
            for i, t in enumerate(plan_settlements(balances))
        ]
        final = aggregate_balances(records + settlements, ROSTER)

        assert all(abs(b) < SETTLEMENT_EPSILON for b in final.values())
        assert plan_settlements(final) == []


# =============================================================================
# Validation Tests
# =============================================================================

class TestValidation:
    """Tests for validation.validate_record."""

    def test_valid_record_passes(self):
        validate_record(make_record())

    @pytest.mark.parametrize('amount', [Decimal('0'), Decimal('-5'), Decimal('NaN')])
    def test_non_positive_amount(self, amount):
        with pytest.raises(NonPositiveAmountError):
            validate_record(make_record(amount=amount))

    def test_missing_payer(self):
        with pytest.raises(MissingPayerError):
            validate_record(make_record(payer=None))

    def test_missing_label(self):
        with pytest.raises(MissingLabelError):
            validate_record(make_record(custom_name='   '))

    def test_tag_counts_as_label(self):
        validate_record(make_record(custom_name='', tag_id='tag-1'))

    def test_empty_participants(self):
        with pytest.raises(EmptyParticipantsError):
            validate_record(make_record(participants=()))

    def test_duplicate_participants_collapse(self):
        record = make_record(participants=(A, B, A))

        assert record.participants == (A, B)

    def test_weighted_requires_weights(self):
        with pytest.raises(MissingWeightsError):
            validate_record(make_record(split_method=SplitMethod.WEIGHTED))

    def test_weights_for_non_participants(self):
        record = make_record(
            participants=(A, B), split_method=SplitMethod.WEIGHTED, weights={A: 1, C: 1}
        )

        with pytest.raises(InvalidWeightsError):
            validate_record(record)

    def test_negative_weight(self):
        record = make_record(split_method=SplitMethod.WEIGHTED, weights={A: 2, B: -1})

        with pytest.raises(InvalidWeightsError):
            validate_record(record)

    def test_custom_requires_shares(self):
        with pytest.raises(MissingCustomSharesError):
            validate_record(make_record(split_method=SplitMethod.CUSTOM))

    def test_custom_shares_for_non_participants(self):
        record = make_record(
            participants=(A,), split_method=SplitMethod.CUSTOM, custom_shares={A: 40, B: 50}
        )

        with pytest.raises(InvalidCustomSharesError):
            validate_record(record)

    def test_negative_custom_share(self):
        record = make_record(split_method=SplitMethod.CUSTOM, custom_shares={A: 100, B: -10})

        with pytest.raises(InvalidCustomSharesError):
            validate_record(record)

    def test_custom_total_enforced_when_requested(self):
        exact = make_record(split_method=SplitMethod.CUSTOM, custom_shares={A: 30, B: 30, C: 30})
        short = make_record(split_method=SplitMethod.CUSTOM, custom_shares={A: 30, B: 30})

        validate_record(exact, enforce_custom_total=True)
        with pytest.raises(CustomTotalMismatchError):
            validate_record(short, enforce_custom_total=True)

    def test_settlement_needs_one_receiver(self):
        record = make_record(kind=RecordKind.SETTLEMENT, participants=(A, B), payer=C)

        with pytest.raises(InvalidSettlementError):
            validate_record(record)

    def test_settlement_cannot_pay_oneself(self):
        record = make_record(kind=RecordKind.SETTLEMENT, participants=(A,), payer=A)

        with pytest.raises(InvalidSettlementError):
            validate_record(record)

    def test_settlement_must_split_equally(self):
        record = make_record(
            kind=RecordKind.SETTLEMENT,
            participants=(A,),
            payer=B,
            split_method=SplitMethod.CUSTOM,
            custom_shares={A: 90},
        )

        with pytest.raises(InvalidSettlementError):
            validate_record(record)

    def test_errors_carry_codes(self):
        with pytest.raises(RecordValidationError) as exc_info:
            validate_record(make_record(participants=()))

        assert exc_info.value.code == 'empty_participants'
        assert exc_info.value.record_id == 'r1'


# =============================================================================
# Split Draft Tests
# =============================================================================

class TestSplitDraft:
    """Tests for share_editing.SplitDraft."""

    def test_changes_return_new_drafts(self):
        draft = SplitDraft(split_method=SplitMethod.WEIGHTED)

        updated = draft.add_participant(A).set_weight(A, 2)

        assert draft.participants == ()
        assert draft.weights is None
        assert updated.participants == (A,)
        assert updated.weights == {A: Decimal('2')}

    def test_drafts_do_not_share_maps(self):
        """Editing one branch never shows up in another."""
        base = SplitDraft(split_method=SplitMethod.CUSTOM).add_participant(A).set_custom_share(A, 10)

        left = base.set_custom_share(A, 20)
        right = base.add_participant(B).set_custom_share(B, 5)

        assert base.custom_shares == {A: Decimal('10')}
        assert left.custom_shares == {A: Decimal('20')}
        assert right.custom_shares == {A: Decimal('10'), B: Decimal('5')}

    def test_maps_are_read_only(self):
        draft = SplitDraft().set_weight(A, 1)

        with pytest.raises(TypeError):
            draft.weights[A] = Decimal('5')

    def test_removing_participant_drops_their_entries(self):
        draft = (
            SplitDraft(split_method=SplitMethod.WEIGHTED)
            .add_participant(A)
            .add_participant(B)
            .set_weight(A, 1)
            .set_weight(B, 3)
            .set_custom_share(B, 12)
        )

        updated = draft.remove_participant(B)

        assert updated.participants == (A,)
        assert updated.weights == {A: Decimal('1')}
        assert updated.custom_shares == {}

    def test_clear_custom_share_keeps_participant(self):
        """Clearing a share leaves the player in the split, owing 0."""
        draft = (
            SplitDraft(split_method=SplitMethod.CUSTOM)
            .add_participant(A)
            .add_participant(B)
            .set_custom_share(A, 40)
            .set_custom_share(B, 50)
        )

        cleared = draft.clear_custom_share(B)
        record = cleared.build(record_id='r9', payer=A, amount=Decimal('40'), custom_name='Shoes')

        assert cleared.participants == (A, B)
        assert cleared.custom_shares == {A: Decimal('40')}
        assert draft.custom_shares == {A: Decimal('40'), B: Decimal('50')}
        assert compute_shares(record) == {A: Decimal('40'), B: Decimal('0')}

    def test_adding_twice_is_a_no_op(self):
        draft = SplitDraft().add_participant(A)

        assert draft.add_participant(A) is draft

    def test_build_weighted_record(self):
        record = (
            SplitDraft(split_method=SplitMethod.WEIGHTED)
            .add_participant(A)
            .add_participant(B)
            .set_weight(A, 1)
            .set_weight(B, 3)
            .set_custom_share(A, 99)
            .build(record_id='r9', payer=A, amount=Decimal('100'), custom_name='Lanes')
        )

        assert record.weights == {A: Decimal('1'), B: Decimal('3')}
        assert record.custom_shares is None
        assert compute_shares(record) == {A: Decimal('25'), B: Decimal('75')}

    def test_build_without_weights_is_missing(self):
        record = (
            SplitDraft(split_method=SplitMethod.WEIGHTED)
            .add_participant(A)
            .build(record_id='r9', payer=A, amount=Decimal('10'), custom_name='Lanes')
        )

        with pytest.raises(MissingWeightsError):
            validate_record(record)

    def test_from_record_round_trip(self):
        record = make_record(split_method=SplitMethod.CUSTOM, custom_shares={A: 30, B: 60})

        draft = SplitDraft.from_record(record).remove_participant(C)

        assert draft.participants == (A, B)
        assert draft.custom_shares == {A: Decimal('30'), B: Decimal('60')}
        assert record.participants == (A, B, C)

    def test_switching_method(self):
        draft = SplitDraft().add_participant(A).set_weight(A, 1).with_method('weighted')

        assert draft.split_method is SplitMethod.WEIGHTED
