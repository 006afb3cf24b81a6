from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid

from .services.records import ExpenseRecord, Participant, RecordKind, SplitMethod


UNNAMED_EXPENSE = 'Unnamed Expense'


class SplitMethodChoices(models.TextChoices):
    EQUAL = SplitMethod.EQUAL.value, 'Equal'
    WEIGHTED = SplitMethod.WEIGHTED.value, 'By games played'
    CUSTOM = SplitMethod.CUSTOM.value, 'Custom'


class RecordKindChoices(models.TextChoices):
    EXPENSE = RecordKind.EXPENSE.value, 'Expense'
    SETTLEMENT = RecordKind.SETTLEMENT.value, 'Settlement'


class Team(models.Model):
    """A team whose players share expenses."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'teams'
        ordering = ['name']

    def __str__(self):
        return self.name


class Player(models.Model):
    """Team roster entry. Identity is the id, the name is display only."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    team = models.ForeignKey(
        Team,
        on_delete=models.CASCADE,
        related_name='players'
    )
    name = models.CharField(max_length=100)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'players'
        ordering = ['created_at', 'name']

    def __str__(self):
        return self.name

    def to_participant(self):
        return Participant(id=str(self.id), name=self.name)


class ExpenseTag(models.Model):
    """Reusable expense label with a suggested amount."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    team = models.ForeignKey(
        Team,
        on_delete=models.CASCADE,
        related_name='expense_tags'
    )
    name = models.CharField(max_length=100)
    default_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    class Meta:
        db_table = 'expense_tags'
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.default_amount})"

    def delete(self, *args, **kwargs):
        # Expenses labelled only by this tag would be left without a label
        self.expenses.filter(custom_name='').update(custom_name=self.name)
        return super().delete(*args, **kwargs)


class Expense(models.Model):
    """
    Stored expense record.

    ``weights`` and ``custom_shares`` are JSON objects keyed by player id,
    with values kept as strings so decimals survive the round trip.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    team = models.ForeignKey(
        Team,
        on_delete=models.CASCADE,
        related_name='expenses'
    )

    # Label: tag or custom name
    tag = models.ForeignKey(
        ExpenseTag,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='expenses'
    )
    custom_name = models.CharField(max_length=200, blank=True)

    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    payer = models.ForeignKey(
        Player,
        on_delete=models.PROTECT,
        related_name='expenses_paid'
    )
    participants = models.ManyToManyField(
        Player,
        related_name='shared_expenses'
    )

    split_method = models.CharField(
        max_length=20,
        choices=SplitMethodChoices.choices,
        default=SplitMethodChoices.EQUAL
    )
    kind = models.CharField(
        max_length=20,
        choices=RecordKindChoices.choices,
        default=RecordKindChoices.EXPENSE
    )
    weights = models.JSONField(null=True, blank=True)
    custom_shares = models.JSONField(null=True, blank=True)

    date = models.DateField()

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'expenses'
        indexes = [
            models.Index(fields=['team', 'date'], name='expenses_team_id_2c1f0a_idx'),
            models.Index(fields=['team', 'kind'], name='expenses_team_id_8b7e4d_idx'),
        ]
        ordering = ['-date', '-created_at']

    def __str__(self):
        return f"{self.label} - {self.amount}"

    @property
    def label(self):
        if self.tag_id and self.tag:
            return self.tag.name
        return self.custom_name or UNNAMED_EXPENSE

    def to_record(self):
        """Convert to the engine's immutable ``ExpenseRecord``."""
        participant_ids = [str(player.id) for player in self.participants.all()]
        return ExpenseRecord(
            id=str(self.id),
            amount=self.amount,
            payer=str(self.payer_id) if self.payer_id else None,
            participants=participant_ids,
            split_method=self.split_method,
            weights=self.weights,
            custom_shares=self.custom_shares,
            tag_id=str(self.tag_id) if self.tag_id else None,
            custom_name=self.custom_name,
            date=self.date,
            kind=self.kind,
        )
