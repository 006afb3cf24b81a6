from uuid import UUID

from rest_framework import serializers

from .models import (
    Expense,
    ExpenseTag,
    Player,
    RecordKindChoices,
    Team,
)


# =============================================================================
# Input Serializers
# =============================================================================

class ExpenseFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for expense filtering.

    Query Parameters:
        team (UUID): Filter by team ID
        kind (str): Filter by record kind (expense or settlement)
        date_from (date): Filter expenses from this date
        date_to (date): Filter expenses to this date
    """

    team = serializers.UUIDField(required=False)
    kind = serializers.ChoiceField(choices=RecordKindChoices.choices, required=False)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)

    def validate(self, attrs):
        """Validate date range."""
        date_from = attrs.get('date_from')
        date_to = attrs.get('date_to')

        if date_from and date_to:
            if date_from > date_to:
                raise serializers.ValidationError({
                    'date_to': 'End date must be after start date'
                })

        return attrs


class TeamFilterSerializer(serializers.Serializer):
    """Validate the ``team`` query parameter for roster and tag listings."""

    team = serializers.UUIDField(required=False)


class SettleInputSerializer(serializers.Serializer):
    """
    Validate input for recording a settlement payment.

    Fields:
        from (UUID): Player paying
        to (UUID): Player receiving
        amount (Decimal): Amount paid
        date (date): Optional payment date, defaults to today
    """

    to = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    date = serializers.DateField(required=False)

    def get_fields(self):
        fields = super().get_fields()
        # 'from' is a keyword, so it can't be declared as an attribute
        fields['from'] = serializers.UUIDField()
        return fields


def _normalize_player_map(value):
    normalized = {}
    for key, amount in value.items():
        try:
            normalized[str(UUID(str(key)))] = amount
        except ValueError:
            raise serializers.ValidationError(f"'{key}' is not a valid player ID")
    return normalized


class ExpenseWriteSerializer(serializers.ModelSerializer):
    """
    Input for creating or fully replacing an expense.

    ``amount`` may be omitted when a tag is given; the tag's default amount
    is used instead. Business rules (payer, participants, split maps) are
    checked by the ledger service, not here.
    """

    amount = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    payer = serializers.PrimaryKeyRelatedField(
        queryset=Player.objects.all(), required=False, allow_null=True
    )
    participants = serializers.PrimaryKeyRelatedField(
        queryset=Player.objects.all(), many=True, required=False, allow_empty=True
    )
    weights = serializers.DictField(
        child=serializers.DecimalField(max_digits=10, decimal_places=2),
        required=False,
        allow_null=True,
    )
    custom_shares = serializers.DictField(
        child=serializers.DecimalField(max_digits=10, decimal_places=2),
        required=False,
        allow_null=True,
    )
    date = serializers.DateField(required=False)

    class Meta:
        model = Expense
        fields = [
            'team',
            'tag',
            'custom_name',
            'amount',
            'payer',
            'participants',
            'split_method',
            'kind',
            'weights',
            'custom_shares',
            'date',
        ]

    def validate_weights(self, value):
        return None if value is None else _normalize_player_map(value)

    def validate_custom_shares(self, value):
        return None if value is None else _normalize_player_map(value)

    def validate(self, attrs):
        """Check that everything referenced belongs to the same team."""
        team = attrs['team']

        tag = attrs.get('tag')
        if tag and tag.team_id != team.id:
            raise serializers.ValidationError({'tag': 'Tag belongs to another team'})

        payer = attrs.get('payer')
        if payer and payer.team_id != team.id:
            raise serializers.ValidationError({'payer': 'Payer is not on this team'})

        for player in attrs.get('participants', []):
            if player.team_id != team.id:
                raise serializers.ValidationError({
                    'participants': f'{player.name} is not on this team'
                })

        if attrs.get('amount') is None:
            if not tag:
                raise serializers.ValidationError({'amount': 'Amount is required without a tag'})
            attrs['amount'] = tag.default_amount

        return attrs


# =============================================================================
# Output Serializers
# =============================================================================

class TeamSerializer(serializers.ModelSerializer):
    """Serializer for teams."""

    class Meta:
        model = Team
        fields = ['id', 'name', 'created_at']
        read_only_fields = ['id', 'created_at']


class FixedTeamMixin:
    """Refuse to move an existing object to another team."""

    def validate_team(self, value):
        if self.instance is not None and value.id != self.instance.team_id:
            raise serializers.ValidationError('Team cannot be changed')
        return value


class PlayerSerializer(FixedTeamMixin, serializers.ModelSerializer):
    """
    Serializer for roster entries.

    A player's expenses are checked against their team's roster, so the
    team is fixed once the player exists.
    """

    class Meta:
        model = Player
        fields = ['id', 'team', 'name', 'created_at']
        read_only_fields = ['id', 'created_at']


class ExpenseTagSerializer(FixedTeamMixin, serializers.ModelSerializer):
    """Serializer for expense tags."""

    class Meta:
        model = ExpenseTag
        fields = ['id', 'team', 'name', 'default_amount']
        read_only_fields = ['id']


class ExpenseSerializer(serializers.ModelSerializer):
    """Serializer for stored expenses."""

    label = serializers.CharField(read_only=True)

    class Meta:
        model = Expense
        fields = [
            'id',
            'team',
            'tag',
            'custom_name',
            'label',
            'amount',
            'payer',
            'participants',
            'split_method',
            'kind',
            'weights',
            'custom_shares',
            'date',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class BalanceSerializer(serializers.Serializer):
    participant = serializers.UUIDField()
    name = serializers.CharField()
    balance = serializers.DecimalField(max_digits=12, decimal_places=2)


class TransferSerializer(serializers.Serializer):
    to = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)

    def get_fields(self):
        fields = super().get_fields()
        fields['from'] = serializers.UUIDField()
        return fields


class LedgerSummarySerializer(serializers.Serializer):
    """Balances plus suggested payments for a team."""

    currency = serializers.CharField()
    balances = BalanceSerializer(many=True)
    settlements = TransferSerializer(many=True)
