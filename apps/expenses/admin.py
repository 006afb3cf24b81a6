# ==========================================
# apps/expenses/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html

from .models import Team, Player, ExpenseTag, Expense, RecordKindChoices
from .services.ledger import delete_player, delete_tag, player_in_use


class PlayerInline(admin.TabularInline):
    """Inline admin for the roster within a team."""
    model = Player
    extra = 0
    # Removal goes through PlayerAdmin, which refuses players still in use
    can_delete = False
    fields = ['name', 'created_at']
    readonly_fields = ['created_at']


class ExpenseTagInline(admin.TabularInline):
    """Inline admin for expense tags within a team."""
    model = ExpenseTag
    extra = 0
    fields = ['name', 'default_amount']


@admin.register(Team)
class TeamAdmin(admin.ModelAdmin):
    list_display = ['name', 'created_at']
    search_fields = ['name']
    inlines = [PlayerInline, ExpenseTagInline]


@admin.register(Player)
class PlayerAdmin(admin.ModelAdmin):
    list_display = ['name', 'team', 'created_at']
    list_filter = ['team']
    search_fields = ['name', 'team__name']

    def get_readonly_fields(self, request, obj=None):
        """Team is fixed once the player exists."""
        return ['team'] if obj else []

    def has_delete_permission(self, request, obj=None):
        """Players named in any expense can't be deleted."""
        if obj is not None and player_in_use(obj):
            return False
        return super().has_delete_permission(request, obj)

    def delete_model(self, request, obj):
        delete_player(player=obj)

    def delete_queryset(self, request, queryset):
        """Delete the selected players that no expense refers to."""
        skipped = []
        for player in queryset:
            if player_in_use(player):
                skipped.append(player.name)
            else:
                delete_player(player=player)
        if skipped:
            self.message_user(
                request,
                f"Kept {len(skipped)} player(s) still used in expenses: {', '.join(skipped)}",
            )


@admin.register(ExpenseTag)
class ExpenseTagAdmin(admin.ModelAdmin):
    list_display = ['name', 'team', 'default_amount']
    list_filter = ['team']
    search_fields = ['name']

    def get_readonly_fields(self, request, obj=None):
        return ['team'] if obj else []

    def delete_model(self, request, obj):
        delete_tag(tag=obj)

    def delete_queryset(self, request, queryset):
        """Delete tags one by one so their expenses keep a label."""
        for tag in queryset:
            delete_tag(tag=tag)


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    """
    Admin interface for expenses.

    Records are read-only here; they are created through the API so that
    ledger validation always runs.
    """

    list_display = [
        'label',
        'team',
        'amount',
        'payer',
        'split_method',
        'kind_badge',
        'date',
    ]
    list_filter = ['kind', 'split_method', 'team', 'date']
    search_fields = ['custom_name', 'tag__name', 'payer__name', 'team__name']
    date_hierarchy = 'date'
    ordering = ['-date', '-created_at']
    readonly_fields = [
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
        'created_at',
        'updated_at',
    ]

    def kind_badge(self, obj):
        """Display record kind as colored badge."""
        colors = {
            RecordKindChoices.EXPENSE: ('#E5C49A', '#2C1810'),
            RecordKindChoices.SETTLEMENT: ('#6B8E5E', 'white'),
        }
        bg, fg = colors.get(obj.kind, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_kind_display()
        )
    kind_badge.short_description = 'Kind'

    def has_add_permission(self, request):
        """Disable adding expenses here - they're created by the ledger service."""
        return False
