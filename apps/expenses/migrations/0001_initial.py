# Generated manually for expenses app

import uuid
from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Team',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'teams',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Player',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('team', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='players', to='expenses.team')),
            ],
            options={
                'db_table': 'players',
                'ordering': ['created_at', 'name'],
            },
        ),
        migrations.CreateModel(
            name='ExpenseTag',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100)),
                ('default_amount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10, validators=[MinValueValidator(Decimal('0.00'))])),
                ('team', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='expense_tags', to='expenses.team')),
            ],
            options={
                'db_table': 'expense_tags',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Expense',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('custom_name', models.CharField(blank=True, max_length=200)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=10, validators=[MinValueValidator(Decimal('0.01'))])),
                ('split_method', models.CharField(choices=[('equal', 'Equal'), ('weighted', 'By games played'), ('custom', 'Custom')], default='equal', max_length=20)),
                ('kind', models.CharField(choices=[('expense', 'Expense'), ('settlement', 'Settlement')], default='expense', max_length=20)),
                ('weights', models.JSONField(blank=True, null=True)),
                ('custom_shares', models.JSONField(blank=True, null=True)),
                ('date', models.DateField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('team', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='expenses', to='expenses.team')),
                ('tag', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='expenses', to='expenses.expensetag')),
                ('payer', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='expenses_paid', to='expenses.player')),
                ('participants', models.ManyToManyField(related_name='shared_expenses', to='expenses.player')),
            ],
            options={
                'db_table': 'expenses',
                'ordering': ['-date', '-created_at'],
                'indexes': [
                    models.Index(fields=['team', 'date'], name='expenses_team_id_2c1f0a_idx'),
                    models.Index(fields=['team', 'kind'], name='expenses_team_id_8b7e4d_idx'),
                ],
            },
        ),
    ]
