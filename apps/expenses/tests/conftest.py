import pytest
from decimal import Decimal
from datetime import date
from rest_framework.test import APIClient
from apps.expenses.models import Team, Player, ExpenseTag, Expense


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def treasurer(django_user_model):
    """Create and return the user managing the team's money."""
    return django_user_model.objects.create_user(
        username='treasurer',
        password='TestPass123!',
    )


@pytest.fixture
def auth_client(api_client, treasurer):
    """Return API client authenticated as the treasurer."""
    api_client.force_authenticate(user=treasurer)
    return api_client


@pytest.fixture
def team(db):
    """Create a team."""
    return Team.objects.create(name='Thursday Bowling')


@pytest.fixture
def other_team(db):
    """Create a second, unrelated team."""
    return Team.objects.create(name='Sunday Darts')


@pytest.fixture
def anna(team):
    return Player.objects.create(team=team, name='Anna')


@pytest.fixture
def ben(team, anna):
    return Player.objects.create(team=team, name='Ben')


@pytest.fixture
def cara(team, ben):
    return Player.objects.create(team=team, name='Cara')


@pytest.fixture
def roster(anna, ben, cara):
    """Anna, Ben and Cara, in roster order."""
    return [anna, ben, cara]


@pytest.fixture
def outsider(other_team):
    """A player on another team."""
    return Player.objects.create(team=other_team, name='Olga')


@pytest.fixture
def lane_tag(team):
    """Tag with a default amount."""
    return ExpenseTag.objects.create(
        team=team,
        name='Lane rental',
        default_amount=Decimal('90.00'),
    )


@pytest.fixture
def dinner_expense(team, roster):
    """Anna paid 90 for dinner, split equally between all three."""
    anna, ben, cara = roster
    expense = Expense.objects.create(
        team=team,
        custom_name='Dinner',
        amount=Decimal('90.00'),
        payer=anna,
        split_method='equal',
        date=date(2024, 3, 1),
    )
    expense.participants.set(roster)
    return expense
