from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'expenses'

router = DefaultRouter()
router.register(r'teams', views.TeamViewSet, basename='team')
router.register(r'players', views.PlayerViewSet, basename='player')
router.register(r'tags', views.ExpenseTagViewSet, basename='tag')
router.register(r'expenses', views.ExpenseViewSet, basename='expense')

urlpatterns = [
    # Team routes
    # GET    /api/teams/{id}/balances/     - Net balance per player
    # GET    /api/teams/{id}/settlements/  - Suggested payments
    # GET    /api/teams/{id}/summary/      - Balances and payments
    # POST   /api/teams/{id}/settle/       - Record a payment

    # Expense routes
    # GET    /api/expenses/                - List records (?team=&kind=)
    # POST   /api/expenses/                - Create record
    # PUT    /api/expenses/{id}/           - Replace record
    # DELETE /api/expenses/{id}/           - Delete record

    path('', include(router.urls)),
]
