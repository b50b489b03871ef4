from django.urls import path
from . import api

urlpatterns = [
    path('category/', api.category_collection, name='api_category_collection'),
    path('category/<int:pk>/', api.category_item, name='api_category_item'),

    path('budget/', api.budget_collection, name='api_budget_collection'),
    path('budget/<int:pk>/', api.budget_item, name='api_budget_item'),
    path('budget/project/<str:project_id>/', api.project_budgets, name='api_project_budgets'),

    path('expense/', api.expense_collection, name='api_expense_collection'),
    path('expense/budgets/', api.budget_expenses, name='api_budget_expenses'),
    path('expense/<int:pk>/', api.expense_item, name='api_expense_item'),
]
