from django.urls import path
from . import views

app_name = 'budgets'

urlpatterns = [
    # Category
    path('categories/', views.category_list, name='category_list'),
    path('categories/create/', views.category_create, name='category_create'),
    path('categories/delete/', views.category_delete, name='category_delete'),
    path('categories/<int:pk>/update/', views.category_update, name='category_update'),

    # Expense
    path('expenses/', views.expense_list, name='expense_list'),
    path('expenses/create/', views.expense_create, name='expense_create'),
    path('expenses/delete/', views.expense_delete, name='expense_delete'),
    path('expenses/<int:pk>/update/', views.expense_update, name='expense_update'),

    # Excel
    path('expenses/export/', views.expense_export, name='expense_export'),
    path('expenses/download-template/', views.download_excel_template, name='download_excel_template'),
    path('expenses/upload-excel/', views.upload_expenses_excel, name='upload_expenses_excel'),

    # Budget
    path('', views.budget_list, name='budget_list'),
    path('create/', views.budget_create, name='budget_create'),
    path('delete/', views.budget_delete, name='budget_delete'),
    path('<int:pk>/update/', views.budget_update, name='budget_update'),
]
