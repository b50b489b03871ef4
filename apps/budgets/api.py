"""
Categories / budgets / expenses JSON API

Row keys use the column names of the tables
(totalamount, projectid, categoryid, budgetid).
"""
import logging
import re

from django.http import JsonResponse

from apps.core.api import (
    ApiError, api_view, parse_json_body, require_keys, form_data_from_payload,
    validate_payload, bulk_delete, get_or_404,
)
from apps.core.utils import parse_id_list, parse_int
from apps.projects.models import Project
from .forms import CategoryForm, BudgetForm, ExpenseForm
from .models import Category, Budget, Expense

logger = logging.getLogger(__name__)

CATEGORY_FIELDS = {'name': 'name', 'color': 'color'}
CATEGORY_ERRORS = {
    'name': 'Invalid or missing category name',
    'color': 'Invalid colour (expected #rrggbb)',
}

BUDGET_FIELDS = {
    'name': 'name',
    'totalamount': 'total_amount',
    'projectid': 'project',
    'categoryid': 'category',
}
BUDGET_ERRORS = {
    'name': 'Invalid or missing budget name',
    'totalamount': 'Invalid or missing total amount',
    'projectid': 'Invalid or missing project ID',
    'categoryid': 'Invalid or missing category ID',
}

EXPENSE_FIELDS = {
    'amount': 'amount',
    'description': 'description',
    'date': 'date',
    'budgetid': 'budget',
    'categoryid': 'category',
}
EXPENSE_ERRORS = {
    'amount': 'Invalid or missing amount',
    'description': 'Invalid or missing description',
    'date': 'Invalid or missing date (expected format YYYY-MM-DD)',
    'budgetid': 'Invalid or missing budget ID',
    'categoryid': 'Invalid or missing category ID',
}

DATE_PATTERN = re.compile(r'[0-9]{4}-[0-9]{2}-[0-9]{2}')


def _check_expense_types(body):
    """JSON amount must be a number and date a YYYY-MM-DD string"""
    if 'amount' in body:
        amount = body['amount']
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            raise ApiError(EXPENSE_ERRORS['amount'])
    if 'date' in body:
        value = body['date']
        if not isinstance(value, str) or not DATE_PATTERN.fullmatch(value):
            raise ApiError(EXPENSE_ERRORS['date'])


# ============================================================
# Category
# ============================================================

@api_view(['GET', 'POST', 'DELETE'], errors={
    'GET': 'Failed to fetch categories',
    'POST': 'Failed to create category',
    'DELETE': 'Failed to delete categories',
})
def category_collection(request):
    if request.method == 'GET':
        categories = [c.to_dict() for c in Category.objects.order_by('pk')]
        return JsonResponse({'categories': categories})

    body = parse_json_body(request)

    if request.method == 'DELETE':
        return bulk_delete(Category, body)

    form = CategoryForm(data=form_data_from_payload(body, CATEGORY_FIELDS))
    validate_payload(form, CATEGORY_FIELDS, CATEGORY_ERRORS)
    category = form.save()
    logger.info(f"Category created via API: {category.name} (ID: {category.pk})")
    return JsonResponse({'message': 'Category created successfully', 'id': category.pk})


@api_view(['GET', 'PUT'], errors={
    'GET': 'Failed to fetch category',
    'PUT': 'Failed to update category',
})
def category_item(request, pk):
    category = get_or_404(Category, pk)

    if request.method == 'GET':
        return JsonResponse({'category': category.to_dict()})

    body = parse_json_body(request)
    require_keys(body, ['name'])
    form = CategoryForm(data=form_data_from_payload(body, CATEGORY_FIELDS, instance=category), instance=category)
    validate_payload(form, CATEGORY_FIELDS, CATEGORY_ERRORS)
    form.save()
    logger.info(f"Category updated via API: {category.name} (ID: {category.pk})")
    return JsonResponse({'message': 'Category updated successfully', 'changes': 1})


# ============================================================
# Budget
# ============================================================

@api_view(['GET', 'POST', 'DELETE'], errors={
    'GET': 'Failed to fetch budgets',
    'POST': 'Failed to create budget',
    'DELETE': 'Failed to delete budgets',
})
def budget_collection(request):
    if request.method == 'GET':
        budgets = [b.to_dict() for b in Budget.objects.order_by('pk')]
        return JsonResponse({'budgets': budgets})

    body = parse_json_body(request)

    if request.method == 'DELETE':
        return bulk_delete(Budget, body)

    form = BudgetForm(data=form_data_from_payload(body, BUDGET_FIELDS))
    validate_payload(form, BUDGET_FIELDS, BUDGET_ERRORS)
    budget = form.save()
    logger.info(f"Budget created via API: {budget.name} (ID: {budget.pk}), project={budget.project_id}")
    return JsonResponse({'message': 'Budget created successfully', 'id': budget.pk})


@api_view(['GET', 'PUT'], errors={
    'GET': 'Failed to fetch budget',
    'PUT': 'Failed to update budget',
})
def budget_item(request, pk):
    budget = get_or_404(Budget, pk)

    if request.method == 'GET':
        return JsonResponse({'budget': budget.to_dict()})

    body = parse_json_body(request)
    # categoryid may be left out; the other columns are always rewritten
    require_keys(body, ['name', 'totalamount', 'projectid'])
    form = BudgetForm(data=form_data_from_payload(body, BUDGET_FIELDS, instance=budget), instance=budget)
    validate_payload(form, BUDGET_FIELDS, BUDGET_ERRORS)
    form.save()
    logger.info(f"Budget updated via API: {budget.name} (ID: {budget.pk})")
    return JsonResponse({'message': 'Budget updated successfully', 'changes': 1})


@api_view(['GET'], errors={'GET': 'Failed to fetch budgets'})
def project_budgets(request, project_id):
    """Budgets belonging to one project"""
    pk = parse_int(project_id)
    if pk is None:
        raise ApiError('No Project ID provided')

    project = get_or_404(Project, pk)
    budgets = [b.to_dict() for b in Budget.objects.for_project(project).order_by('pk')]
    return JsonResponse({'budgets': budgets})


# ============================================================
# Expense
# ============================================================

@api_view(['GET', 'POST', 'DELETE'], errors={
    'GET': 'Failed to fetch expenses',
    'POST': 'Failed to create expense',
    'DELETE': 'Failed to delete expenses',
})
def expense_collection(request):
    if request.method == 'GET':
        expenses = [e.to_dict() for e in Expense.objects.order_by('pk')]
        return JsonResponse({'expenses': expenses})

    body = parse_json_body(request)

    if request.method == 'DELETE':
        return bulk_delete(Expense, body)

    _check_expense_types(body)
    form = ExpenseForm(data=form_data_from_payload(body, EXPENSE_FIELDS))
    validate_payload(form, EXPENSE_FIELDS, EXPENSE_ERRORS)
    expense = form.save()
    logger.info(f"Expense created via API: ID {expense.pk}, {expense.amount} (budget={expense.budget_id})")
    return JsonResponse({'message': 'Expense created successfully', 'id': expense.pk})


@api_view(['GET', 'PUT'], errors={
    'GET': 'Failed to fetch expense',
    'PUT': 'Failed to update expense',
})
def expense_item(request, pk):
    expense = get_or_404(Expense, pk)

    if request.method == 'GET':
        return JsonResponse({'expense': expense.to_dict()})

    body = parse_json_body(request)
    require_keys(body, ['amount', 'description', 'date', 'budgetid'])
    _check_expense_types(body)
    form = ExpenseForm(data=form_data_from_payload(body, EXPENSE_FIELDS, instance=expense), instance=expense)
    validate_payload(form, EXPENSE_FIELDS, EXPENSE_ERRORS)
    form.save()
    logger.info(f"Expense updated via API: ID {expense.pk}")
    return JsonResponse({'message': 'Expense updated successfully', 'changes': 1})


@api_view(['GET'], errors={'GET': 'Failed to fetch expenses'})
def budget_expenses(request):
    """GET ?ids=1,2,3 → expenses of those budgets"""
    raw_ids = request.GET.get('ids')
    if not raw_ids:
        raise ApiError('No budget IDs provided')

    ids = parse_id_list(part.strip() for part in raw_ids.split(','))
    if not ids:
        raise ApiError('No valid budget IDs provided')

    expenses = [e.to_dict() for e in Expense.objects.filter(budget_id__in=ids).order_by('pk')]
    return JsonResponse({'expenses': expenses})
