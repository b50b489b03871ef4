import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from io import BytesIO

import openpyxl
from django.db import transaction

from .models import Budget, Category, Expense

logger = logging.getLogger(__name__)

EXPENSE_HEADERS = ['Date', 'Budget', 'Category', 'Amount', 'Description']


def to_decimal(value):
    """
    Convert a cell value to Decimal with two decimal places.

    Empty or non-numeric values give None.
    """
    if value is None or isinstance(value, bool) or str(value).strip() == '':
        return None

    try:
        # via str to avoid float artefacts
        decimal_value = Decimal(str(value).strip())
        if not decimal_value.is_finite():
            return None
        return decimal_value.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError, TypeError):
        return None


def to_date(value):
    """Excel date cell or 'YYYY-MM-DD' text → date (None when unreadable)"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None:
        return None
    try:
        return datetime.strptime(str(value).strip(), '%Y-%m-%d').date()
    except ValueError:
        return None


def process_expense_excel(excel_file):
    """
    Read expenses from an uploaded workbook and save them.

    Columns: Date, Budget, Category, Amount, Description (header on row 1).
    Every row is validated on its own; valid rows are bulk-created in one
    transaction, invalid rows are reported with their row number.
    """
    wb = openpyxl.load_workbook(excel_file, read_only=True, data_only=True)
    ws = wb.active

    success_list = []
    error_list = []
    error_details = []

    # ========================================
    # Preload lookups (no query per row)
    # ========================================
    budgets = {}
    for budget in Budget.objects.order_by('pk'):
        budgets.setdefault(budget.name.strip().lower(), budget)
    categories = {}
    for category in Category.objects.order_by('pk'):
        categories.setdefault(category.name.strip().lower(), category)

    logger.debug(f"Expense import lookups: {len(budgets)} budgets, {len(categories)} categories")

    def fail(row_number, raw_data, message):
        error_list.append(f"Row {row_number}: {message}")
        error_details.append({'row_number': row_number, 'raw_data': raw_data, 'error': message})

    for i, row in enumerate(ws.iter_rows(min_row=2, values_only=True), start=2):
        # skip blank rows
        if not row or not any(cell not in (None, '') for cell in row):
            continue

        row = tuple(row) + (None,) * (len(EXPENSE_HEADERS) - len(row))
        raw_date, budget_name, category_name, raw_amount, description = row[:len(EXPENSE_HEADERS)]
        raw_data = dict(zip(EXPENSE_HEADERS, row))

        expense_date = to_date(raw_date)
        if expense_date is None:
            fail(i, raw_data, f"Invalid date ({raw_date}), expected YYYY-MM-DD.")
            continue

        budget = budgets.get(str(budget_name or '').strip().lower())
        if budget is None:
            fail(i, raw_data, f"Budget '{budget_name or ''}' not found.")
            continue

        category = categories.get(str(category_name or '').strip().lower())
        if category is None:
            fail(i, raw_data, f"Category '{category_name or ''}' not found.")
            continue

        amount = to_decimal(raw_amount)
        if amount is None or amount <= 0:
            fail(i, raw_data, f"Amount must be a number greater than zero ({raw_amount}).")
            continue

        description = str(description or '').strip()
        if not description:
            fail(i, raw_data, "Description is empty.")
            continue

        success_list.append(Expense(
            amount=amount,
            description=description,
            date=expense_date,
            budget=budget,
            category=category,
        ))

    wb.close()

    with transaction.atomic():
        if success_list:
            Expense.objects.bulk_create(success_list)

    logger.info(f"Expense import finished: {len(success_list)} created, {len(error_list)} rejected")

    return {
        'success_count': len(success_list),
        'error_count': len(error_list),
        'errors': error_list,
        'error_details': error_details,
    }


def generate_expense_template():
    """Import template: header row plus guide rows"""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Expenses"

    ws.append(EXPENSE_HEADERS)

    # guide rows
    ws.append(['2025-01-02', 'Alpha Budget', 'Consultancy', 1500.23, 'Initial consultancy fee'])
    ws.append(['', '※ Budget and category must match existing names', '', '', ''])
    ws.append(['', '※ Amount greater than zero, up to two decimals', '', '', ''])

    output = BytesIO()
    wb.save(output)
    output.seek(0)
    return output


def export_expenses_to_excel(queryset):
    """Filtered expense list as a workbook"""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Expenses"

    ws.append(EXPENSE_HEADERS)

    for expense in queryset:
        ws.append([
            expense.date.strftime('%Y-%m-%d'),
            expense.budget.name,
            expense.category.name,
            # Decimal → float for Excel
            float(expense.amount),
            expense.description or '',
        ])

    output = BytesIO()
    wb.save(output)
    output.seek(0)
    return output
