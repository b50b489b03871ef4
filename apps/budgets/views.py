import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db.models import ProtectedError, Q
from django.http import HttpResponse
from django.shortcuts import render, redirect, get_object_or_404
from django.utils import timezone

from apps.core.forms import ListSearchForm
from apps.core.utils import get_page, apply_sort, next_sort_order, querystring_without_page, parse_id_list, parse_int
from apps.core.views import save_form
from .forms import (
    CategoryForm, BudgetForm, ExpenseForm,
    BudgetFilterForm, ExpenseFilterForm, ExcelUploadForm,
)
from .models import Category, Budget, Expense
from .utils import process_expense_excel, generate_expense_template, export_expenses_to_excel

logger = logging.getLogger(__name__)

PER_PAGE = 15
XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


def _list_context(request, queryset, search_form, sort, order, total_count):
    return {
        'page_obj': get_page(queryset, request.GET.get('page'), PER_PAGE),
        'search_form': search_form,
        'sort': sort,
        'order': order,
        'next_order': next_sort_order(order),
        'querystring': querystring_without_page(request),
        'total_count': total_count,
    }


def _bulk_delete(request, model, redirect_to, protected_message):
    """POST ids → delete; protected rows leave everything in place"""
    opts = model._meta
    if request.method != 'POST':
        return redirect(redirect_to)

    ids = parse_id_list(request.POST.getlist('ids'))
    if not ids:
        messages.warning(request, f'Select at least one {opts.verbose_name} to delete.')
        return redirect(redirect_to)

    try:
        _, per_model = model.objects.filter(pk__in=ids).delete()
        deleted = per_model.get(opts.label, 0)
        logger.info(f"{opts.verbose_name_plural.capitalize()} deleted: {deleted} (ids={ids})")
        messages.success(request, f'{deleted} {opts.verbose_name}(s) deleted.')
    except ProtectedError as e:
        logger.warning(f"{opts.verbose_name} delete blocked: ids={ids}, referenced by {len(e.protected_objects)}")
        messages.error(request, protected_message)

    return redirect(redirect_to)


# =============================================================================
# Category views
# =============================================================================

@login_required
def category_list(request):
    """Category list (search by name, colour swatch)"""
    search_form = ListSearchForm(request.GET, sort_fields=('name', 'id'))
    search, sort, order = search_form.get_params()

    categories = Category.objects.all()
    if search:
        categories = categories.filter(name__icontains=search)
    categories = apply_sort(categories, sort, order)

    context = _list_context(request, categories, search_form, sort, order, Category.objects.count())
    return render(request, 'budgets/category_list.html', context)


@login_required
def category_create(request):
    if request.method == 'POST':
        form = CategoryForm(request.POST)
        if form.is_valid():
            category = save_form(request, form, 'Category')
            if category:
                logger.info(f"Category created: {category.name} (ID: {category.pk}) by {request.user.username}")
                messages.success(request, f'Category "{category.name}" was created.')
                return redirect('budgets:category_list')
        else:
            messages.error(request, 'Please check the highlighted fields.')
    else:
        form = CategoryForm()

    return render(request, 'budgets/form.html', {
        'form': form,
        'title': 'New category',
        'submit_text': 'Create',
        'cancel_url': 'budgets:category_list',
    })


@login_required
def category_update(request, pk):
    category = get_object_or_404(Category, pk=pk)

    if request.method == 'POST':
        form = CategoryForm(request.POST, instance=category)
        if form.is_valid():
            if save_form(request, form, 'Category'):
                logger.info(f"Category updated: {category.name} (ID: {category.pk})")
                messages.success(request, f'Category "{category.name}" was updated.')
                return redirect('budgets:category_list')
        else:
            messages.error(request, 'Please check the highlighted fields.')
    else:
        form = CategoryForm(instance=category)

    return render(request, 'budgets/form.html', {
        'form': form,
        'object': category,
        'title': 'Edit category',
        'submit_text': 'Save',
        'cancel_url': 'budgets:category_list',
    })


@login_required
def category_delete(request):
    return _bulk_delete(
        request, Category, 'budgets:category_list',
        'Categories used by budgets or expenses cannot be deleted.',
    )


# =============================================================================
# Budget views
# =============================================================================

@login_required
def budget_list(request):
    """
    Budget list

    - search by budget, project or category name
    - filter by project
    - spent / remaining per budget
    """
    search_form = ListSearchForm(request.GET, sort_fields=('name', 'id', 'total_amount'))
    search, sort, order = search_form.get_params()
    filter_form = BudgetFilterForm(request.GET)

    budgets = Budget.objects.select_related('project', 'category')
    if filter_form.is_valid() and filter_form.cleaned_data.get('project'):
        budgets = budgets.for_project(filter_form.cleaned_data['project'])
    if search:
        budgets = budgets.filter(
            Q(name__icontains=search) |
            Q(project__name__icontains=search) |
            Q(category__name__icontains=search)
        )
    budgets = apply_sort(budgets, sort, order)

    context = _list_context(request, budgets, search_form, sort, order, Budget.objects.count())
    context['filter_form'] = filter_form
    return render(request, 'budgets/budget_list.html', context)


@login_required
def budget_create(request):
    if request.method == 'POST':
        form = BudgetForm(request.POST)
        if form.is_valid():
            budget = save_form(request, form, 'Budget')
            if budget:
                logger.info(
                    f"Budget created: {budget.name} (ID: {budget.pk}), "
                    f"project={budget.project_id}, amount={budget.total_amount}"
                )
                messages.success(request, f'Budget "{budget.name}" was created.')
                return redirect('budgets:budget_list')
        else:
            messages.error(request, 'Please check the highlighted fields.')
    else:
        initial = {}
        project_id = parse_int(request.GET.get('project'))
        if project_id is not None:
            initial['project'] = project_id
        form = BudgetForm(initial=initial)

    return render(request, 'budgets/form.html', {
        'form': form,
        'title': 'New budget',
        'submit_text': 'Create',
        'cancel_url': 'budgets:budget_list',
    })


@login_required
def budget_update(request, pk):
    budget = get_object_or_404(Budget, pk=pk)

    if request.method == 'POST':
        form = BudgetForm(request.POST, instance=budget)
        if form.is_valid():
            if save_form(request, form, 'Budget'):
                logger.info(f"Budget updated: {budget.name} (ID: {budget.pk})")
                messages.success(request, f'Budget "{budget.name}" was updated.')
                return redirect('budgets:budget_list')
        else:
            messages.error(request, 'Please check the highlighted fields.')
    else:
        form = BudgetForm(instance=budget)

    return render(request, 'budgets/form.html', {
        'form': form,
        'object': budget,
        'title': 'Edit budget',
        'submit_text': 'Save',
        'cancel_url': 'budgets:budget_list',
    })


@login_required
def budget_delete(request):
    return _bulk_delete(
        request, Budget, 'budgets:budget_list',
        'Budgets that still have expenses cannot be deleted. Delete their expenses first.',
    )


# =============================================================================
# Expense views
# =============================================================================

def _filtered_expenses(request):
    """Expenses matching the list page's search box and filters"""
    search_form = ListSearchForm(request.GET, sort_fields=('description', 'date', 'amount', 'id'))
    search, sort, order = search_form.get_params()
    filter_form = ExpenseFilterForm(request.GET)

    expenses = filter_form.filter(Expense.objects.with_relations())
    if search:
        expenses = expenses.filter(description__icontains=search)
    expenses = apply_sort(expenses, sort, order)
    return expenses, search_form, filter_form, sort, order


@login_required
def expense_list(request):
    """
    Expense list

    - search by description (case-insensitive)
    - sort by description / date / amount
    - filter by budget, category and date range
    """
    expenses, search_form, filter_form, sort, order = _filtered_expenses(request)

    context = _list_context(request, expenses, search_form, sort, order, Expense.objects.count())
    context.update({
        'filter_form': filter_form,
        'filtered_total': expenses.total(),
    })
    return render(request, 'budgets/expense_list.html', context)


@login_required
def expense_create(request):
    if request.method == 'POST':
        form = ExpenseForm(request.POST)
        if form.is_valid():
            expense = save_form(request, form, 'Expense')
            if expense:
                logger.info(
                    f"Expense created: ID {expense.pk}, {expense.amount} on {expense.date} "
                    f"(budget={expense.budget_id}) by {request.user.username}"
                )
                messages.success(request, f'Expense of {expense.amount:,.2f} € was recorded.')
                return redirect('budgets:expense_list')
        else:
            messages.error(request, 'Please check the highlighted fields.')
    else:
        form = ExpenseForm(initial={'date': timezone.localdate()})

    return render(request, 'budgets/form.html', {
        'form': form,
        'title': 'New expense',
        'submit_text': 'Create',
        'cancel_url': 'budgets:expense_list',
    })


@login_required
def expense_update(request, pk):
    expense = get_object_or_404(Expense, pk=pk)

    if request.method == 'POST':
        form = ExpenseForm(request.POST, instance=expense)
        if form.is_valid():
            if save_form(request, form, 'Expense'):
                logger.info(f"Expense updated: ID {expense.pk}")
                messages.success(request, 'Expense was updated.')
                return redirect('budgets:expense_list')
        else:
            messages.error(request, 'Please check the highlighted fields.')
    else:
        form = ExpenseForm(instance=expense)

    return render(request, 'budgets/form.html', {
        'form': form,
        'object': expense,
        'title': 'Edit expense',
        'submit_text': 'Save',
        'cancel_url': 'budgets:expense_list',
    })


@login_required
def expense_delete(request):
    return _bulk_delete(request, Expense, 'budgets:expense_list', 'Expenses could not be deleted.')


# =============================================================================
# Excel import / export
# =============================================================================

@login_required
def expense_export(request):
    """Current (filtered) expense list as .xlsx"""
    expenses, *_ = _filtered_expenses(request)
    excel_file = export_expenses_to_excel(expenses)
    timestamp = timezone.localtime().strftime('%Y%m%d_%H%M%S')

    response = HttpResponse(excel_file.read(), content_type=XLSX_CONTENT_TYPE)
    response['Content-Disposition'] = f'attachment; filename="expenses_{timestamp}.xlsx"'
    logger.info(f"Expense export by {request.user.username}")
    return response


@login_required
def download_excel_template(request):
    excel_file = generate_expense_template()

    response = HttpResponse(excel_file.read(), content_type=XLSX_CONTENT_TYPE)
    response['Content-Disposition'] = 'attachment; filename="expense_template.xlsx"'
    return response


@login_required
def upload_expenses_excel(request):
    """Import expenses from a spreadsheet; failed rows are listed on the page"""
    result = None

    if request.method == 'POST':
        form = ExcelUploadForm(request.POST, request.FILES)
        if form.is_valid():
            try:
                result = process_expense_excel(form.cleaned_data['excel_file'])
            except Exception as e:
                logger.error(f"Expense import failed: {e}", exc_info=True)
                messages.error(request, 'The file could not be read. Is it a valid .xlsx workbook?')
            else:
                if result['success_count']:
                    messages.success(request, f"{result['success_count']} expense(s) imported.")
                if not result['error_count']:
                    return redirect('budgets:expense_list')
                messages.warning(request, f"{result['error_count']} row(s) were skipped.")
        else:
            messages.error(request, 'Please choose a valid .xlsx file.')
    else:
        form = ExcelUploadForm()

    return render(request, 'budgets/excel_upload.html', {'form': form, 'result': result})
