"""
Dashboard aggregation

Everything the overview / analytics / reports tabs show is computed here
from querysets, so the HTML page and the JSON endpoints agree.
"""
import calendar
from decimal import Decimal, ROUND_HALF_UP

from django.db.models import DecimalField, OuterRef, Subquery, Sum, Value
from django.db.models.functions import Coalesce, ExtractMonth
from django.urls import reverse

from apps.budgets.models import Budget, Category, Expense
from apps.projects.models import Project, Manager

ZERO = Decimal('0.00')
MONEY_FIELD = DecimalField(max_digits=15, decimal_places=2)

# consumption bands for the radial chart
LOW_THRESHOLD = 25
MEDIUM_THRESHOLD = 50


def _money_subquery(queryset, group_by, field):
    """Per-project sum as a scalar subquery (0 when there are no rows)"""
    totals = (
        queryset
        .order_by()
        .values(group_by)
        .annotate(total=Sum(field))
        .values('total')
    )
    return Coalesce(Subquery(totals, output_field=MONEY_FIELD), Value(ZERO), output_field=MONEY_FIELD)


def projects_with_totals():
    """
    Every project with `budget_total` and `expense_total`.

    Two independent subqueries, so budgets and expenses never multiply
    each other the way a double JOIN would.
    """
    return Project.objects.annotate(
        budget_total=_money_subquery(
            Budget.objects.filter(project=OuterRef('pk')), 'project', 'total_amount',
        ),
        expense_total=_money_subquery(
            Expense.objects.filter(budget__project=OuterRef('pk')), 'budget__project', 'amount',
        ),
    ).order_by('pk')


def consumption_level(percentage):
    if percentage < LOW_THRESHOLD:
        return 'low'
    if percentage < MEDIUM_THRESHOLD:
        return 'medium'
    return 'high'


def budget_consumption(project):
    """
    How much of a project's budget has been spent.

    Returns:
        dict with total_budget, total_expenses, percentage_consumed
        (0 when there is no budget), remaining_percentage
        (100 - consumed rounded half up) and level (low / medium / high).
    """
    total_budget = Budget.objects.for_project(project).total()
    total_expenses = Expense.objects.for_project(project).total()

    if total_budget > 0:
        percentage = total_expenses / total_budget * 100
    else:
        percentage = Decimal('0')

    remaining = 100 - int(percentage.quantize(Decimal('1'), rounding=ROUND_HALF_UP))

    return {
        'total_budget': total_budget,
        'total_expenses': total_expenses,
        'percentage_consumed': float(round(percentage, 2)),
        'remaining_percentage': remaining,
        # conic-gradient needs 0..100
        'chart_percentage': max(0, min(remaining, 100)),
        'level': consumption_level(percentage),
    }


def monthly_budget_chart(project, category=None, start_date=None, end_date=None, year=None):
    """
    Available budget vs. expenses for January..December.

    Budgets are those of `project` (and `category` when given). Expenses
    are the ones booked against those budgets, narrowed by category and
    the inclusive date range. They are grouped by calendar month; unless
    `year` is given, the same month of different years falls together.

    Walking the months in order, `expenses` is the month's sum and
    `budget` is the total budget minus everything spent so far, never
    below zero.
    """
    budgets = Budget.objects.for_project(project)
    if category:
        budgets = budgets.for_category(category)
    total_budget = budgets.total()

    expenses = Expense.objects.for_budgets(budgets)
    if category:
        expenses = expenses.for_category(category)
    expenses = expenses.by_date_range(start_date, end_date)
    if year:
        expenses = expenses.filter(date__year=year)

    monthly = (
        expenses
        .order_by()
        .annotate(month=ExtractMonth('date'))
        .values('month')
        .annotate(total=Sum('amount'))
    )
    by_month = {item['month']: item['total'] for item in monthly}

    rows = []
    cumulative = ZERO
    for month in range(1, 13):
        month_expenses = by_month.get(month) or ZERO
        cumulative += month_expenses
        rows.append({
            'month': calendar.month_name[month],
            'month_number': month,
            'budget': max(total_budget - cumulative, ZERO),
            'expenses': month_expenses,
        })

    # bar heights relative to the largest value
    peak = max([max(row['budget'], row['expenses']) for row in rows] + [ZERO])
    for row in rows:
        row['budget_pct'] = int(row['budget'] / peak * 100) if peak else 0
        row['expenses_pct'] = int(row['expenses'] / peak * 100) if peak else 0

    return {
        'total_budget': total_budget,
        'total_expenses': sum((row['expenses'] for row in rows), ZERO),
        'rows': rows,
    }


def project_report(project):
    """Budgets (with category) and expenses (with budget and category) of one project"""
    budgets = (
        Budget.objects.for_project(project)
        .select_related('category')
        .annotate(spent=Coalesce(Sum('expenses__amount'), Value(ZERO), output_field=MONEY_FIELD))
        .order_by('pk')
    )
    expenses = Expense.objects.for_project(project).with_relations().order_by('date', 'pk')

    return {
        'project': project,
        'budgets': budgets,
        'expenses': expenses,
        'total_budget': Budget.objects.for_project(project).total(),
        'total_expenses': expenses.total(),
    }


def summary_cards():
    """Info cards on the overview tab (each links to its list page)"""
    return [
        {'title': 'Projects', 'value': Project.objects.count(), 'url': reverse('projects:project_list')},
        {'title': 'Managers', 'value': Manager.objects.count(), 'url': reverse('projects:manager_list')},
        {'title': 'Budgets', 'value': Budget.objects.count(), 'url': reverse('budgets:budget_list')},
        {'title': 'Categories', 'value': Category.objects.count(), 'url': reverse('budgets:category_list')},
        {'title': 'Expenses', 'value': Expense.objects.count(), 'url': reverse('budgets:expense_list')},
        {'title': 'Total budget', 'value': Budget.objects.total(), 'url': reverse('budgets:budget_list'), 'is_money': True},
        {'title': 'Total expenses', 'value': Expense.objects.total(), 'url': reverse('budgets:expense_list'), 'is_money': True},
    ]
