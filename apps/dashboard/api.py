"""Dashboard JSON: project totals and per-project analytics"""
from django.http import JsonResponse

from apps.core.api import ApiError, api_view, get_or_404
from apps.projects.models import Project
from .forms import AnalyticsFilterForm
from .utils import projects_with_totals, budget_consumption, monthly_budget_chart


@api_view(['GET'], errors={'GET': 'Failed to fetch projects'})
def project_totals(request):
    projects = [
        {
            'id': p.pk,
            'name': p.name,
            'budgetTotal': float(p.budget_total),
            'expenseTotal': float(p.expense_total),
        }
        for p in projects_with_totals()
    ]
    return JsonResponse({'projects': projects})


@api_view(['GET'], errors={'GET': 'Failed to fetch analytics'})
def project_analytics(request, project_id):
    """Consumption figures plus the monthly chart (?category=&start_date=&end_date=&year=)"""
    project = get_or_404(Project, project_id)

    filter_form = AnalyticsFilterForm(request.GET)
    if not filter_form.is_valid():
        raise ApiError('Invalid analytics filters', details=filter_form.errors.get_json_data())

    consumption = budget_consumption(project)
    chart = monthly_budget_chart(project, **filter_form.get_filters())

    return JsonResponse({
        'project': project.to_dict(),
        'consumption': {
            'totalBudget': float(consumption['total_budget']),
            'totalExpenses': float(consumption['total_expenses']),
            'percentageConsumed': consumption['percentage_consumed'],
            'remainingPercentage': consumption['remaining_percentage'],
            'level': consumption['level'],
        },
        'chart': [
            {
                'month': row['month'],
                'budget': float(row['budget']),
                'expenses': float(row['expenses']),
            }
            for row in chart['rows']
        ],
    })
