import logging

from django.contrib.auth.decorators import login_required
from django.shortcuts import render

from apps.core.utils import get_page, querystring_without_page, parse_int
from apps.projects.models import Project
from .forms import AnalyticsFilterForm
from .utils import (
    projects_with_totals, budget_consumption, monthly_budget_chart,
    project_report, summary_cards,
)

logger = logging.getLogger(__name__)

TABS = ['overview', 'analytics', 'reports']
PROJECTS_PER_PAGE = 10


def _selected_project(request):
    """The project picked in the table (?project=<id>), or None"""
    project_id = parse_int(request.GET.get('project'))
    if project_id is None:
        return None
    return Project.objects.filter(pk=project_id).first()


@login_required
def home(request):
    """
    Dashboard with three tabs

    - overview: info cards, project table with totals, consumption chart
    - analytics: monthly budget vs. expenses for the selected project
    - reports: budgets and expenses of the selected project
    """
    tab = request.GET.get('tab')
    if tab not in TABS:
        tab = 'overview'

    page_obj = get_page(projects_with_totals(), request.GET.get('page'), PROJECTS_PER_PAGE)
    project = _selected_project(request)
    filter_form = AnalyticsFilterForm(request.GET or None)

    context = {
        'tab': tab,
        'tabs': TABS,
        'page_obj': page_obj,
        'querystring': querystring_without_page(request),
        'selected_project': project,
        'filter_form': filter_form,
        'cards': summary_cards(),
    }

    if project:
        context['consumption'] = budget_consumption(project)
        if tab == 'analytics':
            context['chart'] = monthly_budget_chart(project, **filter_form.get_filters())
        elif tab == 'reports':
            context['report'] = project_report(project)
        logger.debug(f"Dashboard {tab} for project {project.pk}")

    return render(request, 'dashboard/home.html', context)
