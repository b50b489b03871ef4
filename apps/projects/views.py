import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db.models import ProtectedError
from django.shortcuts import render, redirect, get_object_or_404

from apps.core.utils import get_page, apply_sort, next_sort_order, querystring_without_page, parse_id_list, parse_int
from apps.core.views import save_form
from apps.core.forms import ListSearchForm
from .forms import ProjectForm, ManagerForm
from .models import Project, Manager

logger = logging.getLogger(__name__)

PER_PAGE = 15


# =============================================================================
# Project views
# =============================================================================

@login_required
def project_list(request):
    """
    Project list

    - search by name (case-insensitive)
    - sort by id / name, ascending or descending
    - 15 per page, checkbox bulk delete
    """
    search_form = ListSearchForm(request.GET, sort_fields=('name', 'id'))
    search, sort, order = search_form.get_params()

    projects = Project.objects.all()
    if search:
        projects = projects.filter(name__icontains=search)
    projects = apply_sort(projects, sort, order)

    context = {
        'page_obj': get_page(projects, request.GET.get('page'), PER_PAGE),
        'search_form': search_form,
        'sort': sort,
        'order': order,
        'next_order': next_sort_order(order),
        'querystring': querystring_without_page(request),
        'total_count': Project.objects.count(),
    }
    return render(request, 'projects/project_list.html', context)


@login_required
def project_create(request):
    """Create a project"""
    if request.method == 'POST':
        form = ProjectForm(request.POST)
        if form.is_valid():
            project = save_form(request, form, 'Project')
            if project:
                logger.info(f"Project created: {project.name} (ID: {project.pk}) by {request.user.username}")
                messages.success(request, f'Project "{project.name}" was created.')
                return redirect('projects:project_list')
        else:
            messages.error(request, 'Please check the highlighted fields.')
    else:
        form = ProjectForm()

    return render(request, 'projects/form.html', {
        'form': form,
        'title': 'New project',
        'submit_text': 'Create',
        'cancel_url': 'projects:project_list',
    })


@login_required
def project_update(request, pk):
    """Rename a project"""
    project = get_object_or_404(Project, pk=pk)

    if request.method == 'POST':
        form = ProjectForm(request.POST, instance=project)
        if form.is_valid():
            if save_form(request, form, 'Project'):
                logger.info(f"Project updated: {project.name} (ID: {project.pk})")
                messages.success(request, f'Project "{project.name}" was updated.')
                return redirect('projects:project_list')
        else:
            messages.error(request, 'Please check the highlighted fields.')
    else:
        form = ProjectForm(instance=project)

    return render(request, 'projects/form.html', {
        'form': form,
        'object': project,
        'title': 'Edit project',
        'submit_text': 'Save',
        'cancel_url': 'projects:project_list',
    })


@login_required
def project_delete(request):
    """
    Bulk delete the checked projects (POST ids)

    Projects that still have budgets are protected; nothing is deleted then.
    """
    if request.method != 'POST':
        return redirect('projects:project_list')

    ids = parse_id_list(request.POST.getlist('ids'))
    if not ids:
        messages.warning(request, 'Select at least one project to delete.')
        return redirect('projects:project_list')

    try:
        deleted, _ = Project.objects.filter(pk__in=ids).delete()
        logger.info(f"Projects deleted: {deleted} (ids={ids})")
        messages.success(request, f'{deleted} project(s) deleted.')
    except ProtectedError as e:
        logger.warning(f"Project delete blocked: ids={ids}, budgets={len(e.protected_objects)}")
        messages.error(request, 'Projects that still have budgets cannot be deleted. Delete their budgets first.')

    return redirect('projects:project_list')


# =============================================================================
# Manager views
# =============================================================================

@login_required
def manager_list(request):
    """Manager list (search by name, sort by id / name)"""
    search_form = ListSearchForm(request.GET, sort_fields=('name', 'id'))
    search, sort, order = search_form.get_params()

    managers = Manager.objects.all()
    if search:
        managers = managers.filter(name__icontains=search)
        search_id = parse_int(search)
        if search_id is not None:
            managers = managers | Manager.objects.filter(pk=search_id)
    managers = apply_sort(managers, sort, order)

    context = {
        'page_obj': get_page(managers, request.GET.get('page'), PER_PAGE),
        'search_form': search_form,
        'sort': sort,
        'order': order,
        'next_order': next_sort_order(order),
        'querystring': querystring_without_page(request),
        'total_count': Manager.objects.count(),
    }
    return render(request, 'projects/manager_list.html', context)


@login_required
def manager_create(request):
    if request.method == 'POST':
        form = ManagerForm(request.POST)
        if form.is_valid():
            manager = save_form(request, form, 'Manager')
            if manager:
                logger.info(f"Manager created: {manager.name} (ID: {manager.pk}) by {request.user.username}")
                messages.success(request, f'Manager "{manager.name}" was created.')
                return redirect('projects:manager_list')
        else:
            messages.error(request, 'Please check the highlighted fields.')
    else:
        form = ManagerForm()

    return render(request, 'projects/form.html', {
        'form': form,
        'title': 'New manager',
        'submit_text': 'Create',
        'cancel_url': 'projects:manager_list',
    })


@login_required
def manager_update(request, pk):
    manager = get_object_or_404(Manager, pk=pk)

    if request.method == 'POST':
        form = ManagerForm(request.POST, instance=manager)
        if form.is_valid():
            if save_form(request, form, 'Manager'):
                logger.info(f"Manager updated: {manager.name} (ID: {manager.pk})")
                messages.success(request, f'Manager "{manager.name}" was updated.')
                return redirect('projects:manager_list')
        else:
            messages.error(request, 'Please check the highlighted fields.')
    else:
        form = ManagerForm(instance=manager)

    return render(request, 'projects/form.html', {
        'form': form,
        'object': manager,
        'title': 'Edit manager',
        'submit_text': 'Save',
        'cancel_url': 'projects:manager_list',
    })


@login_required
def manager_delete(request):
    """Bulk delete the checked managers (POST ids)"""
    if request.method != 'POST':
        return redirect('projects:manager_list')

    ids = parse_id_list(request.POST.getlist('ids'))
    if not ids:
        messages.warning(request, 'Select at least one manager to delete.')
        return redirect('projects:manager_list')

    deleted, _ = Manager.objects.filter(pk__in=ids).delete()
    logger.info(f"Managers deleted: {deleted} (ids={ids})")
    messages.success(request, f'{deleted} manager(s) deleted.')
    return redirect('projects:manager_list')
