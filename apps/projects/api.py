"""
Projects / managers JSON API

Mirrors the /api/project and /api/manager route handlers:
collection GET/POST/DELETE, item GET/PUT.
"""
import logging

from django.http import JsonResponse

from apps.core.api import (
    ApiError, api_view, parse_json_body, form_data_from_payload,
    validate_payload, bulk_delete, get_or_404,
)
from apps.core.utils import parse_int
from .forms import ProjectForm, ManagerForm
from .models import Project, Manager

logger = logging.getLogger(__name__)

NAME_FIELDS = {'name': 'name'}


# ============================================================
# Project
# ============================================================

@api_view(['GET', 'POST', 'DELETE'], errors={
    'GET': 'Failed to fetch projects',
    'POST': 'Failed to create project',
    'DELETE': 'Failed to delete projects',
})
def project_collection(request):
    if request.method == 'GET':
        projects = [p.to_dict() for p in Project.objects.order_by('pk')]
        return JsonResponse({'projects': projects})

    body = parse_json_body(request)

    if request.method == 'DELETE':
        return bulk_delete(Project, body)

    form = ProjectForm(data=form_data_from_payload(body, NAME_FIELDS))
    validate_payload(form, NAME_FIELDS, {'name': 'Invalid or missing project name'})
    project = form.save()
    logger.info(f"Project created via API: {project.name} (ID: {project.pk})")
    return JsonResponse({'message': 'Project created successfully', 'id': project.pk})


@api_view(['GET', 'PUT'], errors={
    'GET': 'Failed to fetch project',
    'PUT': 'Failed to update project',
})
def project_item(request, pk):
    project = get_or_404(Project, pk)

    if request.method == 'GET':
        return JsonResponse({'project': project.to_dict()})

    body = parse_json_body(request)
    form = ProjectForm(data=form_data_from_payload(body, NAME_FIELDS), instance=project)
    validate_payload(form, NAME_FIELDS, {'name': 'Invalid or missing project name'})
    form.save()
    logger.info(f"Project updated via API: {project.name} (ID: {project.pk})")
    return JsonResponse({'message': 'Project updated successfully', 'changes': 1})


@api_view(['GET'], errors={'GET': 'Failed to fetch manager'})
def project_manager(request, manager_id):
    """Look up a manager by id for the project pages"""
    pk = parse_int(manager_id)
    if pk is None:
        raise ApiError('Invalid or missing Manager ID')

    manager = get_or_404(Manager, pk)
    return JsonResponse({'manager': manager.to_dict()})


# ============================================================
# Manager
# ============================================================

@api_view(['GET', 'POST', 'DELETE'], errors={
    'GET': 'Failed to fetch managers',
    'POST': 'Failed to create manager',
    'DELETE': 'Failed to delete managers',
})
def manager_collection(request):
    if request.method == 'GET':
        managers = [m.to_dict() for m in Manager.objects.order_by('pk')]
        return JsonResponse({'managers': managers})

    body = parse_json_body(request)

    if request.method == 'DELETE':
        return bulk_delete(Manager, body)

    form = ManagerForm(data=form_data_from_payload(body, NAME_FIELDS))
    validate_payload(form, NAME_FIELDS, {'name': 'Invalid or missing manager name'})
    manager = form.save()
    logger.info(f"Manager created via API: {manager.name} (ID: {manager.pk})")
    return JsonResponse({'message': 'Manager created successfully', 'id': manager.pk})


@api_view(['GET', 'PUT'], errors={
    'GET': 'Failed to fetch manager',
    'PUT': 'Failed to update manager',
})
def manager_item(request, pk):
    manager = get_or_404(Manager, pk)

    if request.method == 'GET':
        return JsonResponse({'manager': manager.to_dict()})

    body = parse_json_body(request)
    form = ManagerForm(data=form_data_from_payload(body, NAME_FIELDS), instance=manager)
    validate_payload(form, NAME_FIELDS, {'name': 'Invalid or missing manager name'})
    form.save()
    logger.info(f"Manager updated via API: {manager.name} (ID: {manager.pk})")
    return JsonResponse({'message': 'Manager updated successfully', 'changes': 1})
