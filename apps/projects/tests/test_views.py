# =============================================================================
# projects/tests/test_views.py - project / manager pages
# =============================================================================

import pytest
from django.contrib.messages import get_messages
from django.db import IntegrityError
from django.urls import reverse

from apps.projects.forms import ProjectForm, ManagerForm
from apps.projects.models import Project, Manager


@pytest.mark.django_db
class TestProjectListView:

    def test_requires_login(self, client):
        response = client.get(reverse('projects:project_list'))

        assert response.status_code == 302
        assert '/accounts/login/' in response.url

    def test_list_success(self, authenticated_client, project):
        response = authenticated_client.get(reverse('projects:project_list'))

        assert response.status_code == 200
        assert 'page_obj' in response.context
        assert 'search_form' in response.context
        assert project in response.context['page_obj']
        assert response.context['total_count'] == 1

    def test_search_by_name(self, authenticated_client, db):
        alpha = Project.objects.create(name='Project Alpha')
        beta = Project.objects.create(name='Project Beta')

        response = authenticated_client.get(reverse('projects:project_list'), {'search': 'alp'})

        projects = list(response.context['page_obj'])
        assert alpha in projects
        assert beta not in projects

    def test_sort_descending(self, authenticated_client, db):
        for name in ['B', 'A', 'C']:
            Project.objects.create(name=name)

        response = authenticated_client.get(reverse('projects:project_list'), {'sort': 'name', 'order': 'desc'})

        assert [p.name for p in response.context['page_obj']] == ['C', 'B', 'A']
        assert response.context['next_order'] == 'asc'

    def test_fifteen_per_page(self, authenticated_client, db):
        for i in range(20):
            Project.objects.create(name=f'Project {i:02d}')

        response = authenticated_client.get(reverse('projects:project_list'), {'page': 2})

        assert response.context['page_obj'].number == 2
        assert len(response.context['page_obj']) == 5


@pytest.mark.django_db
class TestProjectCreateUpdate:

    def test_create_get(self, authenticated_client):
        response = authenticated_client.get(reverse('projects:project_create'))

        assert response.status_code == 200
        assert response.context['title'] == 'New project'
        assert response.context['submit_text'] == 'Create'

    def test_create_post(self, authenticated_client):
        response = authenticated_client.post(reverse('projects:project_create'), {'name': 'Project Nova'})

        assert response.status_code == 302
        assert Project.objects.filter(name='Project Nova').exists()

    def test_create_blank_name(self, authenticated_client):
        response = authenticated_client.post(reverse('projects:project_create'), {'name': '   '})

        assert response.status_code == 200
        assert response.context['form'].errors
        assert Project.objects.count() == 0

    def test_update(self, authenticated_client, project):
        url = reverse('projects:project_update', args=[project.pk])
        response = authenticated_client.post(url, {'name': 'Project Omega'})

        assert response.status_code == 302
        project.refresh_from_db()
        assert project.name == 'Project Omega'

    def test_update_missing_project(self, authenticated_client):
        response = authenticated_client.get(reverse('projects:project_update', args=[9999]))
        assert response.status_code == 404

    def test_create_integrity_error_rerenders_form(self, authenticated_client, monkeypatch):
        def fail_save(self, commit=True):
            raise IntegrityError('UNIQUE constraint failed')

        monkeypatch.setattr(ProjectForm, 'save', fail_save)

        response = authenticated_client.post(reverse('projects:project_create'), {'name': 'Project Nova'})

        assert response.status_code == 200
        messages = [str(m) for m in get_messages(response.wsgi_request)]
        assert any('conflicts with existing records' in m for m in messages)
        assert not Project.objects.exists()

    def test_manager_update_integrity_error_rerenders_form(self, authenticated_client, manager, monkeypatch):
        def fail_save(self, commit=True):
            raise IntegrityError('UNIQUE constraint failed')

        monkeypatch.setattr(ManagerForm, 'save', fail_save)

        url = reverse('projects:manager_update', args=[manager.pk])
        response = authenticated_client.post(url, {'name': 'Alice Jones'})

        assert response.status_code == 200
        manager.refresh_from_db()
        assert manager.name == 'Alice Smith'


@pytest.mark.django_db
class TestProjectDelete:

    def test_bulk_delete(self, authenticated_client, db):
        first = Project.objects.create(name='One')
        second = Project.objects.create(name='Two')
        keep = Project.objects.create(name='Three')

        response = authenticated_client.post(
            reverse('projects:project_delete'), {'ids': [first.pk, second.pk]},
        )

        assert response.status_code == 302
        assert list(Project.objects.all()) == [keep]

    def test_delete_without_selection(self, authenticated_client, project):
        response = authenticated_client.post(reverse('projects:project_delete'), {})

        messages = [str(m) for m in get_messages(response.wsgi_request)]
        assert any('Select at least one' in m for m in messages)
        assert Project.objects.count() == 1

    def test_project_with_budget_is_protected(self, authenticated_client, project, budget):
        response = authenticated_client.post(reverse('projects:project_delete'), {'ids': [project.pk]})

        messages = [str(m) for m in get_messages(response.wsgi_request)]
        assert any('cannot be deleted' in m for m in messages)
        assert Project.objects.filter(pk=project.pk).exists()

    def test_get_does_not_delete(self, authenticated_client, project):
        response = authenticated_client.get(reverse('projects:project_delete'), {'ids': [project.pk]})

        assert response.status_code == 302
        assert Project.objects.filter(pk=project.pk).exists()


@pytest.mark.django_db
class TestManagerViews:

    def test_list_and_search_by_id(self, authenticated_client, manager):
        other = Manager.objects.create(name='Bob Jones')

        response = authenticated_client.get(reverse('projects:manager_list'), {'search': str(manager.pk)})

        managers = list(response.context['page_obj'])
        assert manager in managers
        assert other not in managers

    def test_create_update_delete(self, authenticated_client):
        authenticated_client.post(reverse('projects:manager_create'), {'name': 'Carol White'})
        manager = Manager.objects.get(name='Carol White')

        authenticated_client.post(reverse('projects:manager_update', args=[manager.pk]), {'name': 'Carol Black'})
        manager.refresh_from_db()
        assert manager.name == 'Carol Black'

        authenticated_client.post(reverse('projects:manager_delete'), {'ids': [manager.pk]})
        assert not Manager.objects.exists()
