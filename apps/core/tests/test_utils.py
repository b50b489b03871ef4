# =============================================================================
# core/tests/test_utils.py - pagination / sorting / id parsing helpers
# =============================================================================

import pytest
from django.test import RequestFactory

from apps.core.forms import ListSearchForm
from apps.core.utils import get_page, apply_sort, next_sort_order, querystring_without_page, parse_id_list, parse_int
from apps.projects.models import Project


@pytest.fixture
def many_projects(db):
    """35 projects (3 pages of 15)"""
    return [Project.objects.create(name=f'Project {i:02d}') for i in range(35)]


@pytest.mark.django_db
class TestGetPage:

    def test_first_page_by_default(self, many_projects):
        page = get_page(Project.objects.order_by('pk'), None, 15)
        assert page.number == 1
        assert len(page) == 15

    @pytest.mark.parametrize('raw', ['abc', '0', '-3', ''])
    def test_invalid_page_falls_back_to_first(self, many_projects, raw):
        page = get_page(Project.objects.order_by('pk'), raw, 15)
        assert page.number == 1

    def test_page_past_the_end_gives_last_page(self, many_projects):
        page = get_page(Project.objects.order_by('pk'), '99', 15)
        assert page.number == 3
        assert len(page) == 5

    def test_empty_queryset(self, db):
        page = get_page(Project.objects.all(), '2', 15)
        assert page.number == 1
        assert list(page) == []


@pytest.mark.django_db
class TestApplySort:

    def test_ascending_and_descending(self, db):
        Project.objects.create(name='B')
        Project.objects.create(name='A')
        Project.objects.create(name='C')

        asc = [p.name for p in apply_sort(Project.objects.all(), 'name', 'asc')]
        desc = [p.name for p in apply_sort(Project.objects.all(), 'name', 'desc')]

        assert asc == ['A', 'B', 'C']
        assert desc == ['C', 'B', 'A']

    def test_unknown_order_is_ascending(self, db):
        Project.objects.create(name='B')
        Project.objects.create(name='A')

        names = [p.name for p in apply_sort(Project.objects.all(), 'name', 'sideways')]
        assert names == ['A', 'B']

    def test_next_sort_order(self):
        assert next_sort_order('asc') == 'desc'
        assert next_sort_order('desc') == 'asc'


class TestHelpers:

    def test_querystring_drops_page(self):
        request = RequestFactory().get('/', {'page': '3', 'search': 'alpha', 'order': 'desc'})
        qs = querystring_without_page(request)
        assert 'page=' not in qs
        assert 'search=alpha' in qs
        assert 'order=desc' in qs

    def test_parse_id_list(self):
        assert parse_id_list([1, '2', 'x', None, True, ' 3 ']) == [1, 2, 3]

    @pytest.mark.parametrize('raw, expected', [
        ('42', 42),
        (' 7 ', 7),
        ('', None),
        (None, None),
        ('abc', None),
        ('-3', None),
        ('\u00b2', None),
    ])
    def test_parse_int(self, raw, expected):
        assert parse_int(raw) == expected

    def test_search_form_defaults(self):
        form = ListSearchForm({'sort': 'password', 'order': ''}, sort_fields=('name', 'id'))
        assert form.get_params() == ('', 'name', 'asc')

    def test_search_form_trims_search(self):
        form = ListSearchForm({'search': '  alpha ', 'sort': 'id', 'order': 'desc'}, sort_fields=('name', 'id'))
        assert form.get_params() == ('alpha', 'id', 'desc')
