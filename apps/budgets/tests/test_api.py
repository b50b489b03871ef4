# =============================================================================
# budgets/tests/test_api.py - /api/category, /api/budget, /api/expense
# =============================================================================

import pytest
from datetime import date
from decimal import Decimal
from django.urls import reverse

from apps.budgets.models import Category, Budget, Expense
from apps.projects.models import Project


@pytest.mark.django_db
class TestCategoryApi:

    def test_list(self, authenticated_client, category):
        response = authenticated_client.get(reverse('api_category_collection'))

        assert response.json() == {'categories': [
            {'id': category.pk, 'name': 'Consultancy', 'color': '#22c55e'},
        ]}

    def test_create_with_default_color(self, send_json):
        response = send_json('post', reverse('api_category_collection'), {'name': 'Travel'})

        assert response.json()['message'] == 'Category created successfully'
        assert Category.objects.get(pk=response.json()['id']).color == '#6366f1'

    def test_create_invalid_color(self, send_json):
        response = send_json('post', reverse('api_category_collection'), {'name': 'Travel', 'color': 'red'})

        assert response.status_code == 400
        assert response.json()['error'] == 'Invalid colour (expected #rrggbb)'

    def test_create_missing_name(self, send_json):
        response = send_json('post', reverse('api_category_collection'), {'color': '#000000'})

        assert response.status_code == 400
        assert response.json()['error'] == 'Invalid or missing category name'

    def test_update_keeps_color_when_omitted(self, send_json, category):
        response = send_json('put', reverse('api_category_item', args=[category.pk]), {'name': 'Advisory'})

        assert response.json() == {'message': 'Category updated successfully', 'changes': 1}
        category.refresh_from_db()
        assert category.name == 'Advisory'
        assert category.color == '#22c55e'

    def test_update_requires_name(self, send_json, category):
        response = send_json('put', reverse('api_category_item', args=[category.pk]), {'color': '#000000'})

        assert response.status_code == 400
        assert response.json()['error'] == 'Missing required fields'

    def test_delete_in_use(self, send_json, category, budget):
        response = send_json('delete', reverse('api_category_collection'), {'ids': [category.pk]})

        assert response.status_code == 409

    def test_delete(self, send_json, db):
        category = Category.objects.create(name='Unused')

        response = send_json('delete', reverse('api_category_collection'), {'ids': [category.pk]})

        assert response.json() == {'message': '1 category(s) deleted', 'changes': 1}


@pytest.mark.django_db
class TestBudgetApi:

    def test_list(self, authenticated_client, budget):
        response = authenticated_client.get(reverse('api_budget_collection'))

        assert response.json() == {'budgets': [budget.to_dict()]}

    def test_create(self, send_json, project, category):
        response = send_json('post', reverse('api_budget_collection'), {
            'name': 'Beta Budget', 'totalamount': 10000, 'projectid': project.pk, 'categoryid': category.pk,
        })

        budget = Budget.objects.get(pk=response.json()['id'])
        assert response.json()['message'] == 'Budget created successfully'
        assert budget.total_amount == Decimal('10000.00')
        assert budget.project == project

    @pytest.mark.parametrize('field, value, message', [
        ('name', '', 'Invalid or missing budget name'),
        ('totalamount', 'lots', 'Invalid or missing total amount'),
        ('totalamount', -10, 'Invalid or missing total amount'),
        ('projectid', 9999, 'Invalid or missing project ID'),
        ('categoryid', None, 'Invalid or missing category ID'),
    ])
    def test_create_invalid(self, send_json, project, category, field, value, message):
        payload = {'name': 'Beta Budget', 'totalamount': 100, 'projectid': project.pk, 'categoryid': category.pk}
        payload[field] = value

        response = send_json('post', reverse('api_budget_collection'), payload)

        assert response.status_code == 400
        assert response.json()['error'] == message
        assert not Budget.objects.exists()

    def test_get_one(self, authenticated_client, budget):
        response = authenticated_client.get(reverse('api_budget_item', args=[budget.pk]))
        assert response.json() == {'budget': budget.to_dict()}

    def test_get_missing(self, authenticated_client):
        response = authenticated_client.get(reverse('api_budget_item', args=[9999]))

        assert response.status_code == 404
        assert response.json() == {'error': 'Budget not found'}

    def test_update_without_category(self, send_json, budget, category):
        other_project = Project.objects.create(name='Project Beta')

        response = send_json('put', reverse('api_budget_item', args=[budget.pk]), {
            'name': 'Moved Budget', 'totalamount': 75, 'projectid': other_project.pk,
        })

        assert response.json() == {'message': 'Budget updated successfully', 'changes': 1}
        budget.refresh_from_db()
        assert budget.name == 'Moved Budget'
        assert budget.total_amount == Decimal('75.00')
        assert budget.project == other_project
        assert budget.category == category

    def test_update_zero_total_allowed(self, send_json, budget, project):
        response = send_json('put', reverse('api_budget_item', args=[budget.pk]), {
            'name': 'Empty', 'totalamount': 0, 'projectid': project.pk,
        })

        assert response.status_code == 200
        budget.refresh_from_db()
        assert budget.total_amount == Decimal('0.00')

    def test_update_missing_fields(self, send_json, budget):
        response = send_json('put', reverse('api_budget_item', args=[budget.pk]), {'name': 'Only name'})

        assert response.status_code == 400
        assert response.json()['error'] == 'Missing required fields'

    def test_budgets_of_project(self, authenticated_client, budget, category):
        other_project = Project.objects.create(name='Project Beta')
        Budget.objects.create(name='Other', total_amount=Decimal('1'), project=other_project, category=category)

        response = authenticated_client.get(reverse('api_project_budgets', args=[str(budget.project_id)]))

        assert response.json() == {'budgets': [budget.to_dict()]}

    def test_budgets_of_project_bad_id(self, authenticated_client):
        response = authenticated_client.get(reverse('api_project_budgets', args=['abc']))
        assert response.status_code == 400

    def test_budgets_of_project_non_ascii_digit(self, authenticated_client):
        response = authenticated_client.get(reverse('api_project_budgets', args=['\u00b2']))

        assert response.status_code == 400
        assert response.json()['error'] == 'No Project ID provided'

    def test_delete_with_expenses(self, send_json, budget, expense):
        response = send_json('delete', reverse('api_budget_collection'), {'ids': [budget.pk]})

        assert response.status_code == 409
        assert Budget.objects.filter(pk=budget.pk).exists()


@pytest.mark.django_db
class TestExpenseApi:

    def _payload(self, budget, category, **overrides):
        payload = {
            'amount': 250.5,
            'description': 'Workshop',
            'date': '2025-03-01',
            'budgetid': budget.pk,
            'categoryid': category.pk,
        }
        payload.update(overrides)
        return payload

    def test_list(self, authenticated_client, expense):
        response = authenticated_client.get(reverse('api_expense_collection'))
        assert response.json() == {'expenses': [expense.to_dict()]}

    def test_create(self, send_json, budget, category):
        response = send_json('post', reverse('api_expense_collection'), self._payload(budget, category))

        expense = Expense.objects.get(pk=response.json()['id'])
        assert response.json()['message'] == 'Expense created successfully'
        assert expense.amount == Decimal('250.50')
        assert expense.date == date(2025, 3, 1)

    @pytest.mark.parametrize('field, value, message', [
        ('amount', 0, 'Invalid or missing amount'),
        ('amount', -5, 'Invalid or missing amount'),
        ('amount', 'ten', 'Invalid or missing amount'),
        ('amount', '12.5', 'Invalid or missing amount'),
        ('amount', True, 'Invalid or missing amount'),
        ('description', '  ', 'Invalid or missing description'),
        ('date', '01/03/2025', 'Invalid or missing date (expected format YYYY-MM-DD)'),
        ('date', '2025-1-5', 'Invalid or missing date (expected format YYYY-MM-DD)'),
        ('budgetid', 'x', 'Invalid or missing budget ID'),
        ('categoryid', 9999, 'Invalid or missing category ID'),
    ])
    def test_create_invalid(self, send_json, budget, category, field, value, message):
        response = send_json(
            'post', reverse('api_expense_collection'), self._payload(budget, category, **{field: value}),
        )

        assert response.status_code == 400
        assert response.json()['error'] == message
        assert not Expense.objects.exists()

    def test_get_one(self, authenticated_client, expense):
        response = authenticated_client.get(reverse('api_expense_item', args=[expense.pk]))
        assert response.json() == {'expense': expense.to_dict()}

    def test_update(self, send_json, expense, budget):
        response = send_json('put', reverse('api_expense_item', args=[expense.pk]), {
            'amount': 99.99, 'description': 'Revised', 'date': '2025-01-10', 'budgetid': budget.pk,
        })

        assert response.json() == {'message': 'Expense updated successfully', 'changes': 1}
        expense.refresh_from_db()
        assert expense.amount == Decimal('99.99')
        assert expense.description == 'Revised'

    def test_update_rejects_string_amount(self, send_json, expense, budget):
        response = send_json('put', reverse('api_expense_item', args=[expense.pk]), {
            'amount': '99.99', 'description': 'Revised', 'date': '2025-01-10', 'budgetid': budget.pk,
        })

        assert response.status_code == 400
        assert response.json()['error'] == 'Invalid or missing amount'
        expense.refresh_from_db()
        assert expense.description == 'Initial consultancy fee'

    def test_update_missing_fields(self, send_json, expense):
        response = send_json('put', reverse('api_expense_item', args=[expense.pk]), {'amount': 5})

        assert response.status_code == 400
        assert response.json()['error'] == 'Missing required fields'

    def test_bulk_delete(self, send_json, expense):
        response = send_json('delete', reverse('api_expense_collection'), {'ids': [expense.pk]})

        assert response.json() == {'message': '1 expense(s) deleted', 'changes': 1}

    def test_expenses_of_budgets(self, authenticated_client, expense, project, category):
        other_budget = Budget.objects.create(
            name='Other', total_amount=Decimal('10'), project=project, category=category,
        )
        Expense.objects.create(
            amount=Decimal('1'), description='Elsewhere', date=date(2025, 1, 1),
            budget=other_budget, category=category,
        )

        url = reverse('api_budget_expenses')
        response = authenticated_client.get(url, {'ids': f'{expense.budget_id},abc'})

        assert response.json() == {'expenses': [expense.to_dict()]}

    def test_expenses_of_budgets_without_ids(self, authenticated_client):
        response = authenticated_client.get(reverse('api_budget_expenses'))

        assert response.status_code == 400
        assert response.json() == {'error': 'No budget IDs provided'}

    def test_expenses_of_budgets_invalid_ids(self, authenticated_client):
        response = authenticated_client.get(reverse('api_budget_expenses'), {'ids': 'a,b'})

        assert response.status_code == 400
        assert response.json() == {'error': 'No valid budget IDs provided'}
