from datetime import date
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.budgets.models import Category, Budget, Expense
from apps.projects.models import Project, Manager

PROJECT_NAMES = [
    'Alpha', 'Beta', 'Gamma', 'Delta', 'Epsilon', 'Zeta', 'Theta', 'Sigma',
    'Omega', 'Nova', 'Eclipse', 'Zenith', 'Horizon', 'Aurora', 'Titan',
    'Apex', 'Orbit', 'Fusion', 'Vertex', 'Radiant', 'Vanguard',
]

BUDGETS = [
    ('Alpha Budget', Decimal('50000.00')),
    ('Beta Budget', Decimal('10000.00')),
    ('Gamma Budget', Decimal('250.00')),
]

EXPENSES = [
    (Decimal('1500.23'), 'Initial consultancy fee', date(2025, 1, 2)),
    (Decimal('2000.12'), 'Initial consultancy fee', date(2025, 1, 2)),
]


class Command(BaseCommand):
    help = 'Insert the sample projects, manager, category, budgets and expenses'

    @transaction.atomic
    def handle(self, *args, **kwargs):
        created = 0

        projects = []
        for name in PROJECT_NAMES:
            project, created_flag = Project.objects.get_or_create(name=f'Project {name}')
            projects.append(project)
            created += created_flag

        _, created_flag = Manager.objects.get_or_create(name='Alice Smith')
        created += created_flag

        category, created_flag = Category.objects.get_or_create(name='Consultancy')
        created += created_flag

        budgets = []
        for name, total_amount in BUDGETS:
            budget, created_flag = Budget.objects.get_or_create(
                name=name,
                project=projects[0],
                defaults={'total_amount': total_amount, 'category': category},
            )
            budgets.append(budget)
            created += created_flag

        for amount, description, expense_date in EXPENSES:
            _, created_flag = Expense.objects.get_or_create(
                amount=amount,
                description=description,
                date=expense_date,
                budget=budgets[0],
                defaults={'category': category},
            )
            created += created_flag

        self.stdout.write(self.style.SUCCESS(f'Sample data ready: {created} row(s) created'))
