# =============================================================================
# projects/models.py - projects and project managers
# =============================================================================

"""
Projects and managers

Both are flat name-only records. Budgets hang off projects
(apps.budgets.Budget.project); a project cannot be deleted while any
budget still points at it.
"""
from decimal import Decimal

from django.db.models import Sum

from apps.core.models import NamedModel


class Project(NamedModel):
    """Project that owns budgets"""

    class Meta(NamedModel.Meta):
        db_table = 'project'
        verbose_name = 'project'
        verbose_name_plural = 'projects'

    def to_dict(self):
        return {'id': self.pk, 'name': self.name}

    def get_budget_total(self):
        total = self.budgets.aggregate(total=Sum('total_amount'))['total']
        return total or Decimal('0.00')

    def get_expense_total(self):
        """Sum of the expenses booked against this project's budgets"""
        total = self.budgets.aggregate(total=Sum('expenses__amount'))['total']
        return total or Decimal('0.00')


class Manager(NamedModel):
    """Project manager"""

    class Meta(NamedModel.Meta):
        db_table = 'manager'
        verbose_name = 'manager'
        verbose_name_plural = 'managers'

    def to_dict(self):
        return {'id': self.pk, 'name': self.name}
