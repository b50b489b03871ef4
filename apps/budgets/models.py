from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator, RegexValidator
from django.db import models
from django.db.models import Sum

from apps.core.models import NamedModel, TimeStampedModel
from apps.projects.models import Project

DEFAULT_CATEGORY_COLOR = '#6366f1'

hex_color_validator = RegexValidator(
    regex=r'^#[0-9a-fA-F]{6}$',
    message='Colour must be a hex value like #6366f1.',
)


class Category(NamedModel):
    """Budget / expense category (with a display colour)"""

    color = models.CharField(max_length=7, default=DEFAULT_CATEGORY_COLOR, validators=[hex_color_validator])

    class Meta(NamedModel.Meta):
        db_table = 'category'
        verbose_name = 'category'
        verbose_name_plural = 'categories'

    def to_dict(self):
        return {'id': self.pk, 'name': self.name, 'color': self.color}


class BudgetQuerySet(models.QuerySet):
    def for_project(self, project): return self.filter(project=project)
    def for_category(self, category): return self.filter(category=category)
    def total(self): return self.aggregate(total=Sum('total_amount'))['total'] or Decimal('0.00')


class Budget(NamedModel):
    """Amount allocated to a project for one category"""

    total_amount = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        db_column='totalamount',
        validators=[MinValueValidator(Decimal('0.00'))],
    )
    project = models.ForeignKey(Project, on_delete=models.PROTECT, related_name='budgets', db_column='projectid')
    category = models.ForeignKey(Category, on_delete=models.PROTECT, related_name='budgets', db_column='categoryid')

    objects = BudgetQuerySet.as_manager()

    class Meta(NamedModel.Meta):
        db_table = 'budget'
        verbose_name = 'budget'
        verbose_name_plural = 'budgets'
        indexes = [
            models.Index(fields=['project', 'category'], name='budget_project_category_idx'),
        ]
        constraints = [
            models.CheckConstraint(condition=models.Q(total_amount__gte=0), name='budget_total_amount_non_negative'),
        ]

    def to_dict(self):
        return {
            'id': self.pk,
            'name': self.name,
            'totalamount': float(self.total_amount),
            'projectid': self.project_id,
            'categoryid': self.category_id,
        }

    def get_spent(self):
        total = self.expenses.aggregate(total=Sum('amount'))['total']
        return total or Decimal('0.00')

    def get_remaining(self):
        return self.total_amount - self.get_spent()


class ExpenseQuerySet(models.QuerySet):
    """Expense helpers (filter chains used by the list page and dashboard)"""
    def for_budgets(self, budgets): return self.filter(budget__in=budgets)
    def for_project(self, project): return self.filter(budget__project=project)
    def for_category(self, category): return self.filter(category=category)
    def by_date_range(self, start_date=None, end_date=None):
        qs = self
        if start_date:
            qs = qs.filter(date__gte=start_date)
        if end_date:
            qs = qs.filter(date__lte=end_date)
        return qs
    def with_relations(self): return self.select_related('budget', 'category', 'budget__project')
    def total(self): return self.aggregate(total=Sum('amount'))['total'] or Decimal('0.00')


class Expense(TimeStampedModel):
    """Money spent against a budget"""

    amount = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))],
    )
    description = models.TextField(blank=True)
    date = models.DateField(db_index=True)
    budget = models.ForeignKey(Budget, on_delete=models.PROTECT, related_name='expenses', db_column='budgetid')
    category = models.ForeignKey(Category, on_delete=models.PROTECT, related_name='expenses', db_column='categoryid')

    objects = ExpenseQuerySet.as_manager()

    class Meta:
        db_table = 'expense'
        ordering = ['-date', '-pk']
        verbose_name = 'expense'
        verbose_name_plural = 'expenses'
        indexes = [
            models.Index(fields=['budget', 'date'], name='expense_budget_date_idx'),
            models.Index(fields=['category', 'date'], name='expense_category_date_idx'),
        ]
        constraints = [
            models.CheckConstraint(condition=models.Q(amount__gt=0), name='expense_amount_positive'),
        ]

    def __str__(self):
        return f"{self.amount:,.2f} € ({self.date:%Y-%m-%d})"

    def clean(self):
        self.description = (self.description or '').strip()
        if self.amount is not None and self.amount <= 0:
            raise ValidationError({'amount': 'Amount must be greater than zero.'})

    def to_dict(self):
        return {
            'id': self.pk,
            'amount': float(self.amount),
            'description': self.description,
            'date': self.date.isoformat(),
            'budgetid': self.budget_id,
            'categoryid': self.category_id,
        }
