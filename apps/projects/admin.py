from django.contrib import admin
from django.db.models import Count

from .models import Project, Manager
from apps.budgets.models import Budget


class BudgetInline(admin.TabularInline):
    model = Budget
    extra = 0
    fields = ['name', 'total_amount', 'category']
    show_change_link = True


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'get_budget_count', 'created_at']
    search_fields = ['name']
    inlines = [BudgetInline]

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.annotate(budget_count=Count('budgets'))

    @admin.display(description='Budgets', ordering='budget_count')
    def get_budget_count(self, obj):
        return obj.budget_count


@admin.register(Manager)
class ManagerAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'created_at']
    search_fields = ['name']
