from django.contrib import admin
from django.utils.html import format_html

from .models import Category, Budget, Expense


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'get_color_display', 'created_at']
    search_fields = ['name']

    @admin.display(description='Colour')
    def get_color_display(self, obj):
        return format_html(
            '<span style="display:inline-block;width:12px;height:12px;background:{};"></span> {}',
            obj.color, obj.color,
        )


class ExpenseInline(admin.TabularInline):
    model = Expense
    extra = 0
    fields = ['date', 'amount', 'category', 'description']
    show_change_link = True


@admin.register(Budget)
class BudgetAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'get_amount_display', 'get_remaining_display', 'project', 'category']
    list_filter = ['category', 'project']
    search_fields = ['name', 'project__name', 'category__name']
    list_select_related = ['project', 'category']
    inlines = [ExpenseInline]

    @admin.display(description='Total amount', ordering='total_amount')
    def get_amount_display(self, obj):
        return f"{obj.total_amount:,.2f} €"

    @admin.display(description='Remaining')
    def get_remaining_display(self, obj):
        return f"{obj.get_remaining():,.2f} €"


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    list_display = ['date', 'get_amount_display', 'budget', 'category', 'description']
    date_hierarchy = 'date'
    list_filter = ['category', 'budget__project']
    search_fields = ['description', 'budget__name', 'category__name']
    list_select_related = ['budget', 'category']

    @admin.display(description='Amount', ordering='amount')
    def get_amount_display(self, obj):
        return f"{obj.amount:,.2f} €"
