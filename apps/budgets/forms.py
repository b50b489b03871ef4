"""Category / budget / expense forms"""

from django import forms
from django.core.exceptions import ValidationError

from apps.projects.models import Project
from .models import Category, Budget, Expense, DEFAULT_CATEGORY_COLOR


class CategoryForm(forms.ModelForm):
    """Category create/update form"""

    class Meta:
        model = Category
        fields = ['name', 'color']
        widgets = {
            'name': forms.TextInput(attrs={
                'class': 'form-control',
                'placeholder': 'Category name (e.g. Consultancy)',
            }),
            'color': forms.TextInput(attrs={
                'class': 'form-control form-control-color',
                'type': 'color',
            }),
        }
        labels = {
            'name': 'Category name',
            'color': 'Colour',
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['color'].required = False

    def clean_color(self):
        color = self.cleaned_data.get('color')
        return color or DEFAULT_CATEGORY_COLOR


class BudgetForm(forms.ModelForm):
    """Budget create/update form"""

    class Meta:
        model = Budget
        fields = ['name', 'total_amount', 'project', 'category']
        widgets = {
            'name': forms.TextInput(attrs={
                'class': 'form-control',
                'placeholder': 'Budget name (e.g. Alpha Budget)',
            }),
            'total_amount': forms.NumberInput(attrs={
                'class': 'form-control',
                'step': '0.01',
                'min': '0',
            }),
            'project': forms.Select(attrs={'class': 'form-select'}),
            'category': forms.Select(attrs={'class': 'form-select'}),
        }
        labels = {
            'name': 'Budget name',
            'total_amount': 'Total amount (€)',
            'project': 'Project',
            'category': 'Category',
        }

    def clean_total_amount(self):
        total_amount = self.cleaned_data.get('total_amount')
        if total_amount is not None and total_amount < 0:
            raise ValidationError('Total amount cannot be negative.')
        return total_amount


class ExpenseForm(forms.ModelForm):
    """Expense create/update form"""

    date = forms.DateField(
        input_formats=['%Y-%m-%d'],
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}, format='%Y-%m-%d'),
        label='Date',
        error_messages={'invalid': 'Enter a date in the format YYYY-MM-DD.'},
    )

    class Meta:
        model = Expense
        fields = ['amount', 'description', 'date', 'budget', 'category']
        widgets = {
            'amount': forms.NumberInput(attrs={
                'class': 'form-control',
                'step': '0.01',
                'min': '0.01',
            }),
            'description': forms.Textarea(attrs={
                'class': 'form-control',
                'rows': 3,
                'placeholder': 'What was the money spent on?',
            }),
            'budget': forms.Select(attrs={'class': 'form-select'}),
            'category': forms.Select(attrs={'class': 'form-select'}),
        }
        labels = {
            'amount': 'Amount (€)',
            'description': 'Description',
            'budget': 'Budget',
            'category': 'Category',
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['description'].required = True
        self.fields['budget'].queryset = Budget.objects.select_related('project')

    def clean_amount(self):
        amount = self.cleaned_data.get('amount')
        if amount is not None and amount <= 0:
            raise ValidationError('Amount must be greater than zero.')
        return amount

    def clean_description(self):
        description = (self.cleaned_data.get('description') or '').strip()
        if not description:
            raise ValidationError('Description is required.')
        return description


class BudgetFilterForm(forms.Form):
    """Project filter on the budget list"""

    project = forms.ModelChoiceField(
        queryset=Project.objects.all(),
        required=False,
        empty_label='All projects',
        widget=forms.Select(attrs={'class': 'form-select'}),
    )


class ExpenseFilterForm(forms.Form):
    """Expense list / export filters"""

    budget = forms.ModelChoiceField(
        queryset=Budget.objects.all(),
        required=False,
        empty_label='All budgets',
        widget=forms.Select(attrs={'class': 'form-select'}),
    )
    category = forms.ModelChoiceField(
        queryset=Category.objects.all(),
        required=False,
        empty_label='All categories',
        widget=forms.Select(attrs={'class': 'form-select'}),
    )
    start_date = forms.DateField(
        required=False,
        input_formats=['%Y-%m-%d'],
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
    )
    end_date = forms.DateField(
        required=False,
        input_formats=['%Y-%m-%d'],
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
    )

    def clean(self):
        cleaned_data = super().clean()
        start_date = cleaned_data.get('start_date')
        end_date = cleaned_data.get('end_date')
        if start_date and end_date and start_date > end_date:
            raise ValidationError('Start date must be on or before the end date.')
        return cleaned_data

    def filter(self, queryset):
        """Apply the valid filters to an expense queryset"""
        if not self.is_valid():
            return queryset
        data = self.cleaned_data
        if data.get('budget'):
            queryset = queryset.filter(budget=data['budget'])
        if data.get('category'):
            queryset = queryset.for_category(data['category'])
        return queryset.by_date_range(data.get('start_date'), data.get('end_date'))


class ExcelUploadForm(forms.Form):
    """Expense spreadsheet upload"""

    excel_file = forms.FileField(
        label='Excel file (.xlsx)',
        widget=forms.ClearableFileInput(attrs={'class': 'form-control', 'accept': '.xlsx'}),
    )

    def clean_excel_file(self):
        excel_file = self.cleaned_data['excel_file']
        if not excel_file.name.lower().endswith('.xlsx'):
            raise ValidationError('Only .xlsx files can be uploaded.')
        if excel_file.size > 5 * 1024 * 1024:
            raise ValidationError('The file must be 5 MB or smaller.')
        return excel_file
