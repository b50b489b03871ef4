from django import forms
from django.core.exceptions import ValidationError

from apps.budgets.models import Category


class AnalyticsFilterForm(forms.Form):
    """Category / date filters of the analytics tab"""

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
        label='From',
    )
    end_date = forms.DateField(
        required=False,
        input_formats=['%Y-%m-%d'],
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
        label='To',
    )
    year = forms.IntegerField(
        required=False,
        min_value=2000,
        max_value=2100,
        widget=forms.NumberInput(attrs={'class': 'form-control', 'placeholder': 'All years'}),
    )

    def clean(self):
        cleaned_data = super().clean()
        start_date = cleaned_data.get('start_date')
        end_date = cleaned_data.get('end_date')
        if start_date and end_date and start_date > end_date:
            raise ValidationError('The start date must be on or before the end date.')
        return cleaned_data

    def get_filters(self):
        """Keyword arguments for monthly_budget_chart (empty when invalid)"""
        if not self.is_valid():
            return {}
        return {
            'category': self.cleaned_data.get('category'),
            'start_date': self.cleaned_data.get('start_date'),
            'end_date': self.cleaned_data.get('end_date'),
            'year': self.cleaned_data.get('year'),
        }
