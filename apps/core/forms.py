from django import forms


class ListSearchForm(forms.Form):
    """Search box + sort toggle shared by the list pages"""

    ORDER_CHOICES = [
        ('asc', 'Ascending'),
        ('desc', 'Descending'),
    ]

    search = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': 'Search...',
        }),
        label='Search',
    )
    sort = forms.CharField(required=False, widget=forms.HiddenInput)
    order = forms.ChoiceField(choices=ORDER_CHOICES, required=False, widget=forms.HiddenInput)

    def __init__(self, *args, sort_fields=('name',), **kwargs):
        super().__init__(*args, **kwargs)
        self.sort_fields = sort_fields

    def clean_sort(self):
        sort = self.cleaned_data.get('sort')
        return sort if sort in self.sort_fields else self.sort_fields[0]

    def clean_order(self):
        return self.cleaned_data.get('order') or 'asc'

    def get_params(self):
        """(search, sort, order), falling back to defaults when invalid"""
        if self.is_valid():
            data = self.cleaned_data
            return data.get('search', '').strip(), data['sort'], data['order']
        return '', self.sort_fields[0], 'asc'
