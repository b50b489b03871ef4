"""Project / manager forms"""

from django import forms

from .models import Project, Manager


class ProjectForm(forms.ModelForm):
    """Project create/update form"""

    class Meta:
        model = Project
        fields = ['name']
        widgets = {
            'name': forms.TextInput(attrs={
                'class': 'form-control',
                'placeholder': 'Project name (e.g. Project Alpha)',
            }),
        }
        labels = {
            'name': 'Project name',
        }


class ManagerForm(forms.ModelForm):
    """Manager create/update form"""

    class Meta:
        model = Manager
        fields = ['name']
        widgets = {
            'name': forms.TextInput(attrs={
                'class': 'form-control',
                'placeholder': 'Full name (e.g. Alice Smith)',
            }),
        }
        labels = {
            'name': 'Manager name',
        }
