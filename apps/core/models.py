"""
Shared abstract models

- TimeStampedModel: created/updated timestamps
- NamedModel: required, trimmed name + timestamps
"""

from django.core.exceptions import ValidationError
from django.db import models


class TimeStampedModel(models.Model):
    """Tracks creation and last modification time"""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class NamedModel(TimeStampedModel):
    """Record identified by a required name (stored trimmed)"""

    name = models.CharField(max_length=100, db_index=True)

    class Meta:
        abstract = True
        ordering = ['name']

    def __str__(self):
        return self.name

    def clean(self):
        self.name = (self.name or '').strip()
        if not self.name:
            raise ValidationError({'name': 'Name is required.'})
