import logging

from django.contrib import messages
from django.db import IntegrityError

logger = logging.getLogger(__name__)


def save_form(request, form, label):
    """
    Save a valid ModelForm.

    Returns the instance, or None after flashing the error.
    """
    try:
        return form.save()
    except IntegrityError as e:
        logger.error(f"{label} save failed (integrity): {e}")
        messages.error(request, 'The data conflicts with existing records. Please check the input.')
    except Exception as e:
        logger.error(f"{label} save failed: {e}", exc_info=True)
        messages.error(request, 'An error occurred while saving. Please try again.')
    return None
