import logging

from django.contrib.auth.views import (
    LoginView as DjangoLoginView,
    LogoutView as DjangoLogoutView,
)
from django.urls import reverse_lazy

logger = logging.getLogger(__name__)


class UserLoginView(DjangoLoginView):
    """Sign in"""
    template_name = "accounts/login.html"
    redirect_authenticated_user = True
    next_page = reverse_lazy("dashboard:home")

    def get_form(self, form_class=None):
        form = super().get_form(form_class)
        for field in form.fields.values():
            field.widget.attrs['class'] = 'form-control'
        return form

    def form_valid(self, form):
        logger.info(f"User logged in: {form.get_user().username}")
        return super().form_valid(form)


class UserLogoutView(DjangoLogoutView):
    """Sign out (POST)"""
    next_page = reverse_lazy("accounts:login")
