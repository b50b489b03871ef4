from django.urls import path
from . import api

urlpatterns = [
    path('projects/', api.project_totals, name='api_dashboard_projects'),
    path('analytics/<int:project_id>/', api.project_analytics, name='api_dashboard_analytics'),
]
