from django.urls import path
from . import api

urlpatterns = [
    path('project/', api.project_collection, name='api_project_collection'),
    path('project/<int:pk>/', api.project_item, name='api_project_item'),
    path('project/manager/<str:manager_id>/', api.project_manager, name='api_project_manager'),

    path('manager/', api.manager_collection, name='api_manager_collection'),
    path('manager/<int:pk>/', api.manager_item, name='api_manager_item'),
]
