from django.urls import path
from . import views

app_name = 'projects'

urlpatterns = [
    # Manager
    path('managers/', views.manager_list, name='manager_list'),
    path('managers/create/', views.manager_create, name='manager_create'),
    path('managers/delete/', views.manager_delete, name='manager_delete'),
    path('managers/<int:pk>/update/', views.manager_update, name='manager_update'),

    # Project
    path('', views.project_list, name='project_list'),
    path('create/', views.project_create, name='project_create'),
    path('delete/', views.project_delete, name='project_delete'),
    path('<int:pk>/update/', views.project_update, name='project_update'),
]
