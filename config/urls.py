from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('', include('apps.dashboard.urls')),

    path('admin/', admin.site.urls),
    path('accounts/', include('apps.accounts.urls')),
    path('projects/', include('apps.projects.urls')),
    path('budgets/', include('apps.budgets.urls')),

    # JSON API
    path('api/', include('apps.projects.api_urls')),
    path('api/', include('apps.budgets.api_urls')),
    path('api/dashboard/', include('apps.dashboard.api_urls')),
]
