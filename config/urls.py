"""
URL configuration for Fleetbook.

All endpoints live under /api/. Each app ships its own urls module with an
app namespace (``users``, ``companies``, ``suppliers``, ``partners``,
``equipment``, ``workers``, ``customers``).
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework_simplejwt.views import TokenRefreshView

from config.views import health_check

urlpatterns = [
    # Health check
    path('api/health/', health_check, name='health-check'),

    # Admin
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='api-schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='api-schema'), name='api-docs'),

    # Authentication
    path('api/auth/', include('apps.accounts.urls')),
    path('api/auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    # API endpoints
    path('api/companies/', include('apps.companies.urls')),
    path('api/suppliers/', include('apps.suppliers.urls')),
    path('api/partners/', include('apps.partners.urls')),
    path('api/equipment/', include('apps.equipment.urls')),
    path('api/workers/', include('apps.workers.urls')),
    path('api/customers/', include('apps.customers.urls')),
]


# Custom error handlers
handler404 = 'config.views.error_404'
handler500 = 'config.views.error_500'
