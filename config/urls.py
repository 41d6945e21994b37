"""
URL configuration for the AirVoucher back-office.

Every app mounts its JSON API under /api/<app>/.
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework_simplejwt.views import TokenRefreshView

from config.views import health_check

urlpatterns = [
    # Health check (for Render)
    path('api/health/', health_check, name='health-check'),

    # Admin
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='api-schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='api-schema'), name='api-docs'),

    # Authentication
    path('api/auth/', include('apps.accounts.urls')),
    path('api/auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
    path('api/', include('apps.accounts.admin_urls')),

    # API endpoints
    path('api/', include('apps.retailers.urls')),
    path('api/vouchers/', include('apps.vouchers.urls')),
    path('api/commissions/', include('apps.commissions.urls')),
    path('api/finance/', include('apps.finance.urls')),
    path('api/', include('apps.sales.urls')),
]


# Custom error handlers
handler404 = 'config.views.error_404'
handler500 = 'config.views.error_500'
