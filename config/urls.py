"""Root URLconf: every MessMate endpoint lives under /api/."""
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework_simplejwt.views import TokenRefreshView

from config.views import health_check

api_patterns = [
    path('health/', health_check, name='health-check'),
    path('schema/', SpectacularAPIView.as_view(), name='api-schema'),
    path('docs/', SpectacularSwaggerView.as_view(url_name='api-schema'), name='api-docs'),

    # Accounts and tokens
    path('auth/', include('apps.accounts.urls')),
    path('auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    # Mess domain
    path('messes/', include('apps.messes.urls')),
    path('meals/', include('apps.meals.urls')),
    path('finance/', include('apps.finance.urls')),
    path('notices/', include('apps.notices.urls')),
    path('settlement/', include('apps.settlement.urls')),
]

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include(api_patterns)),
]

handler404 = 'config.views.error_404'
handler500 = 'config.views.error_500'
