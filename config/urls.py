"""
URL configuration for the admin back-office API.

Every API route lives under /api/ and matches with or without a trailing
slash. Uploaded assets are served from /uploads/ while DEBUG is on.
"""
from django.contrib import admin
from django.urls import include, path
from django.conf import settings
from django.conf.urls.static import static
from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

schema_view = get_schema_view(
    openapi.Info(
        title="Admin Panel API",
        default_version='v1',
        description="Back-office API: admins, catalogue, contact inbox, employee ID cards and dashboards",
    ),
    public=True,
    permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    path('admin/', admin.site.urls),
    path("api/", include("admins.urls")),
    path("api/", include("departments.urls")),
    path("api/", include("products.urls")),
    path("api/", include("contact.urls")),
    path("api/", include("id_cards.urls")),
    path("api/", include("dashboard.urls")),
    path('swagger<format>/', schema_view.without_ui(cache_timeout=0), name='schema-json'),
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),
]

# Serve uploaded files in development
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)

handler404 = 'config.views.route_not_found'
handler500 = 'config.views.server_error'
