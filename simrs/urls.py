"""
URL configuration for the SIMRS backend project.

Includes the Django admin, the API routes of the hospital app, the
Prometheus exporter at ``/metrics`` and the OpenAPI documentation at
``/swagger/`` and ``/redoc/``.
"""
from django.contrib import admin
from django.urls import path, include

from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

api_info = openapi.Info(
    title="SIMRS API",
    default_version='v1',
    description="Hospital information system: registration, clinical records, pharmacy, laboratory, "
                "inpatient wards and billing.",
)

schema_view = get_schema_view(
    api_info,
    public=True,
    permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    path('admin/', admin.site.urls),
    path('', include('hospital.routers')),
    path('', include('django_prometheus.urls')),
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),
]
