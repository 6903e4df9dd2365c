"""
URL Configuration for the Report Export API.

All endpoints are under /api/report/.
"""
from django.urls import path
from . import views_api

urlpatterns = [
    path('export', views_api.api_report_export, name='api-report-export'),
    path('export-single', views_api.api_report_export_single, name='api-report-export-single'),
    path('types', views_api.api_report_types, name='api-report-types'),
    path('schema', views_api.api_report_schema, name='api-report-schema'),
]
