"""
URL configuration for the bsreport project.
"""
from django.urls import include, path

urlpatterns = [
    path('api/report/', include('core.urls_api')),
]
