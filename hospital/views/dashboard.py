"""
Dashboard endpoints.

Every response is served from the Django cache when warm; see
``hospital.services.dashboard`` for the figures themselves.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from hospital.services import dashboard
from hospital.storage import get_storage


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard_stats(request):
    storage = get_storage()
    return Response(dashboard.cached('stats', lambda: dashboard.dashboard_stats(storage)))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def recent_activities(request):
    storage = get_storage()
    return Response(dashboard.cached('recent-activities', lambda: dashboard.recent_activities(storage)))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def upcoming_appointments(request):
    storage = get_storage()
    return Response(dashboard.cached('upcoming-appointments', lambda: dashboard.upcoming_appointments_list(storage)))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def hospital_capacity(request):
    storage = get_storage()
    return Response(dashboard.cached('hospital-capacity', lambda: dashboard.hospital_capacity(storage)))
