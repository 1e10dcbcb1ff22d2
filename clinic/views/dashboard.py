from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.permissions import IsAdminRole
from clinic.services import appointments, dashboard, finance
from .common import limit_param


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard_statistics(request):
    return Response({'ok': True, 'data': dashboard.statistics()})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard_recent_appointments(request):
    return Response({'ok': True, 'data': appointments.recent_appointments(limit=limit_param(request))})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard_today_appointments(request):
    return Response({'ok': True, 'data': appointments.todays_appointments()})


@api_view(['GET'])
@permission_classes([IsAdminRole])
def dashboard_revenue(request):
    """Revenue per month of the current year (admin only)."""
    return Response({'ok': True, 'data': finance.monthly_revenue()})
