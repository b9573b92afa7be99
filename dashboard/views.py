import logging

from drf_yasg.utils import swagger_auto_schema
from rest_framework import permissions
from rest_framework.views import APIView

from core.listing import positive_int
from core.responses import success_response

from . import services

logger = logging.getLogger(__name__)


class DashboardOverviewView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(operation_description="Active totals, 7-day counts, pending contacts and recent logins.")
    def get(self, request):
        return success_response({'overview': services.overview()})


class DashboardChartsView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(operation_description="Monthly series over the last 12 months and distributions.")
    def get(self, request):
        return success_response(services.charts())


class RecentActivityView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(operation_description="Latest records of each kind; ?limit= (default 10).")
    def get(self, request):
        limit = positive_int(request.query_params.get('limit'), 10)
        return success_response(services.recent_activity(limit))


class SystemHealthView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(operation_description="Database status, stored record counts and runtime info.")
    def get(self, request):
        health = services.system_health()
        if health['dbStatus'] != 'connected':
            logger.warning('System health requested while the database is unreachable')
        return success_response(health)


class QuickStatsView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(operation_description="Records created today, this week (from Sunday) and this month.")
    def get(self, request):
        return success_response(services.quick_stats())
