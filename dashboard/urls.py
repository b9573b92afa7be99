from django.urls import re_path

from .views import (
    DashboardChartsView,
    DashboardOverviewView,
    QuickStatsView,
    RecentActivityView,
    SystemHealthView,
)

urlpatterns = [
    re_path(r'^dashboard/overview/?$', DashboardOverviewView.as_view(), name='dashboard-overview'),
    re_path(r'^dashboard/charts/?$', DashboardChartsView.as_view(), name='dashboard-charts'),
    re_path(r'^dashboard/recent-activity/?$', RecentActivityView.as_view(), name='dashboard-recent-activity'),
    re_path(r'^dashboard/system-health/?$', SystemHealthView.as_view(), name='dashboard-system-health'),
    re_path(r'^dashboard/quick-stats/?$', QuickStatsView.as_view(), name='dashboard-quick-stats'),
]
