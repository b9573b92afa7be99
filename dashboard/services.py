"""
services.py

Read-only aggregates behind the dashboard endpoints. Every call recomputes
from the database; day, week and month boundaries use the configured time zone.
"""
import logging
import platform
import time
from datetime import datetime, timedelta

import django
from django.apps import apps
from django.db import DatabaseError, connection
from django.utils import timezone

from admins.models import Admin
from contact.models import Contact
from core.stats import grouped_counts, months_ago, monthly_counts
from departments.models import Department, Designation
from id_cards.models import IdCard
from products.models import Product

from . import serializers

logger = logging.getLogger(__name__)


def tracked_querysets():
    """Counted collections keyed by their dashboard name; contacts have no active flag"""
    return {
        'products': Product.objects.active(),
        'contacts': Contact.objects.all(),
        'employees': IdCard.objects.active(),
        'departments': Department.objects.active(),
        'designations': Designation.objects.active(),
    }


def count_since(start, end=None):
    counts = {}
    for name, queryset in tracked_querysets().items():
        queryset = queryset.filter(created_at__gte=start)
        if end is not None:
            queryset = queryset.filter(created_at__lt=end)
        counts[name] = queryset.count()
    return counts


def start_of_day(day):
    return timezone.make_aware(datetime.combine(day, datetime.min.time()))


def week_start(day):
    """Most recent Sunday on or before ``day``"""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def overview():
    now = timezone.now()
    recent = count_since(now - timedelta(days=7))
    data = {'totalAdmins': Admin.objects.filter(is_active=True).count()}
    for name, queryset in tracked_querysets().items():
        data[f'total{name.title()}'] = queryset.count()
    for name, count in recent.items():
        data[f'recent{name.title()}'] = count
    data['pendingContacts'] = Contact.objects.filter(status=Contact.Status.NEW).count()
    data['recentLogins'] = Admin.objects.filter(last_login__gte=now - timedelta(hours=24)).count()
    return data


def charts():
    since = months_ago(timezone.now(), 12)
    employees = IdCard.objects.active()
    return {
        'productsByMonth': monthly_counts(Product.objects.active(), since),
        'contactsByMonth': monthly_counts(Contact.objects.all(), since),
        'employeesByMonth': monthly_counts(employees, since),
        'contactStatusDistribution': grouped_counts(Contact.objects.all(), 'status', 'status'),
        'employeeTypeDistribution': grouped_counts(employees, 'employee_type', 'employeeType'),
        'departmentDistribution': grouped_counts(
            employees, 'department__name', 'department',
            ordering=['-count', 'department__name'], limit=10,
        ),
        'designationDistribution': grouped_counts(
            employees, 'designation__title', 'designation',
            ordering=['-count', 'designation__title'], limit=10,
        ),
    }


def recent_activity(limit=10):
    products = Product.objects.active().select_related('created_by').order_by('-created_at', '-pk')[:limit]
    contacts = Contact.objects.order_by('-created_at', '-pk')[:limit]
    employees = (
        IdCard.objects.active()
        .select_related('created_by', 'department', 'designation')
        .order_by('-created_at', '-pk')[:limit]
    )
    departments = Department.objects.active().select_related('created_by').order_by('-created_at', '-pk')[:limit]
    designations = (
        Designation.objects.active()
        .select_related('created_by', 'department')
        .order_by('-created_at', '-pk')[:limit]
    )
    logins = Admin.objects.filter(is_active=True, last_login__isnull=False).order_by('-last_login', '-pk')[:limit]
    return {
        'recentProducts': serializers.RecentProductSerializer(products, many=True).data,
        'recentContacts': serializers.RecentContactSerializer(contacts, many=True).data,
        'recentEmployees': serializers.RecentEmployeeSerializer(employees, many=True).data,
        'recentDepartments': serializers.RecentDepartmentSerializer(departments, many=True).data,
        'recentDesignations': serializers.RecentDesignationSerializer(designations, many=True).data,
        'recentLogins': serializers.RecentLoginSerializer(logins, many=True).data,
    }


def database_status():
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
    except DatabaseError:
        logger.exception('Database health check failed')
        return 'disconnected'
    return 'connected'


def uptime():
    started_at = apps.get_app_config('dashboard').started_at
    return round(time.monotonic() - started_at, 3) if started_at is not None else 0


def system_health():
    db_status = database_status()
    storage = None
    if db_status == 'connected':
        storage = {name: queryset.count() for name, queryset in tracked_querysets().items()}
        storage['admins'] = Admin.objects.filter(is_active=True).count()
    return {
        'dbStatus': db_status,
        'storageInfo': storage,
        'performanceMetrics': {
            'uptime': uptime(),
            'pythonVersion': platform.python_version(),
            'djangoVersion': django.get_version(),
        },
    }


def quick_stats():
    today = timezone.localdate()
    today_start = start_of_day(today)
    return {
        'today': count_since(today_start, start_of_day(today + timedelta(days=1))),
        'thisWeek': count_since(start_of_day(week_start(today))),
        'thisMonth': count_since(start_of_day(today.replace(day=1))),
    }
