from datetime import timedelta

from django.db import transaction
from django.utils import timezone
from rest_framework.decorators import action

from core.responses import success_response
from core.stats import grouped_counts
from core.views import ResourceViewSet

from .filters import IdCardFilter
from .models import IdCard
from .serializers import EmployeePictureSerializer, IdCardSerializer


def id_card_statistics():
    """Breakdowns over active ID cards"""
    active = IdCard.objects.active()
    since = timezone.localdate() - timedelta(days=30)
    total = active.count()
    return {
        'totalIdCards': total,
        'activeEmployees': total,
        'employeeTypeStats': grouped_counts(active, 'employee_type', 'employeeType'),
        'departmentStats': grouped_counts(
            active, 'department__name', 'department', ordering=['-count', 'department__name'],
        ),
        'bloodGroupStats': grouped_counts(active, 'blood_group', 'bloodGroup'),
        'recentHires': active.filter(date_of_joining__gte=since).count(),
    }


class IdCardViewSet(ResourceViewSet):
    """
    ViewSet for employee ID cards

    list: Active ID cards (search over name, email, card number; filter by employeeType, department)
    retrieve: Single ID card
    create: Multipart, requires employeePicture
    update: Partial update, optional new picture
    destroy: Soft delete
    by_number: Lookup by card number (case-insensitive)
    picture: Replace the employee picture
    stats: Aggregate breakdowns
    """
    queryset = IdCard.objects.active().select_related('department', 'designation', 'created_by')
    serializer_class = IdCardSerializer
    filterset_class = IdCardFilter
    search_fields = ['full_name', 'email', 'id_card_number']
    sort_fields = {
        'createdAt': 'created_at',
        'updatedAt': 'updated_at',
        'fullName': 'full_name',
        'idCardNumber': 'id_card_number',
        'employeeType': 'employee_type',
        'dateOfJoining': 'date_of_joining',
        'dateOfBirth': 'date_of_birth',
    }
    partial_updates = True
    resource_name = 'ID Card'
    detail_name = 'idCard'
    collection_name = 'idCards'
    pagination_total_key = 'totalIdCards'

    @action(detail=False, methods=['get'], url_path=r'number/(?P<id_card_number>[A-Za-z0-9]+)')
    def by_number(self, request, id_card_number=None):
        id_card = self.get_queryset().filter(id_card_number=id_card_number.upper()).first()
        if id_card is None:
            raise self.not_found()
        return success_response({self.detail_name: self.get_serializer(id_card).data})

    @action(detail=True, methods=['put'], url_path='picture')
    def picture(self, request, pk=None):
        id_card = self.get_object()
        serializer = EmployeePictureSerializer(id_card, data=request.data)
        serializer.is_valid(raise_exception=True)
        with transaction.atomic():
            serializer.save()
        return success_response(
            {'employeePicture': id_card.employee_picture},
            'Employee picture updated successfully',
        )

    @action(detail=False, methods=['get'], url_path='stats/overview')
    def stats(self, request):
        return success_response(id_card_statistics())
