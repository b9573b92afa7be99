from rest_framework.decorators import action
from rest_framework.exceptions import NotFound

from core.responses import success_response
from core.views import ResourceViewSet

from .filters import DesignationFilter
from .models import Department, Designation
from .serializers import (
    DepartmentSerializer,
    DepartmentSummarySerializer,
    DesignationDropdownSerializer,
    DesignationSerializer,
    DesignationSummarySerializer,
)


class DepartmentViewSet(ResourceViewSet):
    """
    ViewSet for Department management

    list: Get active departments (search over name, code, description)
    retrieve: Get single department details
    create: Create new department
    update: Update department
    destroy: Soft delete department
    active: Dropdown list of active departments
    """
    queryset = Department.objects.active().select_related('created_by')
    serializer_class = DepartmentSerializer
    search_fields = ['name', 'code', 'description']
    sort_fields = {
        'createdAt': 'created_at',
        'updatedAt': 'updated_at',
        'name': 'name',
        'code': 'code',
    }
    resource_name = 'Department'
    detail_name = 'department'
    collection_name = 'departments'
    pagination_total_key = 'totalDepartments'

    @action(detail=False, methods=['get'], url_path='list/active')
    def active(self, request):
        """Active departments for dropdowns"""
        departments = Department.objects.active().order_by('name')
        serializer = DepartmentSummarySerializer(departments, many=True)
        return success_response({'departments': serializer.data})


class DesignationViewSet(ResourceViewSet):
    """
    ViewSet for Designation management

    list: Get active designations (search over title, description; filter by department)
    retrieve: Get single designation details
    create: Create new designation (department must be active)
    update: Update designation (department must be active)
    destroy: Soft delete designation
    by_department: Designations of one active department
    active: Dropdown list of active designations
    """
    queryset = Designation.objects.active().select_related('department', 'created_by')
    serializer_class = DesignationSerializer
    filterset_class = DesignationFilter
    search_fields = ['title', 'description']
    sort_fields = {
        'createdAt': 'created_at',
        'updatedAt': 'updated_at',
        'title': 'title',
        'level': 'level',
    }
    resource_name = 'Designation'
    detail_name = 'designation'
    collection_name = 'designations'
    pagination_total_key = 'totalDesignations'

    @action(detail=False, methods=['get'], url_path=r'department/(?P<department_id>\d+)')
    def by_department(self, request, department_id=None):
        """Designations in a department, lowest level first"""
        if not Department.objects.active().filter(pk=department_id).exists():
            raise NotFound('Department not found')
        designations = Designation.objects.active().filter(
            department_id=department_id
        ).order_by('level', 'title')
        serializer = DesignationSummarySerializer(designations, many=True)
        return success_response({'designations': serializer.data})

    @action(detail=False, methods=['get'], url_path='list/active')
    def active(self, request):
        """Active designations for dropdowns"""
        designations = Designation.objects.active().select_related('department').order_by('level', 'title')
        serializer = DesignationDropdownSerializer(designations, many=True)
        return success_response({'designations': serializer.data})
