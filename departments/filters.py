import django_filters

from .models import Designation


class DesignationFilter(django_filters.FilterSet):
    department = django_filters.NumberFilter(field_name='department_id')

    class Meta:
        model = Designation
        fields = ['department']
