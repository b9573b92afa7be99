import django_filters

from .models import IdCard


class IdCardFilter(django_filters.FilterSet):
    employeeType = django_filters.ChoiceFilter(field_name='employee_type', choices=IdCard.EmployeeType.choices)
    department = django_filters.NumberFilter(field_name='department_id')

    class Meta:
        model = IdCard
        fields = ['employeeType', 'department']
