from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from admins.serializers import CreatorSerializer
from core.fields import UpperCaseCharField, message_set
from core.integrity import ActiveReferenceField

from .models import Department, Designation


class DepartmentSummarySerializer(serializers.ModelSerializer):
    """Embedded department: name and code only"""

    class Meta:
        model = Department
        fields = ['id', 'name', 'code']


class DesignationSummarySerializer(serializers.ModelSerializer):
    """Embedded designation: title and level only"""

    class Meta:
        model = Designation
        fields = ['id', 'title', 'level']


class DesignationDropdownSerializer(serializers.ModelSerializer):
    department = DepartmentSummarySerializer(read_only=True)

    class Meta:
        model = Designation
        fields = ['id', 'title', 'level', 'department']


class DepartmentSerializer(serializers.ModelSerializer):
    """Serializer for Department"""
    name = serializers.CharField(
        min_length=2,
        max_length=50,
        error_messages=message_set('Department name', 2, 50),
        validators=[UniqueValidator(
            queryset=Department.objects.all(),
            message='Department with this name already exists',
        )],
    )
    description = serializers.CharField(
        required=False,
        allow_blank=True,
        max_length=200,
        error_messages={'max_length': 'Description cannot exceed 200 characters'},
    )
    code = UpperCaseCharField(
        min_length=2,
        max_length=10,
        error_messages=message_set('Department code', 2, 10),
        validators=[UniqueValidator(
            queryset=Department.objects.all(),
            message='Department with this code already exists',
        )],
    )
    isActive = serializers.BooleanField(source='is_active', read_only=True)
    createdBy = CreatorSerializer(source='created_by', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Department
        fields = [
            'id', 'name', 'description', 'code', 'isActive',
            'createdBy', 'createdAt', 'updatedAt',
        ]


class DesignationSerializer(serializers.ModelSerializer):
    """Serializer for Designation; the department must be active when written"""
    title = serializers.CharField(
        min_length=2,
        max_length=50,
        error_messages=message_set('Designation title', 2, 50),
        validators=[UniqueValidator(
            queryset=Designation.objects.all(),
            message='Designation with this title already exists',
        )],
    )
    description = serializers.CharField(
        required=False,
        allow_blank=True,
        max_length=200,
        error_messages={'max_length': 'Description cannot exceed 200 characters'},
    )
    level = serializers.IntegerField(
        min_value=1,
        max_value=20,
        error_messages={
            'required': 'Designation level is required',
            'null': 'Designation level is required',
            'invalid': 'Level must be a number',
            'min_value': 'Level must be at least 1',
            'max_value': 'Level cannot exceed 20',
        },
    )
    department = ActiveReferenceField(
        Department,
        'Invalid department',
        summary_serializer=DepartmentSummarySerializer,
        error_messages={'required': 'Department is required'},
    )
    isActive = serializers.BooleanField(source='is_active', read_only=True)
    createdBy = CreatorSerializer(source='created_by', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Designation
        fields = [
            'id', 'title', 'description', 'level', 'department', 'isActive',
            'createdBy', 'createdAt', 'updatedAt',
        ]
