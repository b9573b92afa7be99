"""Trimmed record shapes for the recent-activity feed"""
from rest_framework import serializers

from admins.models import Admin
from admins.serializers import CreatorSerializer
from contact.models import Contact
from departments.models import Department, Designation
from id_cards.models import IdCard
from products.models import Product


class DepartmentNameSerializer(serializers.ModelSerializer):

    class Meta:
        model = Department
        fields = ['id', 'name']


class DesignationTitleSerializer(serializers.ModelSerializer):

    class Meta:
        model = Designation
        fields = ['id', 'title']


class RecentProductSerializer(serializers.ModelSerializer):
    productName = serializers.CharField(source='product_name')
    createdBy = CreatorSerializer(source='created_by')
    createdAt = serializers.DateTimeField(source='created_at')

    class Meta:
        model = Product
        fields = ['id', 'productName', 'createdBy', 'createdAt']


class RecentContactSerializer(serializers.ModelSerializer):
    fullName = serializers.CharField(source='full_name')
    emailAddress = serializers.CharField(source='email_address')
    createdAt = serializers.DateTimeField(source='created_at')

    class Meta:
        model = Contact
        fields = ['id', 'fullName', 'emailAddress', 'subject', 'status', 'createdAt']


class RecentEmployeeSerializer(serializers.ModelSerializer):
    fullName = serializers.CharField(source='full_name')
    idCardNumber = serializers.CharField(source='id_card_number')
    department = DepartmentNameSerializer()
    designation = DesignationTitleSerializer()
    createdBy = CreatorSerializer(source='created_by')
    createdAt = serializers.DateTimeField(source='created_at')

    class Meta:
        model = IdCard
        fields = ['id', 'fullName', 'idCardNumber', 'department', 'designation', 'createdBy', 'createdAt']


class RecentDepartmentSerializer(serializers.ModelSerializer):
    createdBy = CreatorSerializer(source='created_by')
    createdAt = serializers.DateTimeField(source='created_at')

    class Meta:
        model = Department
        fields = ['id', 'name', 'code', 'createdBy', 'createdAt']


class RecentDesignationSerializer(serializers.ModelSerializer):
    department = DepartmentNameSerializer()
    createdBy = CreatorSerializer(source='created_by')
    createdAt = serializers.DateTimeField(source='created_at')

    class Meta:
        model = Designation
        fields = ['id', 'title', 'level', 'department', 'createdBy', 'createdAt']


class RecentLoginSerializer(serializers.ModelSerializer):
    fullName = serializers.CharField(source='full_name')
    lastLogin = serializers.DateTimeField(source='last_login')

    class Meta:
        model = Admin
        fields = ['id', 'fullName', 'email', 'lastLogin']
