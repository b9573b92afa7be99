import logging

from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from core.fields import LowerCaseEmailField, message_set

from .models import Admin

logger = logging.getLogger(__name__)


class AdminSerializer(serializers.ModelSerializer):
    """Public view of an admin account (never the password)"""
    fullName = serializers.CharField(source='full_name', read_only=True)
    isActive = serializers.BooleanField(source='is_active', read_only=True)
    lastLogin = serializers.DateTimeField(source='last_login', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Admin
        fields = ['id', 'fullName', 'email', 'role', 'isActive', 'lastLogin', 'createdAt', 'updatedAt']
        read_only_fields = fields


class CreatorSerializer(serializers.ModelSerializer):
    """Embedded ``createdBy`` of owned records"""
    fullName = serializers.CharField(source='full_name', read_only=True)

    class Meta:
        model = Admin
        fields = ['id', 'fullName']


class SignupSerializer(serializers.Serializer):
    fullName = serializers.CharField(
        source='full_name',
        min_length=2,
        max_length=50,
        error_messages=message_set('Full name', 2, 50),
    )
    email = LowerCaseEmailField(
        error_messages={'required': 'Email is required', 'blank': 'Email is required'},
        validators=[UniqueValidator(
            queryset=Admin.objects.all(),
            message='Admin with this email already exists',
        )],
    )
    password = serializers.CharField(
        write_only=True,
        min_length=6,
        trim_whitespace=False,
        error_messages=message_set('Password', min_length=6),
    )
    role = serializers.ChoiceField(
        choices=Admin.Role.choices,
        default=Admin.Role.ADMIN,
        error_messages={'invalid_choice': 'Role must be one of: admin, super_admin'},
    )

    def create(self, validated_data):
        admin = Admin.objects.create_user(**validated_data)
        logger.info('Admin account %s created (%s)', admin.email, admin.role)
        return admin


class LoginSerializer(serializers.Serializer):
    email = LowerCaseEmailField(
        error_messages={'required': 'Email is required', 'blank': 'Email is required'},
    )
    password = serializers.CharField(
        write_only=True,
        trim_whitespace=False,
        error_messages=message_set('Password'),
    )


class ProfileUpdateSerializer(serializers.ModelSerializer):
    fullName = serializers.CharField(
        source='full_name',
        required=False,
        min_length=2,
        max_length=50,
        error_messages=message_set('Full name', 2, 50),
    )
    email = LowerCaseEmailField(
        required=False,
        validators=[UniqueValidator(
            queryset=Admin.objects.all(),
            message='Email is already taken',
        )],
    )

    class Meta:
        model = Admin
        fields = ['fullName', 'email']


class ChangePasswordSerializer(serializers.Serializer):
    currentPassword = serializers.CharField(
        write_only=True,
        trim_whitespace=False,
        error_messages=message_set('Current password'),
    )
    newPassword = serializers.CharField(
        write_only=True,
        min_length=6,
        trim_whitespace=False,
        error_messages=message_set('New password', min_length=6),
    )

    def validate_currentPassword(self, value):
        admin = self.context['request'].user
        if not admin.check_password(value):
            raise serializers.ValidationError('Current password is incorrect')
        return value

    def save(self, **kwargs):
        admin = self.context['request'].user
        admin.set_password(self.validated_data['newPassword'])
        admin.save(update_fields=['password', 'updated_at'])
        logger.info('Password changed for admin %s', admin.email)
        return admin
