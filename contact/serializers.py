from rest_framework import serializers

from core.fields import LowerCaseEmailField, message_set
from core.validators import mobile_number_validator

from .models import Contact

INVALID_STATUS = 'Invalid status. Must be one of: new, read, replied, closed'


class ContactSerializer(serializers.ModelSerializer):
    """Contact form submission; the workflow fields are read-only here"""
    fullName = serializers.CharField(
        source='full_name',
        min_length=2,
        max_length=50,
        error_messages=message_set('Full name', 2, 50),
    )
    emailAddress = LowerCaseEmailField(
        source='email_address',
        error_messages=message_set('Email address'),
    )
    mobileNumber = serializers.CharField(
        source='mobile_number',
        validators=[mobile_number_validator],
        error_messages=message_set('Mobile number'),
    )
    subject = serializers.CharField(
        min_length=5,
        max_length=100,
        error_messages=message_set('Subject', 5, 100),
    )
    message = serializers.CharField(
        min_length=10,
        max_length=1000,
        error_messages=message_set('Message', 10, 1000),
    )
    status = serializers.CharField(read_only=True)
    ipAddress = serializers.CharField(source='ip_address', read_only=True)
    userAgent = serializers.CharField(source='user_agent', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Contact
        fields = [
            'id', 'fullName', 'emailAddress', 'mobileNumber', 'subject', 'message',
            'status', 'ipAddress', 'userAgent', 'createdAt', 'updatedAt',
        ]


class ContactStatusSerializer(serializers.ModelSerializer):
    status = serializers.ChoiceField(
        choices=Contact.Status.choices,
        error_messages={
            'required': INVALID_STATUS,
            'null': INVALID_STATUS,
            'invalid_choice': INVALID_STATUS,
        },
    )

    class Meta:
        model = Contact
        fields = ['status']
