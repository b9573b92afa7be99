from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from admins.serializers import CreatorSerializer
from core.fields import DATE_INPUT_FORMATS, JSONObjectSerializer, LowerCaseEmailField, message_set
from core.integrity import ActiveReferenceField
from core.uploads import EMPLOYEE_PICTURE_FOLDER, ImageUploadField, discard_upload, store_image
from core.validators import NotInFutureValidator, mobile_number_validator
from departments.models import Department, Designation
from departments.serializers import DepartmentSummarySerializer, DesignationSummarySerializer

from .models import IdCard

PICTURE_REQUIRED = 'Employee picture is required'


class AddressSerializer(JSONObjectSerializer):
    """Postal address, stored flat on the ID card"""
    street = serializers.CharField(error_messages=message_set('Street address'))
    city = serializers.CharField(error_messages=message_set('City'))
    state = serializers.CharField(error_messages=message_set('State'))
    zipCode = serializers.CharField(source='zip_code', error_messages=message_set('Zip code'))
    country = serializers.CharField(default='India', error_messages=message_set('Country'))


def picture_field():
    return ImageUploadField(
        source='employee_picture',
        write_only=True,
        error_messages={
            'required': PICTURE_REQUIRED,
            'null': PICTURE_REQUIRED,
            'empty': PICTURE_REQUIRED,
            'no_name': PICTURE_REQUIRED,
            'invalid': PICTURE_REQUIRED,
            'invalid_image': 'Only image files (jpeg, jpg, png, webp) are allowed!',
        },
    )


def date_field(label, source):
    return serializers.DateField(
        source=source,
        input_formats=DATE_INPUT_FORMATS,
        validators=[NotInFutureValidator(f'{label} cannot be in the future')],
        error_messages={
            'required': f'{label} is required',
            'null': f'{label} is required',
            'invalid': f'{label} must be a valid date',
        },
    )


def choice_field(choices, label, invalid, source):
    return serializers.ChoiceField(
        source=source,
        choices=choices,
        error_messages={
            'required': f'{label} is required',
            'null': f'{label} is required',
            'invalid_choice': invalid,
        },
    )


class IdCardSerializer(serializers.ModelSerializer):
    """
    ID card create/update.

    Creation requires every field plus the picture upload. Updates are
    partial: only supplied fields are validated and applied, so only the
    department / designation actually sent are checked for being active.
    """
    idCardNumber = serializers.CharField(source='id_card_number', read_only=True)
    employeeType = choice_field(
        IdCard.EmployeeType.choices, 'Employee type', 'Please select a valid employee type', 'employee_type',
    )
    fullName = serializers.CharField(
        source='full_name',
        min_length=2,
        max_length=50,
        error_messages=message_set('Full name', 2, 50),
    )
    address = AddressSerializer(
        source='*',
        error_messages={'required': 'Address is required', 'null': 'Address is required'},
    )
    bloodGroup = choice_field(
        IdCard.BloodGroup.choices, 'Blood group', 'Please select a valid blood group', 'blood_group',
    )
    mobileNumber = serializers.CharField(
        source='mobile_number',
        validators=[mobile_number_validator],
        error_messages=message_set('Mobile number'),
    )
    email = LowerCaseEmailField(
        error_messages={'required': 'Email is required', 'blank': 'Email is required'},
        validators=[UniqueValidator(
            queryset=IdCard.objects.all(),
            message='Employee with this email already exists',
        )],
    )
    dateOfBirth = date_field('Date of birth', 'date_of_birth')
    dateOfJoining = date_field('Date of joining', 'date_of_joining')
    department = ActiveReferenceField(
        Department,
        'Invalid department',
        summary_serializer=DepartmentSummarySerializer,
        error_messages={'required': 'Department is required'},
    )
    designation = ActiveReferenceField(
        Designation,
        'Invalid designation',
        summary_serializer=DesignationSummarySerializer,
        error_messages={'required': 'Designation is required'},
    )
    employeePicture = picture_field()
    isActive = serializers.BooleanField(source='is_active', read_only=True)
    createdBy = CreatorSerializer(source='created_by', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = IdCard
        fields = [
            'id', 'idCardNumber', 'employeeType', 'fullName', 'address',
            'bloodGroup', 'mobileNumber', 'email', 'dateOfBirth', 'dateOfJoining',
            'department', 'designation', 'employeePicture', 'isActive',
            'createdBy', 'createdAt', 'updatedAt',
        ]

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data['employeePicture'] = instance.employee_picture
        return data

    def create(self, validated_data):
        path = store_image(validated_data.pop('employee_picture'), EMPLOYEE_PICTURE_FOLDER, 'employee')
        validated_data['employee_picture'] = path
        try:
            return super().create(validated_data)
        except Exception:
            discard_upload(path)
            raise

    def update(self, instance, validated_data):
        picture = validated_data.pop('employee_picture', None)
        if picture is None:
            return super().update(instance, validated_data)

        path = store_image(picture, EMPLOYEE_PICTURE_FOLDER, 'employee')
        validated_data['employee_picture'] = path
        try:
            return super().update(instance, validated_data)
        except Exception:
            discard_upload(path)
            raise


class EmployeePictureSerializer(serializers.Serializer):
    employeePicture = picture_field()

    def update(self, instance, validated_data):
        path = store_image(validated_data['employee_picture'], EMPLOYEE_PICTURE_FOLDER, 'employee')
        instance.employee_picture = path
        try:
            instance.save(update_fields=['employee_picture', 'updated_at'])
        except Exception:
            discard_upload(path)
            raise
        return instance
