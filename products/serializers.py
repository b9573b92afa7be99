from rest_framework import serializers

from admins.serializers import CreatorSerializer
from core.fields import FeatureListField, message_set
from core.uploads import (
    PRODUCT_ADDITIONAL_FOLDER,
    PRODUCT_MAIN_FOLDER,
    ImageBatchField,
    ImageUploadField,
    discard_upload,
    store_image,
)

from .models import Product

MAIN_IMAGE_REQUIRED = 'Main product image is required'


def image_messages(required):
    return {
        'required': required,
        'null': required,
        'empty': required,
        'no_name': required,
        'invalid': required,
        'invalid_image': 'Only image files (jpeg, jpg, png, webp) are allowed!',
    }


class PriceField(serializers.DecimalField):
    """Optional price; an empty form value means "no price"."""

    def validate_empty_values(self, data):
        if data == '':
            data = None
        return super().validate_empty_values(data)


class ProductSerializer(serializers.ModelSerializer):
    """
    Product create/update.

    The main image is uploaded on create only; afterwards it is replaced
    through the main-image endpoint and additional images are appended
    through the images endpoint.
    """
    productName = serializers.CharField(
        source='product_name',
        max_length=100,
        error_messages=message_set('Product name', max_length=100),
    )
    productFeatures = FeatureListField(source='product_features')
    mainImage = ImageUploadField(
        source='main_image',
        write_only=True,
        error_messages=image_messages(MAIN_IMAGE_REQUIRED),
    )
    additionalImages = serializers.ListField(
        source='additional_images',
        child=serializers.CharField(),
        read_only=True,
    )
    description = serializers.CharField(
        required=False,
        allow_blank=True,
        max_length=1000,
        error_messages={'max_length': 'Description cannot exceed 1000 characters'},
    )
    price = PriceField(
        max_digits=12,
        decimal_places=2,
        min_value=0,
        required=False,
        allow_null=True,
        error_messages={
            'min_value': 'Price cannot be negative',
            'invalid': 'Price must be a valid positive number',
        },
    )
    category = serializers.CharField(required=False, allow_blank=True, max_length=100)
    isActive = serializers.BooleanField(source='is_active', read_only=True)
    createdBy = CreatorSerializer(source='created_by', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'productName', 'productFeatures', 'mainImage', 'additionalImages',
            'description', 'price', 'category', 'isActive',
            'createdBy', 'createdAt', 'updatedAt',
        ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.instance is not None:
            self.fields.pop('mainImage')

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data['mainImage'] = instance.main_image
        return data

    def create(self, validated_data):
        path = store_image(validated_data.pop('main_image'), PRODUCT_MAIN_FOLDER, 'main')
        validated_data['main_image'] = path
        try:
            return super().create(validated_data)
        except Exception:
            discard_upload(path)
            raise


class MainImageSerializer(serializers.Serializer):
    mainImage = ImageUploadField(
        source='main_image',
        error_messages=image_messages('Main image is required'),
    )

    def update(self, instance, validated_data):
        path = store_image(validated_data['main_image'], PRODUCT_MAIN_FOLDER, 'main')
        instance.main_image = path
        try:
            instance.save(update_fields=['main_image', 'updated_at'])
        except Exception:
            discard_upload(path)
            raise
        return instance


class AdditionalImagesSerializer(serializers.Serializer):
    additionalImages = ImageBatchField(
        error_messages={
            'required': 'At least one image is required',
            'empty': 'At least one image is required',
            'not_a_list': 'At least one image is required',
        },
    )

    def update(self, instance, validated_data):
        paths = [
            store_image(upload, PRODUCT_ADDITIONAL_FOLDER, 'additional')
            for upload in validated_data['additionalImages']
        ]
        instance.additional_images = list(instance.additional_images or []) + paths
        try:
            instance.save(update_fields=['additional_images', 'updated_at'])
        except Exception:
            for path in paths:
                discard_upload(path)
            raise
        self.stored_paths = paths
        return instance
