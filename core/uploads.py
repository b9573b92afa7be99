"""
uploads.py

Image uploads are stored on local disk under ``settings.MEDIA_ROOT`` and
referenced from records by their public path (``/uploads/<folder>/<name>``).

Handlers validate the whole request first and only then store files; if the
record write still fails the stored file is discarded again.
"""
import logging
import os
import random
import time

from django.conf import settings
from django.core.files.storage import FileSystemStorage
from rest_framework import serializers

from .exceptions import UploadError

logger = logging.getLogger(__name__)

PRODUCT_MAIN_FOLDER = 'products/main'
PRODUCT_ADDITIONAL_FOLDER = 'products/additional'
EMPLOYEE_PICTURE_FOLDER = 'employees/pictures'

INVALID_TYPE_MESSAGE = 'Only image files (jpeg, jpg, png, webp) are allowed!'
TOO_LARGE_MESSAGE = 'File size too large. Maximum size is 100MB.'
TOO_MANY_MESSAGE = 'Too many files. Maximum 5 additional images allowed.'


def upload_storage():
    return FileSystemStorage(location=settings.MEDIA_ROOT, base_url=settings.MEDIA_URL)


def ensure_upload_dirs():
    """Create the upload folders. Safe to call any number of times."""
    for folder in settings.UPLOAD_FOLDERS:
        os.makedirs(os.path.join(settings.MEDIA_ROOT, folder), exist_ok=True)


def file_extension(name):
    return os.path.splitext(name or '')[1].lower().lstrip('.')


def validate_image(upload):
    """Reject anything that is not a jpeg/jpg/png/webp image within the size limit"""
    allowed = settings.UPLOAD_ALLOWED_EXTENSIONS
    extension = file_extension(upload.name)
    content_type = (getattr(upload, 'content_type', '') or '').lower()
    subtype = content_type.split('/')[-1]

    if extension not in allowed or subtype not in allowed:
        raise UploadError(INVALID_TYPE_MESSAGE)
    if upload.size > settings.UPLOAD_MAX_FILE_SIZE:
        raise UploadError(TOO_LARGE_MESSAGE)
    return upload


def generate_filename(prefix, original_name):
    suffix = f'{int(time.time() * 1000)}-{random.randint(0, 10 ** 9)}'
    return f'{prefix}-{suffix}.{file_extension(original_name)}'


def store_image(upload, folder, prefix):
    """Write ``upload`` to ``folder`` and return its public path"""
    storage = upload_storage()
    name = storage.save(f'{folder}/{generate_filename(prefix, upload.name)}', upload)
    return storage.url(name)


def discard_upload(path):
    """Remove a file previously returned by ``store_image``"""
    if not path or not path.startswith(settings.MEDIA_URL):
        return
    name = path[len(settings.MEDIA_URL):]
    storage = upload_storage()
    if storage.exists(name):
        storage.delete(name)
        logger.info('Discarded orphaned upload %s', path)


class ImageUploadField(serializers.ImageField):
    """DRF image field (Pillow-verified) that also enforces the upload rules"""

    def to_internal_value(self, data):
        if hasattr(data, 'name') and hasattr(data, 'size'):
            validate_image(data)
        return super().to_internal_value(data)


class ImageBatchField(serializers.ListField):
    """One or more images in a single multipart field, at most UPLOAD_MAX_ADDITIONAL_IMAGES"""

    def __init__(self, **kwargs):
        kwargs.setdefault('child', ImageUploadField())
        kwargs.setdefault('allow_empty', False)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        if isinstance(data, list) and len(data) > settings.UPLOAD_MAX_ADDITIONAL_IMAGES:
            raise UploadError(TOO_MANY_MESSAGE)
        return super().to_internal_value(data)
