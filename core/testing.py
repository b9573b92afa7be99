"""Helpers shared by the app test suites"""
import io
import shutil
import tempfile

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import override_settings
from PIL import Image

from admins.models import Admin
from admins.tokens import issue_token


def make_admin(email='admin@example.com', password='secret123', **extra):
    extra.setdefault('full_name', 'Test Admin')
    return Admin.objects.create_user(email=email, password=password, **extra)


def authenticate(client, admin):
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_token(admin)}')
    return client


def make_image(name='picture.png', size=(8, 8), image_format='PNG', content_type='image/png'):
    buffer = io.BytesIO()
    Image.new('RGB', size, color=(200, 30, 30)).save(buffer, format=image_format)
    return SimpleUploadedFile(name, buffer.getvalue(), content_type=content_type)


class TemporaryMediaMixin:
    """Point MEDIA_ROOT at a fresh throwaway directory for every test"""

    def setUp(self):
        super().setUp()
        media_root = tempfile.mkdtemp()
        override = override_settings(MEDIA_ROOT=media_root)
        override.enable()
        self.addCleanup(override.disable)
        self.addCleanup(shutil.rmtree, media_root, ignore_errors=True)
