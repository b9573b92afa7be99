import os
import runpy
from datetime import datetime
from unittest import mock

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.core.files.uploadedfile import SimpleUploadedFile
from django.db import IntegrityError
from django.test import SimpleTestCase, TestCase, override_settings
from rest_framework import serializers
from rest_framework.test import APITestCase

from admins.models import Admin
from departments.models import Department

from .exceptions import UploadError, collect_messages, duplicate_field
from .fields import FeatureListField
from .integrity import resolve_active_reference
from .listing import build_pagination, positive_int
from .permissions import can_mutate
from .stats import months_ago
from .uploads import discard_upload, generate_filename, store_image, validate_image
from .testing import TemporaryMediaMixin, make_admin, make_image


class DuplicateFieldTest(SimpleTestCase):

    def test_backend_messages(self):
        self.assertEqual(
            duplicate_field(IntegrityError('UNIQUE constraint failed: id_cards_idcard.email')),
            'email',
        )
        self.assertEqual(
            duplicate_field(IntegrityError('Key (id_card_number)=(EMP1) already exists.')),
            'idCardNumber',
        )
        self.assertEqual(
            duplicate_field(IntegrityError("Duplicate entry 'ENG' for key 'departments_department.code'")),
            'code',
        )
        self.assertIsNone(duplicate_field(IntegrityError('something else')))

    def test_collect_messages_flattens(self):
        detail = {'name': ['Name is required'], 'address': {'city': ['City is required']}}
        self.assertEqual(collect_messages(detail), ['Name is required', 'City is required'])


class ListingMathTest(SimpleTestCase):

    def test_pagination_block(self):
        self.assertEqual(build_pagination(2, 5, 12, 'totalDepartments'), {
            'currentPage': 2,
            'totalPages': 3,
            'totalDepartments': 12,
            'hasNextPage': True,
            'hasPrevPage': True,
        })
        last = build_pagination(3, 5, 12)
        self.assertFalse(last['hasNextPage'])
        self.assertEqual(build_pagination(1, 10, 0)['totalPages'], 0)

    def test_positive_int(self):
        self.assertEqual(positive_int('4', 1), 4)
        self.assertEqual(positive_int('0', 1), 1)
        self.assertEqual(positive_int('-3', 10), 10)
        self.assertEqual(positive_int('abc', 10), 10)
        self.assertEqual(positive_int(None, 10), 10)


class MonthsAgoTest(SimpleTestCase):

    def test_month_arithmetic(self):
        self.assertEqual(months_ago(datetime(2026, 10, 19, 8, 30), 6), datetime(2026, 4, 19, 8, 30))
        self.assertEqual(months_ago(datetime(2026, 3, 15), 12), datetime(2025, 3, 15))
        self.assertEqual(months_ago(datetime(2026, 2, 10), 3), datetime(2025, 11, 10))

    def test_day_is_clamped(self):
        self.assertEqual(months_ago(datetime(2026, 3, 31), 1), datetime(2026, 2, 28))
        self.assertEqual(months_ago(datetime(2024, 8, 31), 6), datetime(2024, 2, 29))


class FeatureListFieldTest(SimpleTestCase):

    def setUp(self):
        self.field = FeatureListField()

    def test_accepted_forms(self):
        self.assertEqual(self.field.to_internal_value(['Fast', ' Light ']), ['Fast', 'Light'])
        self.assertEqual(self.field.to_internal_value('["Fast", ""]'), ['Fast'])
        self.assertEqual(self.field.to_internal_value('Durable'), ['Durable'])

    def test_rejected_forms(self):
        with self.assertRaisesMessage(serializers.ValidationError, 'At least one product feature is required'):
            self.field.to_internal_value(['  ', ''])
        with self.assertRaisesMessage(serializers.ValidationError, 'Product features must be an array or string'):
            self.field.to_internal_value({'a': 1})
        with self.assertRaisesMessage(serializers.ValidationError, 'Product features must be an array or string'):
            self.field.to_internal_value([1, 2])


class ValidateImageTest(SimpleTestCase):

    def test_accepts_allowed_image(self):
        upload = make_image('photo.jpg', image_format='JPEG', content_type='image/jpeg')
        self.assertIs(validate_image(upload), upload)

    def test_rejects_other_types(self):
        for name, content_type in (('notes.pdf', 'application/pdf'), ('photo.gif', 'image/gif'),
                                   ('photo.png', 'text/plain')):
            upload = SimpleUploadedFile(name, b'data', content_type=content_type)
            with self.assertRaisesMessage(UploadError, 'Only image files (jpeg, jpg, png, webp) are allowed!'):
                validate_image(upload)

    @override_settings(UPLOAD_MAX_FILE_SIZE=10)
    def test_rejects_large_files(self):
        with self.assertRaisesMessage(UploadError, 'File size too large. Maximum size is 100MB.'):
            validate_image(make_image())

    def test_generated_name(self):
        self.assertRegex(generate_filename('main', 'Desk.PNG'), r'^main-\d+-\d+\.png$')


class StorageTest(TemporaryMediaMixin, SimpleTestCase):

    def test_store_and_discard(self):
        path = store_image(make_image(), 'products/main', 'main')
        self.assertTrue(path.startswith('/uploads/products/main/main-'))
        stored = os.path.join(settings.MEDIA_ROOT, path[len('/uploads/'):])
        self.assertTrue(os.path.exists(stored))
        discard_upload(path)
        self.assertFalse(os.path.exists(stored))
        # Unknown or foreign paths are ignored
        discard_upload(path)
        discard_upload('https://elsewhere.example.com/picture.png')


class OwnershipTest(TestCase):

    def setUp(self):
        self.owner = make_admin(email='owner@example.com')
        self.other = make_admin(email='other@example.com')
        self.boss = make_admin(email='boss@example.com', role=Admin.Role.SUPER_ADMIN)
        self.department = Department.objects.create(name='Engineering', code='ENG', created_by=self.owner)

    def test_can_mutate(self):
        self.assertTrue(can_mutate(self.owner, self.department))
        self.assertFalse(can_mutate(self.other, self.department))
        self.assertTrue(can_mutate(self.boss, self.department))
        self.assertFalse(can_mutate(None, self.department))


class SoftDeleteTest(TestCase):

    def setUp(self):
        self.admin = make_admin()
        self.department = Department.objects.create(name='Engineering', code='ENG', created_by=self.admin)

    def test_soft_delete_hides_from_active(self):
        self.department.soft_delete()
        self.assertFalse(Department.objects.active().exists())
        self.assertTrue(Department.objects.filter(pk=self.department.pk).exists())

    def test_inactive_reference_is_rejected(self):
        self.assertEqual(
            resolve_active_reference(Department, self.department.pk, 'Invalid department'),
            self.department,
        )
        self.assertEqual(
            resolve_active_reference(Department, float(self.department.pk), 'Invalid department'),
            self.department,
        )
        for value in (True, self.department.pk + 0.5):
            with self.assertRaisesMessage(serializers.ValidationError, 'Invalid department'):
                resolve_active_reference(Department, value, 'Invalid department')
        self.department.soft_delete()
        for value in (self.department.pk, 9999, 'abc', None, True, 1.9):
            with self.assertRaisesMessage(serializers.ValidationError, 'Invalid department'):
                resolve_active_reference(Department, value, 'Invalid department')


class ErrorEnvelopeTest(APITestCase):

    def test_unknown_route(self):
        response = self.client.get('/api/does-not-exist')
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {'success': False, 'message': 'Route not found'})

    def test_root_has_no_landing_page(self):
        response = self.client.get('/')
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {'success': False, 'message': 'Route not found'})

    def test_unknown_record_id_format(self):
        admin = make_admin()
        self.client.force_authenticate(admin)
        response = self.client.get('/api/departments/abc')
        self.assertEqual(response.status_code, 404)


class SettingsSecretsTest(SimpleTestCase):
    """Settings refuse to start in production mode without real secrets"""

    def load_settings(self, environ):
        with mock.patch.dict(os.environ, environ, clear=True), \
                mock.patch('dotenv.load_dotenv', return_value=False):
            return runpy.run_module('config.settings')

    def test_no_environment_is_refused(self):
        with self.assertRaisesMessage(ImproperlyConfigured, 'SECRET_KEY must be set when DEBUG is off.'):
            self.load_settings({})

    def test_missing_jwt_secret_is_refused(self):
        with self.assertRaisesMessage(ImproperlyConfigured, 'JWT_SECRET must be set when DEBUG is off.'):
            self.load_settings({'SECRET_KEY': 'real-secret'})

    def test_production_uses_supplied_secrets(self):
        loaded = self.load_settings({'SECRET_KEY': 'real-secret', 'JWT_SECRET': 'real-jwt'})
        self.assertFalse(loaded['DEBUG'])
        self.assertEqual(loaded['SIMPLE_JWT']['SIGNING_KEY'], 'real-jwt')

    def test_development_fallback_requires_debug_opt_in(self):
        loaded = self.load_settings({'DEBUG': 'True'})
        self.assertTrue(loaded['DEBUG'])
        self.assertEqual(loaded['JWT_SECRET'], loaded['SECRET_KEY'])
