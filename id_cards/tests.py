import json
import os
import re
from datetime import date, timedelta
from unittest import mock

from django.conf import settings
from django.core.files.uploadedfile import SimpleUploadedFile
from django.db import IntegrityError
from django.test import TestCase
from rest_framework.test import APITestCase

from core.testing import TemporaryMediaMixin, authenticate, make_admin, make_image
from departments.models import Department, Designation

from .models import IdCard, generate_id_card_number


def stored_pictures():
    folder = os.path.join(settings.MEDIA_ROOT, 'employees', 'pictures')
    return os.listdir(folder) if os.path.isdir(folder) else []


class IdCardNumberTest(TestCase):

    def test_format(self):
        self.assertRegex(generate_id_card_number(), r'^EMP\d{12}$')


class IdCardApiTest(TemporaryMediaMixin, APITestCase):
    """ID card lifecycle through the API"""

    def setUp(self):
        super().setUp()
        self.admin = make_admin()
        authenticate(self.client, self.admin)
        self.engineering = Department.objects.create(name='Engineering', code='ENG', created_by=self.admin)
        self.engineer = Designation.objects.create(
            title='Engineer', level=3, department=self.engineering, created_by=self.admin,
        )

    def payload(self, **overrides):
        data = {
            'employeeType': 'full-time',
            'fullName': 'Asha Rao',
            'address': json.dumps({'street': '1 MG Road', 'city': 'Bengaluru', 'state': 'KA', 'zipCode': '560001'}),
            'bloodGroup': 'O+',
            'mobileNumber': '+91 98765 43210',
            'email': 'Asha@Example.com',
            'dateOfBirth': '1990-05-17',
            'dateOfJoining': '2020-01-06',
            'department': self.engineering.pk,
            'designation': self.engineer.pk,
            'employeePicture': make_image(),
        }
        data.update(overrides)
        return {key: value for key, value in data.items() if value is not None}

    def create_id_card(self, email='ravi@example.com', **extra):
        fields = {
            'employee_type': IdCard.EmployeeType.INTERN,
            'full_name': 'Ravi Kumar',
            'employee_picture': '/uploads/employees/pictures/ravi.png',
            'street': '2 Park Street',
            'city': 'Kolkata',
            'state': 'WB',
            'zip_code': '700016',
            'blood_group': IdCard.BloodGroup.A_POSITIVE,
            'mobile_number': '9876543210',
            'email': email,
            'date_of_birth': date(1995, 1, 1),
            'date_of_joining': date(2021, 1, 1),
            'department': self.engineering,
            'designation': self.engineer,
            'created_by': self.admin,
        }
        fields.update(extra)
        return IdCard.objects.create(**fields)

    def test_create(self):
        response = self.client.post('/api/id-cards', self.payload(), format='multipart')
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['message'], 'ID Card created successfully')

        card = response.data['data']['idCard']
        self.assertRegex(card['idCardNumber'], r'^EMP\d{12}$')
        self.assertEqual(card['email'], 'asha@example.com')
        self.assertEqual(card['address'], {
            'street': '1 MG Road', 'city': 'Bengaluru', 'state': 'KA', 'zipCode': '560001', 'country': 'India',
        })
        self.assertEqual(card['department'], {'id': self.engineering.pk, 'name': 'Engineering', 'code': 'ENG'})
        self.assertEqual(card['designation'], {'id': self.engineer.pk, 'title': 'Engineer', 'level': 3})
        self.assertTrue(card['employeePicture'].startswith('/uploads/employees/pictures/employee-'))
        self.assertIn(os.path.basename(card['employeePicture']), stored_pictures())
        self.assertEqual(card['employeeType'], 'full-time')
        self.assertEqual(card['bloodGroup'], 'O+')
        self.assertEqual(card['dateOfBirth'], '1990-05-17')
        self.assertEqual(card['dateOfJoining'], '2020-01-06')

        stored = IdCard.objects.get()
        self.assertEqual(stored.employee_type, IdCard.EmployeeType.FULL_TIME)
        self.assertEqual(stored.blood_group, IdCard.BloodGroup.O_POSITIVE)
        self.assertEqual(stored.date_of_birth, date(1990, 5, 17))
        self.assertEqual(stored.date_of_joining, date(2020, 1, 6))

    def test_retrieve_renders_stored_fields(self):
        card = self.create_id_card()
        response = self.client.get(f'/api/id-cards/{card.pk}')
        self.assertEqual(response.status_code, 200)
        rendered = response.data['data']['idCard']
        self.assertEqual(rendered['employeeType'], 'intern')
        self.assertEqual(rendered['bloodGroup'], 'A+')
        self.assertEqual(rendered['dateOfBirth'], '1995-01-01')
        self.assertEqual(rendered['dateOfJoining'], '2021-01-01')

    def test_create_with_dotted_address_keys(self):
        payload = self.payload(address=None)
        payload.update({
            'address.street': '1 MG Road',
            'address.city': 'Bengaluru',
            'address.state': 'KA',
            'address.zipCode': '560001',
            'address.country': 'India',
        })
        response = self.client.post('/api/id-cards', payload, format='multipart')
        self.assertEqual(response.status_code, 201)
        self.assertEqual(IdCard.objects.get().city, 'Bengaluru')

    def test_picture_is_required(self):
        response = self.client.post('/api/id-cards', self.payload(employeePicture=None), format='multipart')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['message'], 'Employee picture is required')
        self.assertFalse(IdCard.objects.exists())

    def test_rejects_non_image_upload(self):
        upload = SimpleUploadedFile('notes.txt', b'plain text', content_type='text/plain')
        response = self.client.post('/api/id-cards', self.payload(employeePicture=upload), format='multipart')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['message'], 'Only image files (jpeg, jpg, png, webp) are allowed!')

    def test_inactive_references_are_rejected_before_storing(self):
        self.engineering.soft_delete()
        response = self.client.post('/api/id-cards', self.payload(), format='multipart')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['message'], 'Invalid department')

        sales = Department.objects.create(name='Sales', code='SAL', created_by=self.admin)
        self.engineer.soft_delete()
        response = self.client.post('/api/id-cards', self.payload(department=sales.pk), format='multipart')
        self.assertEqual(response.data['message'], 'Invalid designation')

        self.assertFalse(IdCard.objects.exists())
        self.assertEqual(stored_pictures(), [])

    def test_validation_messages(self):
        tomorrow = (date.today() + timedelta(days=2)).isoformat()
        cases = [
            ({'dateOfBirth': tomorrow}, 'Date of birth cannot be in the future'),
            ({'dateOfJoining': tomorrow}, 'Date of joining cannot be in the future'),
            ({'mobileNumber': '12ab'}, 'Please enter a valid mobile number'),
            ({'employeeType': 'volunteer'}, 'Please select a valid employee type'),
            ({'bloodGroup': 'C+'}, 'Please select a valid blood group'),
            ({'address': json.dumps({'city': 'Bengaluru', 'state': 'KA', 'zipCode': '1'})}, 'Street address is required'),
        ]
        for overrides, message in cases:
            response = self.client.post('/api/id-cards', self.payload(**overrides), format='multipart')
            self.assertEqual(response.status_code, 400, overrides)
            self.assertEqual(response.data['message'], message)

    def test_duplicate_email(self):
        self.create_id_card(email='asha@example.com')
        response = self.client.post('/api/id-cards', self.payload(), format='multipart')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['message'], 'Employee with this email already exists')

    def test_storage_conflict_discards_upload(self):
        error = IntegrityError('UNIQUE constraint failed: id_cards_idcard.email')
        with mock.patch.object(IdCard, 'save', side_effect=error):
            response = self.client.post('/api/id-cards', self.payload(), format='multipart')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data, {'success': False, 'message': 'email already exists'})
        self.assertEqual(stored_pictures(), [])

    def test_partial_update(self):
        card = self.create_id_card()
        response = self.client.put(f'/api/id-cards/{card.pk}', {
            'fullName': 'Ravi K',
            'address': {'city': 'Howrah'},
        })
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['message'], 'ID Card updated successfully')
        card.refresh_from_db()
        self.assertEqual(card.full_name, 'Ravi K')
        self.assertEqual(card.city, 'Howrah')
        self.assertEqual(card.street, '2 Park Street')
        self.assertEqual(card.employee_type, IdCard.EmployeeType.INTERN)

        response = self.client.put(f'/api/id-cards/{card.pk}', {
            'employeeType': 'contract',
            'bloodGroup': 'B-',
            'dateOfJoining': '2022-02-02',
        })
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['data']['idCard']['employeeType'], 'contract')
        card.refresh_from_db()
        self.assertEqual(card.employee_type, IdCard.EmployeeType.CONTRACT)
        self.assertEqual(card.blood_group, IdCard.BloodGroup.B_NEGATIVE)
        self.assertEqual(card.date_of_joining, date(2022, 2, 2))
        self.assertEqual(card.date_of_birth, date(1995, 1, 1))

    def test_partial_update_checks_only_supplied_reference(self):
        card = self.create_id_card()
        self.engineering.soft_delete()

        response = self.client.put(f'/api/id-cards/{card.pk}', {'fullName': 'Ravi K'})
        self.assertEqual(response.status_code, 200)

        response = self.client.put(f'/api/id-cards/{card.pk}', {'department': self.engineering.pk})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['message'], 'Invalid department')

    def test_lookup_by_number_is_case_insensitive(self):
        card = self.create_id_card()
        response = self.client.get(f'/api/id-cards/number/{card.id_card_number.lower()}')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['data']['idCard']['id'], card.pk)

        response = self.client.get('/api/id-cards/number/EMP000000000000')
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data['message'], 'ID Card not found')

    def test_replace_picture(self):
        card = self.create_id_card()
        response = self.client.put(
            f'/api/id-cards/{card.pk}/picture', {'employeePicture': make_image('new.jpg', image_format='JPEG', content_type='image/jpeg')},
            format='multipart',
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['message'], 'Employee picture updated successfully')
        card.refresh_from_db()
        self.assertEqual(response.data['data']['employeePicture'], card.employee_picture)
        self.assertTrue(re.match(r'^/uploads/employees/pictures/employee-\d+-\d+\.jpg$', card.employee_picture))

        response = self.client.put(f'/api/id-cards/{card.pk}/picture', {}, format='multipart')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['message'], 'Employee picture is required')

    def test_list_filters(self):
        self.create_id_card(email='a@example.com', full_name='Anil')
        self.create_id_card(email='b@example.com', full_name='Bina', employee_type=IdCard.EmployeeType.CONTRACT)
        self.create_id_card(email='c@example.com', full_name='Chitra', is_active=False)

        response = self.client.get('/api/id-cards', {'employeeType': 'contract'})
        self.assertEqual([card['fullName'] for card in response.data['data']['idCards']], ['Bina'])

        response = self.client.get('/api/id-cards', {'search': 'A@EXAMPLE'})
        self.assertEqual([card['fullName'] for card in response.data['data']['idCards']], ['Anil'])

        response = self.client.get('/api/id-cards')
        self.assertEqual(response.data['data']['pagination']['totalIdCards'], 2)

    def test_soft_delete(self):
        card = self.create_id_card()
        response = self.client.delete(f'/api/id-cards/{card.pk}')
        self.assertEqual(response.data['message'], 'ID Card deleted successfully')
        self.assertEqual(self.client.get(f'/api/id-cards/{card.pk}').status_code, 404)
        self.assertEqual(self.client.get(f'/api/id-cards/number/{card.id_card_number}').status_code, 404)

    def test_stats(self):
        sales = Department.objects.create(name='Sales', code='SAL', created_by=self.admin)
        self.create_id_card(email='a@example.com', date_of_joining=date.today() - timedelta(days=3))
        self.create_id_card(email='b@example.com', department=sales, blood_group=IdCard.BloodGroup.O_NEGATIVE)
        self.create_id_card(email='c@example.com', department=sales)
        self.create_id_card(email='d@example.com', is_active=False)

        response = self.client.get('/api/id-cards/stats/overview')
        self.assertEqual(response.status_code, 200)
        stats = response.data['data']
        self.assertEqual(stats['totalIdCards'], 3)
        self.assertEqual(stats['employeeTypeStats'], [{'employeeType': 'intern', 'count': 3}])
        self.assertEqual(stats['departmentStats'], [
            {'department': 'Sales', 'count': 2},
            {'department': 'Engineering', 'count': 1},
        ])
        self.assertEqual(stats['bloodGroupStats'], [
            {'bloodGroup': 'A+', 'count': 2},
            {'bloodGroup': 'O-', 'count': 1},
        ])
        self.assertEqual(stats['recentHires'], 1)
