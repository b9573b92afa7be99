from datetime import timedelta

from django.utils import timezone
from rest_framework.test import APITestCase

from core.stats import months_ago
from core.testing import authenticate, make_admin

from .models import Contact


class ContactApiTest(APITestCase):
    """Public submission and the admin workflow around contacts"""

    def setUp(self):
        self.admin = make_admin()

    def payload(self, **overrides):
        data = {
            'fullName': 'Meera Shah',
            'emailAddress': 'Meera@Example.com',
            'mobileNumber': '+91 98765 43210',
            'subject': 'Bulk order enquiry',
            'message': 'Please share pricing for fifty desks.',
        }
        data.update(overrides)
        return data

    def create_contact(self, **extra):
        fields = {
            'full_name': 'Arjun Nair',
            'email_address': 'arjun@example.com',
            'mobile_number': '9876543210',
            'subject': 'Delivery question',
            'message': 'When will my order be delivered?',
        }
        fields.update(extra)
        return Contact.objects.create(**fields)

    def test_public_submission_records_client(self):
        response = self.client.post(
            '/api/contact',
            self.payload(),
            HTTP_X_FORWARDED_FOR='203.0.113.7, 10.0.0.1',
            HTTP_USER_AGENT='Mozilla/5.0',
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data, {
            'success': True,
            'message': 'Contact form submitted successfully. We will get back to you soon!',
        })
        contact = Contact.objects.get()
        self.assertEqual(contact.email_address, 'meera@example.com')
        self.assertEqual(contact.status, Contact.Status.NEW)
        self.assertEqual(contact.ip_address, '203.0.113.7')
        self.assertEqual(contact.user_agent, 'Mozilla/5.0')

    def test_submission_falls_back_to_peer_address(self):
        self.client.post('/api/contact', self.payload())
        self.assertEqual(Contact.objects.get().ip_address, '127.0.0.1')

    def test_submission_ignores_bad_token(self):
        self.client.credentials(HTTP_AUTHORIZATION='Bearer not-a-token')
        response = self.client.post('/api/contact', self.payload())
        self.assertEqual(response.status_code, 201)

    def test_submission_validation(self):
        response = self.client.post('/api/contact', self.payload(subject='Hi'))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['message'], 'Subject must be at least 5 characters long')

        response = self.client.post('/api/contact', self.payload(mobileNumber='12ab'))
        self.assertEqual(response.data['message'], 'Please enter a valid mobile number')

        response = self.client.post('/api/contact', self.payload(emailAddress=''))
        self.assertEqual(response.data['message'], 'Email address is required')
        self.assertEqual(Contact.objects.count(), 0)

    def test_admin_routes_require_token(self):
        contact = self.create_contact()
        for response in (
            self.client.get('/api/contact'),
            self.client.get(f'/api/contact/{contact.pk}'),
            self.client.delete(f'/api/contact/{contact.pk}'),
            self.client.get('/api/contact/stats/overview'),
        ):
            self.assertEqual(response.status_code, 401)
            self.assertEqual(response.data['message'], 'Access token is required')

    def test_list_filters_and_search(self):
        self.create_contact()
        self.create_contact(
            full_name='Divya Menon', subject='Warranty claim',
            message='The drawer handle came loose.', status=Contact.Status.READ,
        )
        authenticate(self.client, self.admin)

        response = self.client.get('/api/contact', {'status': 'read'})
        contacts = response.data['data']['contacts']
        self.assertEqual([contact['fullName'] for contact in contacts], ['Divya Menon'])
        self.assertEqual(response.data['data']['pagination']['totalContacts'], 1)

        response = self.client.get('/api/contact', {'search': 'DELIVERED'})
        self.assertEqual([contact['fullName'] for contact in response.data['data']['contacts']], ['Arjun Nair'])

    def test_retrieve(self):
        contact = self.create_contact()
        authenticate(self.client, self.admin)
        response = self.client.get(f'/api/contact/{contact.pk}')
        self.assertEqual(response.data['data']['contact']['emailAddress'], 'arjun@example.com')

        response = self.client.get('/api/contact/9999')
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data['message'], 'Contact not found')

    def test_status_update(self):
        contact = self.create_contact()
        authenticate(self.client, self.admin)
        response = self.client.put(f'/api/contact/{contact.pk}/status', {'status': 'replied'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['message'], 'Contact status updated successfully')
        self.assertEqual(response.data['data']['contact']['status'], 'replied')
        contact.refresh_from_db()
        self.assertEqual(contact.status, Contact.Status.REPLIED)

    def test_invalid_status(self):
        contact = self.create_contact()
        authenticate(self.client, self.admin)
        for body in ({'status': 'archived'}, {}):
            response = self.client.put(f'/api/contact/{contact.pk}/status', body)
            self.assertEqual(response.status_code, 400)
            self.assertEqual(response.data['message'], 'Invalid status. Must be one of: new, read, replied, closed')

        response = self.client.put('/api/contact/9999/status', {'status': 'read'})
        self.assertEqual(response.status_code, 404)

    def test_full_update_is_not_allowed(self):
        contact = self.create_contact()
        authenticate(self.client, self.admin)
        response = self.client.put(f'/api/contact/{contact.pk}', self.payload())
        self.assertEqual(response.status_code, 405)

    def test_hard_delete(self):
        contact = self.create_contact()
        authenticate(self.client, self.admin)
        response = self.client.delete(f'/api/contact/{contact.pk}')
        self.assertEqual(response.data['message'], 'Contact deleted successfully')
        self.assertFalse(Contact.objects.filter(pk=contact.pk).exists())

        response = self.client.delete(f'/api/contact/{contact.pk}')
        self.assertEqual(response.status_code, 404)

    def test_stats(self):
        recent = self.create_contact()
        self.create_contact(status=Contact.Status.CLOSED)
        old = self.create_contact(status=Contact.Status.READ)
        Contact.objects.filter(pk=old.pk).update(created_at=months_ago(timezone.now(), 8))
        authenticate(self.client, self.admin)

        response = self.client.get('/api/contact/stats/overview')
        data = response.data['data']
        self.assertEqual(data['totalContacts'], 3)
        self.assertEqual(data['statusBreakdown'], {'new': 1, 'read': 1, 'replied': 0, 'closed': 1})
        created = timezone.localtime(Contact.objects.get(pk=recent.pk).created_at)
        self.assertEqual(data['monthlyStats'], [{'year': created.year, 'month': created.month, 'count': 2}])

    def test_stats_window_includes_six_months_back(self):
        contact = self.create_contact()
        moment = months_ago(timezone.now(), 6) + timedelta(hours=1)
        Contact.objects.filter(pk=contact.pk).update(created_at=moment)
        authenticate(self.client, self.admin)

        response = self.client.get('/api/contact/stats/overview')
        self.assertEqual(sum(row['count'] for row in response.data['data']['monthlyStats']), 1)
