from datetime import date, timedelta

from django.test import SimpleTestCase, override_settings
from django.utils import timezone
from rest_framework.test import APITestCase

from contact.models import Contact
from core.testing import authenticate, make_admin
from departments.models import Department, Designation
from id_cards.models import IdCard
from products.models import Product

from .services import start_of_day, week_start


class BoundaryTest(SimpleTestCase):

    def test_week_starts_on_sunday(self):
        self.assertEqual(week_start(date(2026, 10, 19)), date(2026, 10, 18))  # Monday
        self.assertEqual(week_start(date(2026, 10, 18)), date(2026, 10, 18))  # Sunday
        self.assertEqual(week_start(date(2026, 10, 24)), date(2026, 10, 18))  # Saturday
        self.assertEqual(week_start(date(2026, 11, 1)), date(2026, 11, 1))

    @override_settings(TIME_ZONE='Asia/Kolkata')
    def test_day_starts_at_local_midnight(self):
        moment = start_of_day(date(2026, 10, 19))
        self.assertEqual(timezone.localtime(moment).hour, 0)
        self.assertEqual(moment.utcoffset(), timedelta(hours=5, minutes=30))


class DashboardApiTest(APITestCase):

    def setUp(self):
        self.admin = make_admin()
        authenticate(self.client, self.admin)
        self.engineering = Department.objects.create(name='Engineering', code='ENG', created_by=self.admin)
        self.sales = Department.objects.create(name='Sales', code='SAL', created_by=self.admin)
        self.engineer = Designation.objects.create(
            title='Engineer', level=3, department=self.engineering, created_by=self.admin,
        )
        self.create_employee('one@example.com', self.engineering)
        self.create_employee('two@example.com', self.engineering)
        self.create_employee('three@example.com', self.sales, employee_type=IdCard.EmployeeType.INTERN)
        Product.objects.create(
            product_name='Desk', product_features=['Sturdy'],
            main_image='/uploads/products/main/desk.png', created_by=self.admin,
        )
        Contact.objects.create(
            full_name='Arjun Nair', email_address='arjun@example.com', mobile_number='9876543210',
            subject='Delivery question', message='When will my order be delivered?',
        )

    def create_employee(self, email, department, employee_type=IdCard.EmployeeType.FULL_TIME):
        return IdCard.objects.create(
            employee_type=employee_type,
            full_name='Employee',
            employee_picture='/uploads/employees/pictures/e.png',
            street='1 Main Road', city='Pune', state='MH', zip_code='411001',
            blood_group=IdCard.BloodGroup.O_POSITIVE,
            mobile_number='9876543210',
            email=email,
            date_of_birth=date(1990, 1, 1),
            date_of_joining=date(2020, 1, 1),
            department=department,
            designation=self.engineer,
            created_by=self.admin,
        )

    def test_requires_token(self):
        self.client.credentials()
        response = self.client.get('/api/dashboard/overview')
        self.assertEqual(response.status_code, 401)

    def test_overview(self):
        Product.objects.create(
            product_name='Old chair', product_features=['Wobbly'],
            main_image='/uploads/products/main/chair.png', created_by=self.admin, is_active=False,
        )
        Department.objects.filter(pk=self.sales.pk).update(created_at=timezone.now() - timedelta(days=10))
        self.admin.last_login = timezone.now()
        self.admin.save(update_fields=['last_login'])

        response = self.client.get('/api/dashboard/overview')
        self.assertEqual(response.status_code, 200)
        overview = response.data['data']['overview']
        self.assertEqual(overview['totalAdmins'], 1)
        self.assertEqual(overview['totalProducts'], 1)
        self.assertEqual(overview['totalContacts'], 1)
        self.assertEqual(overview['totalEmployees'], 3)
        self.assertEqual(overview['totalDepartments'], 2)
        self.assertEqual(overview['totalDesignations'], 1)
        self.assertEqual(overview['recentDepartments'], 1)
        self.assertEqual(overview['recentEmployees'], 3)
        self.assertEqual(overview['pendingContacts'], 1)
        self.assertEqual(overview['recentLogins'], 1)

    def test_charts(self):
        response = self.client.get('/api/dashboard/charts')
        data = response.data['data']
        now = timezone.localtime()
        self.assertEqual(data['employeesByMonth'], [{'year': now.year, 'month': now.month, 'count': 3}])
        self.assertEqual(data['contactStatusDistribution'], [{'status': 'new', 'count': 1}])
        self.assertEqual(data['employeeTypeDistribution'], [
            {'employeeType': 'full-time', 'count': 2},
            {'employeeType': 'intern', 'count': 1},
        ])
        self.assertEqual(data['departmentDistribution'], [
            {'department': 'Engineering', 'count': 2},
            {'department': 'Sales', 'count': 1},
        ])
        self.assertEqual(data['designationDistribution'], [{'designation': 'Engineer', 'count': 3}])

    def test_recent_activity_limit(self):
        response = self.client.get('/api/dashboard/recent-activity', {'limit': 2})
        data = response.data['data']
        self.assertEqual(len(data['recentEmployees']), 2)
        self.assertEqual(data['recentEmployees'][0]['department'], {'id': self.sales.pk, 'name': 'Sales'})
        self.assertEqual(data['recentProducts'][0]['createdBy'], {'id': self.admin.pk, 'fullName': 'Test Admin'})
        self.assertEqual(data['recentContacts'][0]['status'], 'new')
        self.assertEqual(data['recentLogins'], [])

    def test_system_health(self):
        response = self.client.get('/api/dashboard/system-health')
        data = response.data['data']
        self.assertEqual(data['dbStatus'], 'connected')
        self.assertEqual(data['storageInfo']['employees'], 3)
        self.assertEqual(data['storageInfo']['admins'], 1)
        self.assertIn('pythonVersion', data['performanceMetrics'])
        self.assertGreaterEqual(data['performanceMetrics']['uptime'], 0)

    def test_quick_stats(self):
        Department.objects.filter(pk=self.sales.pk).update(created_at=timezone.now() - timedelta(days=40))
        response = self.client.get('/api/dashboard/quick-stats')
        data = response.data['data']
        self.assertEqual(data['today']['departments'], 1)
        self.assertEqual(data['thisMonth']['departments'], 1)
        self.assertEqual(data['thisWeek']['employees'], 3)
        self.assertEqual(data['today']['contacts'], 1)
