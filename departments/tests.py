from rest_framework.test import APITestCase

from core.testing import authenticate, make_admin

from .models import Department, Designation


class DepartmentApiTest(APITestCase):
    """Department CRUD, listing and soft delete"""

    def setUp(self):
        self.admin = make_admin()
        authenticate(self.client, self.admin)

    def create_department(self, name, code, **extra):
        return Department.objects.create(name=name, code=code, created_by=self.admin, **extra)

    def test_create_uppercases_code(self):
        response = self.client.post('/api/departments', {'name': 'Engineering', 'code': 'eng'})
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['message'], 'Department created successfully')
        department = response.data['data']['department']
        self.assertEqual(department['code'], 'ENG')
        self.assertEqual(department['createdBy'], {'id': self.admin.pk, 'fullName': 'Test Admin'})
        self.assertEqual(Department.objects.get().code, 'ENG')

    def test_duplicate_name_is_rejected(self):
        self.client.post('/api/departments', {'name': 'Engineering', 'code': 'eng'})
        response = self.client.post('/api/departments', {'name': 'Engineering', 'code': 'ENG2'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['message'], 'Department with this name already exists')
        self.assertEqual(Department.objects.count(), 1)

    def test_duplicate_code_is_rejected_case_insensitively(self):
        self.create_department('Engineering', 'ENG')
        response = self.client.post('/api/departments', {'name': 'Platform', 'code': 'eng'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['message'], 'Department with this code already exists')

    def test_validation_message(self):
        response = self.client.post('/api/departments', {'name': 'Engineering', 'code': 'E'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['message'], 'Department code must be at least 2 characters long')

        response = self.client.post('/api/departments', {'code': 'ENG'})
        self.assertEqual(response.data['message'], 'Department name is required')

    def test_pagination(self):
        for number in range(1, 13):
            self.create_department(f'Dept {number:02d}', f'D{number:02d}')
        response = self.client.get('/api/departments', {
            'page': 2, 'limit': 5, 'sortBy': 'name', 'sortOrder': 'asc',
        })
        self.assertEqual(response.status_code, 200)
        data = response.data['data']
        self.assertEqual(
            [department['name'] for department in data['departments']],
            ['Dept 06', 'Dept 07', 'Dept 08', 'Dept 09', 'Dept 10'],
        )
        self.assertEqual(data['pagination'], {
            'currentPage': 2,
            'totalPages': 3,
            'totalDepartments': 12,
            'hasNextPage': True,
            'hasPrevPage': True,
        })

    def test_default_sort_is_newest_first(self):
        first = self.create_department('First', 'FST')
        second = self.create_department('Second', 'SND')
        response = self.client.get('/api/departments')
        ids = [department['id'] for department in response.data['data']['departments']]
        self.assertEqual(ids, [second.pk, first.pk])

    def test_search(self):
        self.create_department('Engineering', 'ENG', description='Builds things')
        self.create_department('Finance', 'FIN')
        response = self.client.get('/api/departments', {'search': 'build'})
        names = [department['name'] for department in response.data['data']['departments']]
        self.assertEqual(names, ['Engineering'])

    def test_update(self):
        department = self.create_department('Engineering', 'ENG')
        response = self.client.put(f'/api/departments/{department.pk}', {
            'name': 'Engineering', 'code': 'eng', 'description': 'Product engineering',
        })
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['message'], 'Department updated successfully')
        self.assertEqual(response.data['data']['department']['description'], 'Product engineering')

    def test_soft_delete_hides_department(self):
        department = self.create_department('Engineering', 'ENG')
        response = self.client.delete(f'/api/departments/{department.pk}')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['message'], 'Department deleted successfully')

        department.refresh_from_db()
        self.assertFalse(department.is_active)

        response = self.client.get(f'/api/departments/{department.pk}')
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data['message'], 'Department not found')
        self.assertEqual(self.client.delete(f'/api/departments/{department.pk}').status_code, 404)
        self.assertEqual(self.client.get('/api/departments').data['data']['departments'], [])
        self.assertEqual(self.client.get('/api/departments/list/active').data['data']['departments'], [])

    def test_active_dropdown(self):
        self.create_department('Sales', 'SAL')
        self.create_department('Engineering', 'ENG')
        self.create_department('Legacy', 'LEG', is_active=False)
        response = self.client.get('/api/departments/list/active')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            [(item['name'], item['code']) for item in response.data['data']['departments']],
            [('Engineering', 'ENG'), ('Sales', 'SAL')],
        )
        self.assertEqual(set(response.data['data']['departments'][0]), {'id', 'name', 'code'})

    def test_requires_token(self):
        self.client.credentials()
        response = self.client.get('/api/departments')
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.data['message'], 'Access token is required')


class DesignationApiTest(APITestCase):
    """Designations and the active-department check"""

    def setUp(self):
        self.admin = make_admin()
        authenticate(self.client, self.admin)
        self.engineering = Department.objects.create(name='Engineering', code='ENG', created_by=self.admin)
        self.closed = Department.objects.create(name='Closed', code='CLS', created_by=self.admin, is_active=False)

    def create_designation(self, title, level, department=None, **extra):
        return Designation.objects.create(
            title=title,
            level=level,
            department=department or self.engineering,
            created_by=self.admin,
            **extra
        )

    def test_create(self):
        response = self.client.post('/api/designations', {
            'title': 'Engineer', 'level': 3, 'department': self.engineering.pk,
        })
        self.assertEqual(response.status_code, 201)
        designation = response.data['data']['designation']
        self.assertEqual(designation['department'], {'id': self.engineering.pk, 'name': 'Engineering', 'code': 'ENG'})
        self.assertEqual(designation['level'], 3)

    def test_inactive_or_missing_department_is_rejected(self):
        for department_id in (self.closed.pk, 9999, 'abc'):
            response = self.client.post('/api/designations', {
                'title': 'Engineer', 'level': 3, 'department': department_id,
            })
            self.assertEqual(response.status_code, 400)
            self.assertEqual(response.data['message'], 'Invalid department')
        self.assertFalse(Designation.objects.exists())

    def test_level_bounds(self):
        response = self.client.post('/api/designations', {
            'title': 'Engineer', 'level': 0, 'department': self.engineering.pk,
        })
        self.assertEqual(response.data['message'], 'Level must be at least 1')
        response = self.client.post('/api/designations', {
            'title': 'Engineer', 'level': 21, 'department': self.engineering.pk,
        })
        self.assertEqual(response.data['message'], 'Level cannot exceed 20')

    def test_duplicate_title(self):
        self.create_designation('Engineer', 3)
        response = self.client.post('/api/designations', {
            'title': 'Engineer', 'level': 4, 'department': self.engineering.pk,
        })
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['message'], 'Designation with this title already exists')

    def test_update_to_inactive_department_is_rejected(self):
        designation = self.create_designation('Engineer', 3)
        response = self.client.put(f'/api/designations/{designation.pk}', {
            'title': 'Engineer', 'level': 3, 'department': self.closed.pk,
        })
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['message'], 'Invalid department')
        designation.refresh_from_db()
        self.assertEqual(designation.department, self.engineering)

    def test_existing_reference_survives_department_deactivation(self):
        designation = self.create_designation('Engineer', 3)
        self.engineering.soft_delete()
        response = self.client.get(f'/api/designations/{designation.pk}')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['data']['designation']['department']['code'], 'ENG')

    def test_filter_by_department(self):
        sales = Department.objects.create(name='Sales', code='SAL', created_by=self.admin)
        self.create_designation('Engineer', 3)
        self.create_designation('Account Manager', 4, department=sales)
        response = self.client.get('/api/designations', {'department': sales.pk})
        titles = [item['title'] for item in response.data['data']['designations']]
        self.assertEqual(titles, ['Account Manager'])
        self.assertEqual(response.data['data']['pagination']['totalDesignations'], 1)

    def test_by_department(self):
        self.create_designation('Senior Engineer', 5)
        self.create_designation('Engineer', 3)
        self.create_designation('Architect', 5)
        self.create_designation('Retired', 1, is_active=False)
        response = self.client.get(f'/api/designations/department/{self.engineering.pk}')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            [(item['title'], item['level']) for item in response.data['data']['designations']],
            [('Engineer', 3), ('Architect', 5), ('Senior Engineer', 5)],
        )

    def test_by_department_not_found(self):
        for department_id in (self.closed.pk, 9999):
            response = self.client.get(f'/api/designations/department/{department_id}')
            self.assertEqual(response.status_code, 404)
            self.assertEqual(response.data['message'], 'Department not found')

    def test_active_dropdown(self):
        self.create_designation('Engineer', 3)
        response = self.client.get('/api/designations/list/active')
        item = response.data['data']['designations'][0]
        self.assertEqual(item['department'], {'id': self.engineering.pk, 'name': 'Engineering', 'code': 'ENG'})
        self.assertNotIn('description', item)
