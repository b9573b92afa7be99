import os
from decimal import Decimal

from django.conf import settings
from rest_framework.test import APITestCase

from admins.models import Admin
from core.testing import TemporaryMediaMixin, authenticate, make_admin, make_image

from .models import Product


class ProductApiTest(TemporaryMediaMixin, APITestCase):
    """Products: public reads, owner-only writes, image uploads"""

    def setUp(self):
        super().setUp()
        self.owner = make_admin(email='owner@example.com')
        self.other = make_admin(email='other@example.com')
        self.boss = make_admin(email='boss@example.com', role=Admin.Role.SUPER_ADMIN)
        authenticate(self.client, self.owner)

    def create_product(self, name='Desk', **extra):
        fields = {
            'product_name': name,
            'product_features': ['Sturdy'],
            'main_image': '/uploads/products/main/desk.png',
            'created_by': self.owner,
        }
        fields.update(extra)
        return Product.objects.create(**fields)

    def post_product(self, **overrides):
        data = {
            'productName': 'Standing Desk',
            'productFeatures': 'Durable',
            'description': 'Adjustable height desk',
            'price': '249.50',
            'category': 'Furniture',
            'mainImage': make_image('desk.png'),
        }
        data.update(overrides)
        data = {key: value for key, value in data.items() if value is not None}
        return self.client.post('/api/products', data, format='multipart')

    def test_create_with_bare_feature_string(self):
        response = self.post_product()
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['message'], 'Product created successfully')
        product = response.data['data']['product']
        self.assertEqual(product['productFeatures'], ['Durable'])
        self.assertEqual(product['price'], Decimal('249.50'))
        self.assertEqual(product['additionalImages'], [])
        self.assertTrue(product['mainImage'].startswith('/uploads/products/main/main-'))
        stored = os.path.join(settings.MEDIA_ROOT, product['mainImage'][len('/uploads/'):])
        self.assertTrue(os.path.exists(stored))

    def test_feature_formats(self):
        response = self.post_product(productFeatures='["Fast", " ", "Light"]')
        self.assertEqual(response.data['data']['product']['productFeatures'], ['Fast', 'Light'])

        response = self.post_product(productFeatures=['Quiet', 'Compact'])
        self.assertEqual(response.data['data']['product']['productFeatures'], ['Quiet', 'Compact'])

    def test_empty_feature_list_is_rejected(self):
        response = self.post_product(productFeatures='[]')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['message'], 'At least one product feature is required')
        self.assertFalse(Product.objects.exists())

    def test_validation_messages(self):
        response = self.post_product(mainImage=None)
        self.assertEqual(response.data['message'], 'Main product image is required')

        response = self.post_product(price='-1')
        self.assertEqual(response.data['message'], 'Price cannot be negative')

        response = self.post_product(productName='x' * 101)
        self.assertEqual(response.data['message'], 'Product name cannot exceed 100 characters')

    def test_empty_price_means_no_price(self):
        response = self.post_product(price='')
        self.assertEqual(response.status_code, 201)
        self.assertIsNone(response.data['data']['product']['price'])

    def test_create_requires_token(self):
        self.client.credentials()
        response = self.post_product()
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.data['message'], 'Access token is required')

    def test_public_reads(self):
        product = self.create_product()
        self.client.credentials()
        self.assertEqual(self.client.get('/api/products').status_code, 200)
        response = self.client.get(f'/api/products/{product.pk}')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['data']['product']['createdBy'], {'id': self.owner.pk, 'fullName': 'Test Admin'})

        # a broken token does not block public reads
        self.client.credentials(HTTP_AUTHORIZATION='Bearer broken')
        self.assertEqual(self.client.get('/api/products').status_code, 200)

    def test_inactive_product_is_not_found(self):
        product = self.create_product(is_active=False)
        response = self.client.get(f'/api/products/{product.pk}')
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data['message'], 'Product not found')

    def test_search_and_category_filter(self):
        self.create_product('Oak Desk', description='Solid wood', category='Furniture')
        self.create_product('Desk Lamp', category='Lighting')
        self.create_product('Monitor Arm', description='Fits any desk', category='Accessories')
        self.create_product('Chair', category='Furniture')

        response = self.client.get('/api/products', {'search': 'lamp wood', 'sortBy': 'productName', 'sortOrder': 'asc'})
        names = [product['productName'] for product in response.data['data']['products']]
        self.assertEqual(names, ['Desk Lamp', 'Oak Desk'])

        response = self.client.get('/api/products', {'category': 'Furniture', 'sortBy': 'productName', 'sortOrder': 'asc'})
        names = [product['productName'] for product in response.data['data']['products']]
        self.assertEqual(names, ['Chair', 'Oak Desk'])
        self.assertEqual(response.data['data']['pagination']['totalProducts'], 2)

    def test_update_ownership(self):
        product = self.create_product()
        payload = {'productName': 'Corner Desk', 'productFeatures': ['L-shaped']}

        authenticate(self.client, self.other)
        response = self.client.put(f'/api/products/{product.pk}', payload)
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.data['message'], 'Access denied')

        authenticate(self.client, self.boss)
        response = self.client.put(f'/api/products/{product.pk}', payload)
        self.assertEqual(response.status_code, 200)

        authenticate(self.client, self.owner)
        response = self.client.put(f'/api/products/{product.pk}', dict(payload, price=10))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['message'], 'Product updated successfully')
        product.refresh_from_db()
        self.assertEqual(product.product_name, 'Corner Desk')
        self.assertEqual(product.price, Decimal('10'))
        self.assertEqual(product.main_image, '/uploads/products/main/desk.png')

    def test_delete_ownership(self):
        product = self.create_product()
        authenticate(self.client, self.other)
        self.assertEqual(self.client.delete(f'/api/products/{product.pk}').status_code, 403)

        authenticate(self.client, self.owner)
        response = self.client.delete(f'/api/products/{product.pk}')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['message'], 'Product deleted successfully')
        product.refresh_from_db()
        self.assertFalse(product.is_active)
        self.assertEqual(self.client.get(f'/api/products/{product.pk}').status_code, 404)

    def test_additional_images(self):
        product = self.create_product(additional_images=['/uploads/products/additional/old.png'])
        response = self.client.post(
            f'/api/products/{product.pk}/images',
            {'additionalImages': [make_image('a.png'), make_image('b.png')]},
            format='multipart',
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['message'], 'Additional images uploaded successfully')
        new_images = response.data['data']['additionalImages']
        self.assertEqual(len(new_images), 2)
        product.refresh_from_db()
        self.assertEqual(product.additional_images, ['/uploads/products/additional/old.png'] + new_images)

    def test_additional_images_limits(self):
        product = self.create_product()
        response = self.client.post(
            f'/api/products/{product.pk}/images',
            {'additionalImages': [make_image(f'{index}.png') for index in range(6)]},
            format='multipart',
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['message'], 'Too many files. Maximum 5 additional images allowed.')

        response = self.client.post(f'/api/products/{product.pk}/images', {}, format='multipart')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['message'], 'At least one image is required')

        authenticate(self.client, self.other)
        response = self.client.post(
            f'/api/products/{product.pk}/images', {'additionalImages': [make_image()]}, format='multipart',
        )
        self.assertEqual(response.status_code, 403)
        product.refresh_from_db()
        self.assertEqual(product.additional_images, [])

    def test_replace_main_image(self):
        product = self.create_product()
        response = self.client.put(
            f'/api/products/{product.pk}/main-image',
            {'mainImage': make_image('new.jpeg', image_format='JPEG', content_type='image/jpeg')},
            format='multipart',
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['message'], 'Main image updated successfully')
        product.refresh_from_db()
        self.assertEqual(response.data['data']['mainImage'], product.main_image)
        self.assertTrue(product.main_image.endswith('.jpeg'))

        response = self.client.put(f'/api/products/{product.pk}/main-image', {}, format='multipart')
        self.assertEqual(response.data['message'], 'Main image is required')

    def test_categories(self):
        self.create_product('Desk', category='Furniture')
        self.create_product('Chair', category='Furniture')
        self.create_product('Lamp', category='Lighting')
        self.create_product('Mystery')
        self.create_product('Old', category='Archive', is_active=False)

        self.client.credentials()
        response = self.client.get('/api/products/categories/list')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['data']['categories'], ['Furniture', 'Lighting'])
