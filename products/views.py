from django.db import transaction
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated

from core.listing import SortOrderingFilter, TextSearchFilter
from core.permissions import IsCreatorOrSuperAdmin
from core.responses import success_response
from core.views import ResourceViewSet

from .models import Product
from .serializers import AdditionalImagesSerializer, MainImageSerializer, ProductSerializer


class ProductViewSet(ResourceViewSet):
    """
    ViewSet for products

    list / retrieve / categories: public, a bearer token is optional
    create: multipart, requires mainImage
    update, destroy, images, main_image: creator or super admin only
    """
    queryset = Product.objects.active().select_related('created_by')
    serializer_class = ProductSerializer
    permission_classes = [IsAuthenticated, IsCreatorOrSuperAdmin]
    optional_auth_actions = ('list', 'retrieve', 'categories')
    filter_backends = [DjangoFilterBackend, TextSearchFilter, SortOrderingFilter]
    filterset_fields = ['category']
    text_search_fields = ['product_name', 'description']
    sort_fields = {
        'createdAt': 'created_at',
        'updatedAt': 'updated_at',
        'productName': 'product_name',
        'price': 'price',
        'category': 'category',
    }
    resource_name = 'Product'
    detail_name = 'product'
    collection_name = 'products'
    pagination_total_key = 'totalProducts'

    @action(detail=True, methods=['post'], url_path='images')
    def images(self, request, pk=None):
        """Append up to 5 additional images"""
        serializer = AdditionalImagesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = self.get_object()
        serializer.instance = product
        with transaction.atomic():
            serializer.save()
        return success_response(
            {'additionalImages': serializer.stored_paths},
            'Additional images uploaded successfully',
        )

    @action(detail=True, methods=['put'], url_path='main-image')
    def main_image(self, request, pk=None):
        serializer = MainImageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = self.get_object()
        serializer.instance = product
        with transaction.atomic():
            serializer.save()
        return success_response({'mainImage': product.main_image}, 'Main image updated successfully')

    @action(detail=False, methods=['get'], url_path='categories/list')
    def categories(self, request):
        """Distinct non-empty categories of active products"""
        categories = (
            Product.objects.active()
            .exclude(category='')
            .order_by('category')
            .values_list('category', flat=True)
            .distinct()
        )
        return success_response({'categories': list(categories)})
