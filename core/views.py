import logging

from django.db import transaction
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import viewsets
from rest_framework.exceptions import NotFound
from rest_framework.permissions import AllowAny

from .listing import ListingPagination, SortOrderingFilter, SubstringSearchFilter
from .responses import created_response, success_response

logger = logging.getLogger(__name__)


class OptionalAuthMixin:
    """
    Actions listed in ``optional_auth_actions`` are public: a valid bearer
    token still identifies the admin, anything else is treated as anonymous.
    """
    optional_auth_actions = ()

    def _requested_action(self):
        request = getattr(self, 'request', None)
        action_map = getattr(self, 'action_map', None) or {}
        if request is None:
            return None
        return action_map.get(request.method.lower())

    def get_authenticators(self):
        if self._requested_action() in self.optional_auth_actions:
            from admins.authentication import OptionalAdminJWTAuthentication

            return [OptionalAdminJWTAuthentication()]
        return super().get_authenticators()

    def get_permissions(self):
        if self._requested_action() in self.optional_auth_actions:
            return [AllowAny()]
        return super().get_permissions()


class ResourceViewSet(OptionalAuthMixin, viewsets.ModelViewSet):
    """
    CRUD over one resource with the common envelope:

    list: paginated ``{<collection_name>: [...], pagination: {...}}``
    retrieve: ``{<detail_name>: {...}}``
    create: 201, ``<Resource> created successfully``
    update: ``<Resource> updated successfully``
    destroy: soft delete, ``<Resource> deleted successfully``
    """
    resource_name = 'Record'
    detail_name = 'record'
    collection_name = 'records'
    pagination_total_key = 'totalRecords'
    partial_updates = False

    filter_backends = [DjangoFilterBackend, SubstringSearchFilter, SortOrderingFilter]
    pagination_class = ListingPagination
    http_method_names = ['get', 'post', 'put', 'delete', 'head', 'options']
    lookup_value_regex = r'\d+'

    def not_found(self):
        return NotFound(f'{self.resource_name} not found')

    def get_object(self):
        """Active records only; filters and search do not apply to detail routes"""
        obj = self.get_queryset().filter(pk=self.kwargs[self.lookup_field]).first()
        if obj is None:
            raise self.not_found()
        self.check_object_permissions(self.request, obj)
        return obj

    def retrieve(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_object())
        return success_response({self.detail_name: serializer.data})

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.perform_create(serializer)
        logger.info('%s %s created', self.resource_name, serializer.instance.pk)
        return created_response(
            {self.detail_name: serializer.data},
            f'{self.resource_name} created successfully',
        )

    def perform_create(self, serializer):
        with transaction.atomic():
            serializer.save(created_by=self.request.user)

    def update(self, request, *args, **kwargs):
        kwargs.pop('partial', None)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=self.partial_updates)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)
        return success_response(
            {self.detail_name: serializer.data},
            f'{self.resource_name} updated successfully',
        )

    def perform_update(self, serializer):
        with transaction.atomic():
            serializer.save()

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        self.perform_destroy(instance)
        return success_response(message=f'{self.resource_name} deleted successfully')

    def perform_destroy(self, instance):
        """Soft delete"""
        instance.soft_delete()
        logger.info('%s %s deactivated by admin %s', self.resource_name, instance.pk, self.request.user.pk)
