import ipaddress
import logging

from django.db import transaction
from django.utils import timezone
from rest_framework.decorators import action
from rest_framework.exceptions import MethodNotAllowed

from core.responses import created_response, success_response
from core.stats import grouped_counts, months_ago, monthly_counts
from core.views import ResourceViewSet

from .models import Contact
from .serializers import ContactSerializer, ContactStatusSerializer

logger = logging.getLogger(__name__)


def get_client_ip(request):
    """First X-Forwarded-For hop, else the socket peer; None when unparseable"""
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR')
    candidate = forwarded.split(',')[0].strip() if forwarded else request.META.get('REMOTE_ADDR')
    try:
        return str(ipaddress.ip_address(candidate))
    except (TypeError, ValueError):
        return None


def contact_statistics():
    contacts = Contact.objects.all()
    breakdown = {status: 0 for status in Contact.Status.values}
    for row in grouped_counts(contacts, 'status', 'status'):
        breakdown[row['status']] = row['count']
    return {
        'totalContacts': contacts.count(),
        'statusBreakdown': breakdown,
        'monthlyStats': monthly_counts(contacts, months_ago(timezone.now(), 6)),
    }


class ContactViewSet(ResourceViewSet):
    """
    ViewSet for contact form submissions

    create: public form submission, records client IP and user agent
    list / retrieve / destroy / status / stats: admins only
    destroy: hard delete
    """
    queryset = Contact.objects.all()
    serializer_class = ContactSerializer
    optional_auth_actions = ('create',)
    filterset_fields = ['status']
    search_fields = ['full_name', 'email_address', 'subject', 'message']
    sort_fields = {
        'createdAt': 'created_at',
        'updatedAt': 'updated_at',
        'fullName': 'full_name',
        'emailAddress': 'email_address',
        'subject': 'subject',
        'status': 'status',
    }
    resource_name = 'Contact'
    detail_name = 'contact'
    collection_name = 'contacts'
    pagination_total_key = 'totalContacts'

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        with transaction.atomic():
            contact = serializer.save(
                ip_address=get_client_ip(request),
                user_agent=request.META.get('HTTP_USER_AGENT', ''),
            )
        logger.info('Contact %s submitted from %s', contact.pk, contact.ip_address)
        return created_response(
            message='Contact form submitted successfully. We will get back to you soon!',
        )

    def update(self, request, *args, **kwargs):
        # Only the status of a submission can change, through <id>/status
        raise MethodNotAllowed(request.method)

    def perform_destroy(self, instance):
        pk = instance.pk
        instance.delete()
        logger.info('Contact %s deleted by admin %s', pk, self.request.user.pk)

    @action(detail=True, methods=['put'], url_path='status')
    def status(self, request, pk=None):
        serializer = ContactStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        contact = self.get_object()
        serializer.instance = contact
        with transaction.atomic():
            serializer.save()
        return success_response(
            {self.detail_name: self.get_serializer(contact).data},
            'Contact status updated successfully',
        )

    @action(detail=False, methods=['get'], url_path='stats/overview')
    def stats(self, request):
        return success_response(contact_statistics())
