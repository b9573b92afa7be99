from django.db import models

from core.models import TimeStampedModel


class Contact(TimeStampedModel):
    """
    Public contact form submission. Contacts carry a workflow status instead of
    an active flag and are removed with a hard delete.
    """

    class Status(models.TextChoices):
        NEW = 'new', 'New'
        READ = 'read', 'Read'
        REPLIED = 'replied', 'Replied'
        CLOSED = 'closed', 'Closed'

    full_name = models.CharField(max_length=50)
    email_address = models.EmailField()
    mobile_number = models.CharField(max_length=20)
    subject = models.CharField(max_length=100)
    message = models.TextField(max_length=1000)
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.NEW)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.TextField(blank=True, default='')

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', '-created_at'], name='contact_status_created_idx'),
            models.Index(fields=['email_address'], name='contact_email_idx'),
        ]

    def __str__(self):
        return f'{self.full_name}: {self.subject}'
