from django.conf import settings
from django.db import models


class TimeStampedModel(models.Model):
    """Adds created_at / updated_at maintained on every write"""
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class ActiveQuerySet(models.QuerySet):

    def active(self):
        return self.filter(is_active=True)


class SoftDeleteModel(TimeStampedModel):
    """
    Records are never removed: deleting flips ``is_active`` to False and every
    read path goes through ``objects.active()``.
    """
    is_active = models.BooleanField(default=True)

    objects = ActiveQuerySet.as_manager()

    class Meta:
        abstract = True

    def soft_delete(self):
        """Active -> Inactive. There is no way back."""
        self.is_active = False
        self.save(update_fields=['is_active', 'updated_at'])


class OwnedModel(SoftDeleteModel):
    """Soft-deletable record that remembers which admin created it"""
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='+',
    )

    class Meta:
        abstract = True
