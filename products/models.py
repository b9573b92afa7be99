from django.core.validators import MinValueValidator
from django.db import models

from core.models import OwnedModel


class Product(OwnedModel):
    """Catalogue product; only its creator or a super admin may change it"""
    product_name = models.CharField(max_length=100)
    product_features = models.JSONField(default=list)
    main_image = models.CharField(max_length=255)
    additional_images = models.JSONField(default=list, blank=True)
    description = models.CharField(max_length=1000, blank=True, default='')
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)]
    )
    category = models.CharField(max_length=100, blank=True, default='')

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['category', 'is_active'], name='product_category_active_idx'),
        ]

    def __str__(self):
        return self.product_name
