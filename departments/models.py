from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from core.models import OwnedModel


class Department(OwnedModel):
    """Department of the organisation; code is stored uppercase"""
    name = models.CharField(max_length=50, unique=True)
    code = models.CharField(max_length=10, unique=True)
    description = models.CharField(max_length=200, blank=True, default='')

    class Meta:
        ordering = ['name']
        verbose_name = 'Department'
        verbose_name_plural = 'Departments'
        indexes = [
            models.Index(fields=['is_active'], name='department_active_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.code})"

    def save(self, *args, **kwargs):
        if self.code:
            self.code = self.code.strip().upper()
        super().save(*args, **kwargs)


class Designation(OwnedModel):
    """Job title within one department"""
    title = models.CharField(max_length=50, unique=True)
    description = models.CharField(max_length=200, blank=True, default='')
    level = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(20)],
        help_text="Hierarchy level (1-20)"
    )
    department = models.ForeignKey(
        Department,
        on_delete=models.PROTECT,
        related_name='designations'
    )

    class Meta:
        ordering = ['level', 'title']
        verbose_name = 'Designation'
        verbose_name_plural = 'Designations'
        indexes = [
            models.Index(fields=['department', 'level'], name='designation_dept_level_idx'),
            models.Index(fields=['is_active'], name='designation_active_idx'),
        ]

    def __str__(self):
        return f"{self.title} - {self.department.name}"
