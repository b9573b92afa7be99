import random
import time

from django.db import IntegrityError, models, transaction

from core.models import OwnedModel
from departments.models import Department, Designation


def generate_id_card_number():
    """EMP + last 8 digits of the millisecond clock + 4 random digits"""
    timestamp = str(int(time.time() * 1000))[-8:]
    return f'EMP{timestamp}{random.randint(0, 9999):04d}'


class IdCard(OwnedModel):
    """Employee ID card"""

    class EmployeeType(models.TextChoices):
        FULL_TIME = 'full-time', 'Full time'
        PART_TIME = 'part-time', 'Part time'
        CONTRACT = 'contract', 'Contract'
        INTERN = 'intern', 'Intern'
        TEMPORARY = 'temporary', 'Temporary'

    class BloodGroup(models.TextChoices):
        A_POSITIVE = 'A+', 'A+'
        A_NEGATIVE = 'A-', 'A-'
        B_POSITIVE = 'B+', 'B+'
        B_NEGATIVE = 'B-', 'B-'
        AB_POSITIVE = 'AB+', 'AB+'
        AB_NEGATIVE = 'AB-', 'AB-'
        O_POSITIVE = 'O+', 'O+'
        O_NEGATIVE = 'O-', 'O-'

    id_card_number = models.CharField(max_length=20, unique=True, editable=False)
    employee_type = models.CharField(max_length=20, choices=EmployeeType.choices)
    full_name = models.CharField(max_length=50)
    employee_picture = models.CharField(max_length=255)

    # Address
    street = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=100)
    zip_code = models.CharField(max_length=20)
    country = models.CharField(max_length=100, default='India')

    blood_group = models.CharField(max_length=3, choices=BloodGroup.choices)
    mobile_number = models.CharField(max_length=20)
    email = models.EmailField(unique=True)
    date_of_birth = models.DateField()
    date_of_joining = models.DateField()

    department = models.ForeignKey(
        Department,
        on_delete=models.PROTECT,
        related_name='id_cards'
    )
    designation = models.ForeignKey(
        Designation,
        on_delete=models.PROTECT,
        related_name='id_cards'
    )

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'ID card'
        verbose_name_plural = 'ID cards'
        indexes = [
            models.Index(fields=['employee_type', 'is_active'], name='idcard_type_active_idx'),
            models.Index(fields=['department', 'is_active'], name='idcard_dept_active_idx'),
            models.Index(fields=['designation', 'is_active'], name='idcard_desig_active_idx'),
        ]

    def __str__(self):
        return f"{self.full_name} ({self.id_card_number})"

    def save(self, *args, **kwargs):
        """Generate id_card_number on first save, retrying on collision"""
        if self.id_card_number:
            super().save(*args, **kwargs)
            return

        max_attempts = 10
        for attempt in range(max_attempts):
            self.id_card_number = generate_id_card_number()
            try:
                with transaction.atomic():
                    super().save(*args, **kwargs)
                break
            except IntegrityError:
                taken = IdCard.objects.filter(id_card_number=self.id_card_number).exists()
                self.id_card_number = ''
                if not taken or attempt == max_attempts - 1:
                    raise
