from django.core.exceptions import ValidationError
from django.core.validators import RegexValidator
from django.utils import timezone

MOBILE_NUMBER_PATTERN = r'^[+]?[\d\s\-\(\)]{10,15}$'

mobile_number_validator = RegexValidator(
    regex=MOBILE_NUMBER_PATTERN,
    message='Please enter a valid mobile number',
)


class NotInFutureValidator:
    """Reject dates after today (in the configured time zone)"""

    def __init__(self, message):
        self.message = message

    def __call__(self, value):
        if value > timezone.localdate():
            raise ValidationError(self.message)