"""
Referential integrity checks run before a write.

A reference is only accepted when it points at a record that exists *and* is
active at the time of the write. References are not re-validated afterwards,
so deactivating a department later leaves existing designations untouched.
"""
from rest_framework import serializers


def resolve_active_reference(model, pk, message):
    """Return the active ``model`` row with primary key ``pk`` or fail with ``message``"""
    if pk in (None, ''):
        raise serializers.ValidationError(message)
    if isinstance(pk, model):
        pk = pk.pk
    # Reject JSON booleans and fractional numbers
    if isinstance(pk, bool) or (isinstance(pk, float) and not pk.is_integer()):
        raise serializers.ValidationError(message)
    try:
        pk = int(pk)
    except (TypeError, ValueError):
        raise serializers.ValidationError(message)
    instance = model.objects.filter(pk=pk, is_active=True).first()
    if instance is None:
        raise serializers.ValidationError(message)
    return instance


class ActiveReferenceField(serializers.RelatedField):
    """
    Writes accept a primary key resolved through ``resolve_active_reference``;
    reads render the related record through ``summary_serializer``.
    """

    def __init__(self, model, invalid_message, summary_serializer=None, **kwargs):
        self.model = model
        self.invalid_message = invalid_message
        self.summary_serializer = summary_serializer
        kwargs.setdefault('queryset', model.objects.all())
        error_messages = kwargs.setdefault('error_messages', {})
        error_messages.setdefault('required', invalid_message)
        error_messages.setdefault('null', error_messages['required'])
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        return resolve_active_reference(self.model, data, self.invalid_message)

    def to_representation(self, value):
        if self.summary_serializer is None:
            return value.pk
        return self.summary_serializer(value).data
