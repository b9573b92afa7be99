"""
Serializer fields shared by the resource serializers.

Multipart forms can only carry flat strings, so the structured fields here
(feature lists, nested objects) also accept their JSON-encoded form.
"""
import json

from rest_framework import serializers
from rest_framework.utils import html

DATE_INPUT_FORMATS = [
    'iso-8601',
    '%Y-%m-%dT%H:%M:%S.%fZ',
    '%Y-%m-%dT%H:%M:%SZ',
]


def message_set(label, min_length=None, max_length=None, required=None):
    """error_messages for a CharField, worded the way clients expect"""
    messages = {}
    required = required or f'{label} is required'
    messages['required'] = required
    messages['blank'] = required
    messages['null'] = required
    if min_length is not None:
        messages['min_length'] = f'{label} must be at least {min_length} characters long'
    if max_length is not None:
        messages['max_length'] = f'{label} cannot exceed {max_length} characters'
    return messages


class UpperCaseCharField(serializers.CharField):

    def to_internal_value(self, data):
        return super().to_internal_value(data).upper()


class LowerCaseEmailField(serializers.EmailField):

    def __init__(self, **kwargs):
        error_messages = kwargs.setdefault('error_messages', {})
        error_messages.setdefault('invalid', 'Please enter a valid email address')
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        return super().to_internal_value(data).lower()


class FeatureListField(serializers.Field):
    """
    A non-empty list of strings. Accepts a list, a JSON array string or a bare
    string ("Durable" becomes ["Durable"]). Blank entries are dropped.
    """
    default_error_messages = {
        'required': 'Product features are required',
        'null': 'Product features are required',
        'invalid': 'Product features must be an array or string',
        'empty': 'At least one product feature is required',
    }

    def get_value(self, dictionary):
        if html.is_html_input(dictionary):
            if self.field_name not in dictionary:
                return serializers.empty
            values = dictionary.getlist(self.field_name)
            return values[0] if len(values) == 1 else values
        return super().get_value(dictionary)

    def to_internal_value(self, data):
        if isinstance(data, str):
            try:
                parsed = json.loads(data)
            except ValueError:
                parsed = [data]
            data = parsed if isinstance(parsed, list) else [data]
        if not isinstance(data, list):
            self.fail('invalid')

        features = []
        for item in data:
            if not isinstance(item, str):
                self.fail('invalid')
            if item.strip():
                features.append(item.strip())
        if not features:
            self.fail('empty')
        return features

    def to_representation(self, value):
        return list(value or [])


class JSONObjectSerializer(serializers.Serializer):
    """
    Nested serializer that also takes a JSON object string, and in multipart
    requests the dotted ``<field>.<key>`` spelling.
    """

    def get_value(self, dictionary):
        if html.is_html_input(dictionary) and self.field_name in dictionary:
            return dictionary.get(self.field_name)
        return super().get_value(dictionary)

    def to_internal_value(self, data):
        if isinstance(data, str):
            try:
                data = json.loads(data)
            except ValueError:
                self.fail('invalid', datatype='str')
        return super().to_internal_value(data)
