"""
Validation utilities for storage request payloads
Centralizes field checks and payload decoding across the storage functions
"""

import base64
import binascii
import mimetypes

from exceptions import ValidationError

# S3 rejects keys longer than this many UTF-8 bytes
MAX_KEY_BYTES = 1024
DEFAULT_CONTENT_TYPE = 'application/octet-stream'


class DataValidator:
    """Common data validation patterns"""

    @staticmethod
    def validate_required_fields(data, required_fields):
        """
        Validate that all required fields are present and not empty

        Args:
            data (dict): Data to validate
            required_fields (list): List of required field names

        Raises:
            ValidationError: Naming every missing field, in the order given
        """
        if not isinstance(data, dict):
            raise ValidationError("Data must be a dictionary")

        missing = [field for field in required_fields
                   if field not in data or data[field] is None or data[field] == '']
        if missing:
            raise ValidationError(f"Missing required parameter(s): {', '.join(missing)}",
                                  missing[0])

    @staticmethod
    def validate_object_key(key, field_name="key"):
        """
        Validate an object key

        Args:
            key: Key to validate
            field_name (str): Field name for error messages

        Raises:
            ValidationError: If the key is not a non-empty string within S3 limits
        """
        if not key or not isinstance(key, str):
            raise ValidationError(f"{field_name} must be a non-empty string", field_name)

        if len(key.encode('utf-8')) > MAX_KEY_BYTES:
            raise ValidationError(f"{field_name} must be no more than {MAX_KEY_BYTES} bytes", field_name)

        return True

    @staticmethod
    def validate_optional_string(value, field_name):
        if value is not None and not isinstance(value, str):
            raise ValidationError(f"{field_name} must be a string", field_name)
        return True


def split_data_url(content):
    """
    Split an optional ``data:<mime>;base64,`` prefix off a base64 payload

    Returns:
        tuple: (mime type or None, base64 text)
    """
    if content.startswith('data:') and ',' in content:
        header, encoded = content.split(',', 1)
        mime_type = header[len('data:'):].split(';', 1)[0].strip()
        return (mime_type or None), encoded
    return None, content


def normalize_base64(encoded):
    """Drop whitespace, map the URL-safe alphabet to the standard one and restore padding"""
    encoded = ''.join(encoded.split()).replace('-', '+').replace('_', '/').rstrip('=')
    return encoded + '=' * (-len(encoded) % 4)


def decode_base64_content(content, field_name="base64Content"):
    """
    Decode a base64 payload, tolerating a data-URL prefix, embedded whitespace,
    missing padding and the URL-safe alphabet

    Returns:
        tuple: (bytes, mime type from the data URL or None)

    Raises:
        ValidationError: If the payload is not a string or not valid base64
    """
    if not isinstance(content, str):
        raise ValidationError(f"{field_name} must be a base64 string", field_name)

    mime_type, encoded = split_data_url(content.strip())
    encoded = normalize_base64(encoded)

    try:
        data = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError(f"{field_name} is not valid base64.", field_name)

    return data, mime_type


def resolve_content_type(key, explicit_type=None, data_url_type=None):
    """Pick the stored content type: explicit, then data URL, then key extension"""
    if explicit_type:
        return explicit_type
    if data_url_type:
        return data_url_type
    guessed, _ = mimetypes.guess_type(key)
    return guessed or DEFAULT_CONTENT_TYPE
