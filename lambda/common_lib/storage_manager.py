"""
Storage Manager for API operations

This module provides the manager behind the object storage function:
uploads of base64 payloads, presigned download URLs and key listings
against the configured S3 bucket.
"""

import logging

import s3_utils as s3
from exceptions import BusinessLogicError
from validation_utils import (
    DataValidator, decode_base64_content, resolve_content_type
)

logger = logging.getLogger()


class StorageManager:
    """Manager for object storage operations"""

    def __init__(self, bucket_name=None, url_expiration=None, list_page_size=None):
        self.bucket_name = bucket_name or s3.BUCKET_NAME
        self.url_expiration = s3.PRESIGNED_URL_EXPIRATION if url_expiration is None else url_expiration
        self.list_page_size = s3.LIST_PAGE_SIZE if list_page_size is None else list_page_size

        if not self.bucket_name:
            raise BusinessLogicError("Storage bucket is not configured", 500)

    def upload_file(self, key, base64_content, content_type=None):
        """
        Store a base64 payload at key and return a download URL for it

        Args:
            key: Object key
            base64_content: Base64 text, optionally a data URL
            content_type: Explicit MIME type (optional)

        Returns:
            dict: Response data for the upload
        """
        DataValidator.validate_object_key(key)
        DataValidator.validate_optional_string(content_type, 'contentType')

        content, data_url_type = decode_base64_content(base64_content)
        resolved_type = resolve_content_type(key, content_type, data_url_type)

        logger.info(f"Uploading {key} ({resolved_type}, {len(content)} bytes)")
        s3.put_object(self.bucket_name, key, content, resolved_type)

        presigned_url = s3.generate_presigned_download_url(self.bucket_name, key, self.url_expiration)

        return {
            'message': 'File uploaded successfully.',
            'key': key,
            'presignedUrl': presigned_url,
            'contentType': resolved_type,
            'size': len(content),
            'expiresIn': self.url_expiration
        }

    def get_presigned_url(self, key):
        """Presigned download URL for an existing key"""
        DataValidator.validate_object_key(key)

        presigned_url = s3.generate_presigned_download_url(self.bucket_name, key, self.url_expiration)

        return {
            'message': 'Presigned URL generated.',
            'key': key,
            'presignedUrl': presigned_url,
            'expiresIn': self.url_expiration
        }

    def list_files(self, prefix=None):
        DataValidator.validate_optional_string(prefix, 'prefix')
        prefix = prefix or ''

        files = s3.list_object_keys(self.bucket_name, prefix, self.list_page_size)

        return {
            'message': 'Files retrieved successfully.',
            'files': files,
            'count': len(files),
            'prefix': prefix
        }


# Factory function
def get_storage_manager():
    """Factory function to get StorageManager instance"""
    return StorageManager()
