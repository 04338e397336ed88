import logging
import os

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger()

# Environment variables
AWS_REGION = os.environ.get('AWS_REGION', 'us-east-1')
BUCKET_NAME = os.environ.get('BUCKET_NAME')
PRESIGNED_URL_EXPIRATION = int(os.environ.get('PRESIGNED_URL_EXPIRATION', str(24 * 60 * 60)))
LIST_PAGE_SIZE = int(os.environ['LIST_PAGE_SIZE']) if os.environ.get('LIST_PAGE_SIZE') else None

# Initialize S3 client
s3_client = boto3.client(
    's3',
    region_name=AWS_REGION,
    config=Config(signature_version='s3v4')
)


def put_object(bucket_name, key, content, content_type=None):
    """Upload an object to S3, overwriting any existing object at the key"""
    params = {
        'Bucket': bucket_name,
        'Key': key,
        'Body': content
    }
    if content_type:
        params['ContentType'] = content_type

    try:
        s3_client.put_object(**params)
        logger.info(f"Uploaded {len(content)} bytes to s3://{bucket_name}/{key}")
        return True
    except (ClientError, BotoCoreError) as e:
        logger.error(f"Error uploading object to S3: {e}")
        raise


def generate_presigned_download_url(bucket_name, key, expires_in=None):
    """Generate a presigned GET URL; the object is not checked for existence"""
    if expires_in is None:
        expires_in = PRESIGNED_URL_EXPIRATION

    try:
        return s3_client.generate_presigned_url(
            'get_object',
            Params={
                'Bucket': bucket_name,
                'Key': key
            },
            ExpiresIn=expires_in
        )
    except (ClientError, BotoCoreError) as e:
        logger.error(f"Error generating presigned URL for s3://{bucket_name}/{key}: {e}")
        raise


def list_objects_page(bucket_name, prefix='', continuation_token=None, max_keys=None):
    """
    Fetch one page of keys from S3

    Returns:
        dict: keys, next_continuation_token and is_truncated for the page
    """
    params = {
        'Bucket': bucket_name,
        'Prefix': prefix or ''
    }
    if continuation_token:
        params['ContinuationToken'] = continuation_token
    if max_keys:
        params['MaxKeys'] = max_keys

    try:
        response = s3_client.list_objects_v2(**params)
    except (ClientError, BotoCoreError) as e:
        logger.error(f"Error listing objects in S3: {e}")
        raise

    return {
        'keys': [obj['Key'] for obj in response.get('Contents', [])],
        'next_continuation_token': response.get('NextContinuationToken'),
        'is_truncated': bool(response.get('IsTruncated'))
    }


def list_object_keys(bucket_name, prefix='', page_size=None):
    """List every key under prefix, following continuation tokens until exhausted"""
    if page_size is None:
        page_size = LIST_PAGE_SIZE

    keys = []
    continuation_token = None
    pages = 0

    while True:
        page = list_objects_page(bucket_name, prefix, continuation_token, page_size)
        pages += 1
        keys.extend(page['keys'])

        if not page['is_truncated']:
            break

        continuation_token = page['next_continuation_token']
        if not continuation_token:
            raise RuntimeError(
                f"Listing s3://{bucket_name}/{prefix} was truncated without a continuation token"
            )

    logger.info(f"Listed {len(keys)} keys under s3://{bucket_name}/{prefix} in {pages} page(s)")
    return keys
