"""
Test configuration and fixtures for the object storage Lambda function.

Provides an in-memory stand-in for the boto3 S3 client, a Lambda context
mock and builders for API Gateway and direct invocation events.
"""
import base64
import json
import os
import sys
from unittest.mock import Mock

import pytest
from botocore.exceptions import ClientError

LAMBDA_DIR = os.path.join(os.path.dirname(__file__), '..', 'lambda')
for path in (os.path.join(LAMBDA_DIR, 'common_lib'), os.path.join(LAMBDA_DIR, 'api-object-storage')):
    path = os.path.abspath(path)
    if path not in sys.path:
        sys.path.insert(0, path)

# Set test environment variables before any module creates a boto3 client
os.environ['AWS_ACCESS_KEY_ID'] = 'testing'
os.environ['AWS_SECRET_ACCESS_KEY'] = 'testing'
os.environ['AWS_SESSION_TOKEN'] = 'testing'
os.environ['AWS_DEFAULT_REGION'] = 'us-east-1'
os.environ['AWS_REGION'] = 'us-east-1'
os.environ['BUCKET_NAME'] = 'test-bucket'
os.environ['LOG_LEVEL'] = 'DEBUG'
os.environ.pop('LIST_PAGE_SIZE', None)
os.environ.pop('PRESIGNED_URL_EXPIRATION', None)

TEST_BUCKET = 'test-bucket'


class InMemoryS3Client:
    """
    Minimal S3 client fake covering the calls made by s3_utils.

    Keys are listed in lexicographic order, ``page_size`` keys per page,
    with the start offset used as the continuation token. Operations named
    in ``fail_on`` raise a ClientError.
    """

    def __init__(self, page_size=2):
        self.objects = {}
        self.page_size = page_size
        self.fail_on = set()
        self.list_calls = []

    def _maybe_fail(self, operation_name):
        if operation_name in self.fail_on:
            raise ClientError(
                {'Error': {'Code': 'InternalError', 'Message': 'Simulated failure'}},
                operation_name
            )

    def put_object(self, Bucket, Key, Body, ContentType=None):
        self._maybe_fail('PutObject')
        self.objects[Key] = {'Body': Body, 'ContentType': ContentType, 'Bucket': Bucket}
        return {'ETag': '"etag"'}

    def generate_presigned_url(self, ClientMethod, Params, ExpiresIn):
        self._maybe_fail('GeneratePresignedUrl')
        return (f"https://{Params['Bucket']}.s3.amazonaws.com/{Params['Key']}"
                f"?X-Amz-Expires={ExpiresIn}&X-Amz-Signature=fake")

    def list_objects_v2(self, Bucket, Prefix='', ContinuationToken=None, MaxKeys=None):
        self._maybe_fail('ListObjectsV2')
        self.list_calls.append({'Prefix': Prefix, 'ContinuationToken': ContinuationToken, 'MaxKeys': MaxKeys})

        keys = sorted(key for key in self.objects if key.startswith(Prefix))
        start = int(ContinuationToken) if ContinuationToken else 0
        size = MaxKeys or self.page_size
        page = keys[start:start + size]
        truncated = start + size < len(keys)

        response = {'KeyCount': len(page), 'IsTruncated': truncated}
        if page:
            response['Contents'] = [{'Key': key, 'Size': len(self.objects[key]['Body'])} for key in page]
        if truncated:
            response['NextContinuationToken'] = str(start + size)
        return response


@pytest.fixture
def fake_s3(monkeypatch):
    """Replace the module-level S3 client with an in-memory fake."""
    import s3_utils

    client = InMemoryS3Client()
    monkeypatch.setattr(s3_utils, 's3_client', client)
    monkeypatch.setattr(s3_utils, 'BUCKET_NAME', TEST_BUCKET)
    monkeypatch.setattr(s3_utils, 'LIST_PAGE_SIZE', None)
    return client


@pytest.fixture
def mock_lambda_context():
    """Mock Lambda context for testing."""
    context = Mock()
    context.function_name = 'api-object-storage'
    context.aws_request_id = 'test-request-id-123'
    context.get_remaining_time_in_millis.return_value = 30000
    return context


@pytest.fixture
def sample_bytes():
    return b'%PDF-1.4 sample document\x00\x01\x02'


@pytest.fixture
def sample_base64(sample_bytes):
    return base64.b64encode(sample_bytes).decode('ascii')


def gateway_event(body, method='POST', **extra):
    """API Gateway proxy event with a JSON-encoded body."""
    event = {
        'httpMethod': method,
        'headers': {'Content-Type': 'application/json'},
        'body': json.dumps(body) if isinstance(body, dict) else body,
        'isBase64Encoded': False
    }
    event.update(extra)
    return event


def response_body(response):
    return json.loads(response['body'])
