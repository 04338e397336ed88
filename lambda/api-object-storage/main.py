"""
Object Storage API
Handles file upload, presigned download URL and listing requests against the storage bucket
"""

import logging
import os
import sys

# Add common_lib to path for imports
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'common_lib'))

import response_utils as resp
import request_utils as req
import business_logic_utils as biz
from exceptions import BusinessLogicError
from validation_utils import DataValidator

# Set up logging
logger = logging.getLogger()
logger.setLevel(os.environ.get('LOG_LEVEL', 'INFO').upper())


def handle_upload(request_data):
    DataValidator.validate_required_fields(request_data, ['key', 'base64Content'])
    storage_manager = biz.get_storage_manager()
    upload_data = storage_manager.upload_file(
        request_data['key'],
        request_data['base64Content'],
        request_data.get('contentType')
    )
    return resp.success_response(upload_data)


def handle_get_presigned_url(request_data):
    DataValidator.validate_required_fields(request_data, ['key'])
    storage_manager = biz.get_storage_manager()
    url_data = storage_manager.get_presigned_url(request_data['key'])
    return resp.success_response(url_data)


def handle_list_files(request_data):
    storage_manager = biz.get_storage_manager()
    list_data = storage_manager.list_files(request_data.get('prefix'))
    return resp.success_response(list_data)


ACTION_HANDLERS = {
    'upload': handle_upload,
    'get_presigned_url': handle_get_presigned_url,
    'getUrl': handle_get_presigned_url,
    'list_files': handle_list_files,
}


def describe_request(request_data):
    """Loggable summary of the request; payloads are reduced to their length"""
    summary = {
        'action': request_data.get('action'),
        'key': request_data.get('key'),
        'prefix': request_data.get('prefix'),
        'contentType': request_data.get('contentType'),
    }
    content = request_data.get('base64Content')
    if isinstance(content, str):
        summary['base64Length'] = len(content)
    return {k: v for k, v in summary.items() if v is not None}


@biz.handle_business_logic_error
def lambda_handler(event, context):
    """Handle object storage requests from API Gateway or direct invocation"""
    http_method = req.get_http_method(event)
    request_id = getattr(context, 'aws_request_id', None)

    # CORS preflight
    if req.is_preflight(event):
        logger.info(f"Preflight request {request_id}")
        return resp.options_response()

    request_data = req.get_request_data(event)
    logger.info(f"Request {request_id} ({http_method or 'direct'}): {describe_request(request_data)}")

    action = request_data.get('action')
    if not action:
        raise BusinessLogicError("Missing action in request body.", 400)

    handler = ACTION_HANDLERS.get(action) if isinstance(action, str) else None
    if handler is None:
        supported = ', '.join(ACTION_HANDLERS)
        raise BusinessLogicError(f"Invalid action specified. Supported actions: {supported}.", 400)

    return handler(request_data)
