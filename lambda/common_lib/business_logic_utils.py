"""
Business logic utilities for common operations across Lambda functions
This module provides the error boundary and unified access to the storage manager
"""

import functools
import logging
import os
import traceback

import response_utils as resp
from exceptions import BusinessLogicError, ValidationError
from storage_manager import StorageManager, get_storage_manager

logger = logging.getLogger()


def is_debug_enabled():
    return os.environ.get('DEBUG', '').lower() == 'true'


def handle_business_logic_error(func):
    """Decorator converting every exception raised by a handler into a response"""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ValidationError as e:
            logger.warning(f"ValidationError in {func.__name__}: {e.message} (field: {e.field})")
            return resp.error_response(e.message, 400)
        except BusinessLogicError as e:
            logger.warning(f"BusinessLogicError in {func.__name__}: {e.message} (status: {e.status_code})")
            if e.status_code >= 500:
                return resp.error_response(e.message, e.status_code, error=e.message)
            return resp.error_response(e.message, e.status_code)
        except Exception as e:
            logger.exception(f"Unexpected error in {func.__name__}: {type(e).__name__}: {str(e)}")
            details = {
                'error': str(e) or type(e).__name__,
                'errorType': type(e).__name__
            }
            if is_debug_enabled():
                details['stack'] = traceback.format_exc()
            return resp.error_response("Internal server error", 500, **details)
    return wrapper


__all__ = [
    'StorageManager',
    'get_storage_manager',
    'BusinessLogicError',
    'handle_business_logic_error',
    'is_debug_enabled',
]
