import base64
import binascii
import json

from exceptions import BusinessLogicError

MISSING_BODY_MESSAGE = "Missing request body."

# Keys that mark an event as coming through API Gateway rather than a direct invoke
GATEWAY_EVENT_KEYS = ('body', 'httpMethod', 'requestContext')


def get_http_method(event):
    if not isinstance(event, dict):
        return None
    method = event.get('httpMethod')
    if not method:
        # HTTP API (payload v2) puts the method under requestContext
        request_context = event.get('requestContext')
        http = request_context.get('http') if isinstance(request_context, dict) else None
        method = http.get('method') if isinstance(http, dict) else None
    return method.upper() if isinstance(method, str) and method else None


def is_preflight(event):
    return get_http_method(event) == 'OPTIONS'


def is_gateway_event(event):
    return any(key in event for key in GATEWAY_EVENT_KEYS)


def decode_body(event):
    """Return the raw body as text, undoing gateway base64 encoding"""
    body = event.get('body')
    if event.get('isBase64Encoded') and isinstance(body, str):
        try:
            return base64.b64decode(body).decode('utf-8')
        except (binascii.Error, UnicodeDecodeError):
            raise BusinessLogicError("Request body must be valid JSON.", 400)
    return body


def get_request_data(event):
    """
    Extract the request envelope from an invocation event

    Gateway events carry the envelope as a JSON string in ``body``;
    direct invocations carry the envelope fields at the top level.

    Raises:
        BusinessLogicError: 400 when the body is missing or malformed
    """
    if not event or not isinstance(event, dict):
        raise BusinessLogicError(MISSING_BODY_MESSAGE, 400)

    if not is_gateway_event(event):
        return event

    body = decode_body(event)
    if not body:
        raise BusinessLogicError(MISSING_BODY_MESSAGE, 400)

    if isinstance(body, dict):
        return body

    try:
        data = json.loads(body)
    except (json.JSONDecodeError, TypeError):
        raise BusinessLogicError("Request body must be valid JSON.", 400)

    if not isinstance(data, dict):
        raise BusinessLogicError("Request body must be a JSON object.", 400)
    return data
