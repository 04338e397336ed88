import json
import logging

logger = logging.getLogger()

response_headers = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Allow-Headers": "Content-Type,X-Amz-Date,Authorization,X-Api-Key,X-Amz-Security-Token",
    "Access-Control-Allow-Methods": "OPTIONS,POST"
}


def safe_json_dumps(data):
    """Safely serialize data to JSON with proper error handling"""
    try:
        return json.dumps(data, default=str)
    except (TypeError, ValueError) as e:
        logger.error(f"JSON serialization error: {str(e)} (data type: {type(data).__name__})")
        return json.dumps({"success": False, "message": "Serialization failed"})


def build_response(status_code, body):
    return {
        "statusCode": status_code,
        "headers": dict(response_headers),
        "body": safe_json_dumps(body)
    }


def error_response(message, status_code=400, **details):
    """Error envelope; extra keyword arguments are merged into the body"""
    response_body = {
        "success": False,
        "message": message,
        **details
    }
    return build_response(status_code, response_body)


def success_response(data, status_code=200):
    response_body = {
        "success": True,
        **data
    }
    return build_response(status_code, response_body)


def options_response():
    """CORS preflight reply"""
    return build_response(200, {})
