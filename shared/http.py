"""
Shared helpers for building JSON HTTP responses
"""
import json
import azure.functions as func

from shared.errors import ApiError


def json_response(payload: dict, status_code: int = 200) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps(payload, ensure_ascii=False),
        status_code=status_code,
        mimetype="application/json"
    )


def error_response(error: ApiError, **extra) -> func.HttpResponse:
    """
    Convert an ApiError into a JSON response with at least an "error" field
    """
    body = {"error": error.message}
    body.update(extra)
    return json_response(body, status_code=error.status_code)


def empty_response() -> func.HttpResponse:
    """Empty 200 response used for CORS preflight"""
    return func.HttpResponse(status_code=200)
