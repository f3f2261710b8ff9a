"""
Shared error taxonomy for the HTTP functions

Each error carries the HTTP status it maps to, so handlers can convert any of
them into a JSON response at their boundary.
"""
from typing import Optional


class ApiError(Exception):
    """Base class for errors that end a request with a JSON error body"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigError(ApiError):
    """A required secret or key is not configured"""

    status_code = 500


class AuthError(ApiError):
    """Caller credential is missing or does not match"""

    status_code = 401


class MethodError(ApiError):
    """HTTP method not supported by the endpoint"""

    status_code = 405


class ValidationError(ApiError):
    """Missing or invalid request parameter"""

    status_code = 400


class UpstreamError(ApiError):
    """External call failed or returned an unusable payload"""

    status_code = 500


class UpstreamStatusError(UpstreamError):
    """External HTTP API answered with a non-success status"""

    def __init__(self, upstream_status: int, body: Optional[str] = None):
        super().__init__(f"Upstream responded with status {upstream_status}")
        self.upstream_status = upstream_status
        self.body = body
