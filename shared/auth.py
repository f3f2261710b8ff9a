"""
API key gate shared by the news and chat functions

Both endpoints follow the same order: CORS preflight is admitted before any
check, then the configured secret, then the caller key, then the method.
"""
import logging
from dataclasses import dataclass
from typing import Optional

import azure.functions as func

from shared.config import Settings
from shared.errors import ApiError, AuthError, ConfigError, MethodError
from shared.http import empty_response, error_response

API_KEY_HEADER = "x-api-key"


@dataclass(frozen=True)
class GateDecision:
    admitted: bool
    preflight: bool = False
    error: Optional[ApiError] = None

    @property
    def status_code(self) -> int:
        if self.error is not None:
            return self.error.status_code
        return 200


def check_request(method: str, allowed_method: str, configured_secret: Optional[str],
                  provided_key: Optional[str]) -> GateDecision:
    """
    Decide whether a request may reach the endpoint's business logic

    Args:
        method: HTTP method of the inbound request
        allowed_method: The single method the endpoint supports
        configured_secret: Server-side API_SECRET_KEY, None when unset
        provided_key: Value of the caller's x-api-key header

    Returns:
        GateDecision: admitted, or denied with the error to report
    """
    method = (method or "").upper()
    if method == "OPTIONS":
        return GateDecision(admitted=True, preflight=True)

    if not configured_secret:
        logging.error("API_SECRET_KEY environment variable is not set")
        return GateDecision(admitted=False, error=ConfigError("Server configuration error"))

    if not provided_key or provided_key != configured_secret:
        logging.warning("Rejected request with missing or invalid API key")
        return GateDecision(admitted=False, error=AuthError("Unauthorized: Invalid or missing API key"))

    if method != allowed_method.upper():
        logging.warning(f"Rejected {method} request, only {allowed_method.upper()} is allowed")
        return GateDecision(admitted=False, error=MethodError("Method not allowed"))

    return GateDecision(admitted=True)


def gate_response(req: func.HttpRequest, allowed_method: str,
                  settings: Settings) -> Optional[func.HttpResponse]:
    """
    Run the gate for an HTTP request

    Returns None when the handler should continue, otherwise the response to send.
    """
    decision = check_request(
        req.method,
        allowed_method,
        settings.api_secret_key,
        req.headers.get(API_KEY_HEADER)
    )
    if decision.preflight:
        return empty_response()
    if not decision.admitted:
        return error_response(decision.error)
    return None
