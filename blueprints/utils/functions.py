"""
Utils Blueprint - Utility functions for health checks and configuration info

These endpoints are not behind the API key gate and never return secret values.
"""
import azure.functions as func
import logging
import json
from datetime import datetime, timezone
import os

from shared.config import Settings

# Create utilities blueprint for common functions
utils_bp = func.Blueprint()


def build_health_status(settings: Settings) -> dict:
    """
    Health report; degraded when a required secret is missing
    """
    checks = {
        "api_secret_key": "configured" if settings.api_secret_key else "missing",
        "openrouter_api_key": "configured" if settings.openrouter_api_key else "missing",
    }
    status = "healthy" if all(value == "configured" for value in checks.values()) else "degraded"
    return {
        "status": status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": os.getenv("FUNCTIONS_EXTENSION_VERSION", "unknown"),
        "environment": os.getenv("AZURE_FUNCTIONS_ENVIRONMENT", "unknown"),
        "checks": checks
    }


@utils_bp.route(route="utils/health", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
async def health_check(req: func.HttpRequest) -> func.HttpResponse:
    """
    Health check endpoint
    """
    logging.info('Health check requested.')

    health_status = build_health_status(Settings.from_env())
    if health_status["status"] != "healthy":
        logging.warning(f"Health check degraded: {health_status['checks']}")

    return func.HttpResponse(
        json.dumps(health_status, indent=2),
        mimetype="application/json"
    )


def build_config_info(settings: Settings) -> dict:
    return {
        "chat_model": settings.chat_model,
        "premium_domains": list(settings.premium_domains),
        "news_fetch_timeout": settings.fetch_timeout,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@utils_bp.route(route="utils/config", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
async def get_config_info(req: func.HttpRequest) -> func.HttpResponse:
    """
    Get non-sensitive configuration information
    """
    logging.info('Configuration info requested.')

    return func.HttpResponse(
        json.dumps(build_config_info(Settings.from_env()), indent=2),
        mimetype="application/json"
    )
