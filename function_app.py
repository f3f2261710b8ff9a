"""
Main Azure Function App with Blueprint-based Architecture

This function app uses blueprints to organize its endpoints:
- News Blueprint: Filtered Google News feed (headlines, topic, search, geo)
- Chat Blueprint: "Mindful" companion chat proxied to OpenRouter
- Utils Blueprint: Health check and non-sensitive configuration info

News and chat are protected by the shared API key sent in the x-api-key header,
so the app itself runs with anonymous function-level auth.
"""

import azure.functions as func
import logging
import json
from datetime import datetime, timezone

# Import blueprints
from blueprints.news.functions import news_bp
from blueprints.chat.functions import chat_bp
from blueprints.utils.functions import utils_bp

# Configure logging
logging.basicConfig(level=logging.INFO)

# Create the main function app
app = func.FunctionApp(http_auth_level=func.AuthLevel.ANONYMOUS)

# Register blueprints
app.register_blueprint(news_bp)
app.register_blueprint(chat_bp)
app.register_blueprint(utils_bp)

API_INFO = {
    "name": "Mindful News & Chat Function App",
    "description": "API-key-gated news feed and companion chat",
    "version": "1.0.0",
    "blueprints": {
        "news": {
            "description": "Google News feed with paywalled sources removed",
            "endpoints": [
                "GET /api/news?type=headlines - Top headlines",
                "GET /api/news?type=topic&topic={topic} - Headlines for a topic",
                "GET /api/news?type=search&query={query} - Search articles",
                "GET /api/news?type=geo&location={location} - Local news"
            ],
            "parameters": ["n (default 20, max 50)", "country (default us)", "language (default en)"]
        },
        "chat": {
            "description": "Mental health companion chat",
            "endpoints": [
                "POST /api/chat - Body {\"messages\": [{\"role\": \"user\", \"content\": \"...\"}]}"
            ]
        },
        "utils": {
            "description": "Utility functions for health checks",
            "endpoints": [
                "GET /api/utils/health - Health check",
                "GET /api/utils/config - Configuration info"
            ]
        }
    },
    "usage": {
        "auth_header": "x-api-key",
        "content_type": "application/json"
    }
}


# Root endpoint for API information
@app.route(route="", methods=["GET"])
async def api_info(req: func.HttpRequest) -> func.HttpResponse:
    """
    Root endpoint providing API information and available endpoints
    """
    info = dict(API_INFO, timestamp=datetime.now(timezone.utc).isoformat())
    return func.HttpResponse(
        json.dumps(info, indent=2),
        mimetype="application/json"
    )
