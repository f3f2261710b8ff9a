"""
Chat Blueprint - Main functions for the companion chat endpoint

POST /api/chat with body {"messages": [{"role": "user", "content": "..."}]}

Callers must send the shared secret in the x-api-key header.
"""
import asyncio
import azure.functions as func
import logging
from typing import Optional

from shared.auth import gate_response
from shared.config import Settings
from shared.errors import ConfigError, UpstreamStatusError, ValidationError
from shared.http import error_response, json_response
from .completion import CompletionClient, OpenRouterClient
from .prompts import SYSTEM_PROMPT, build_conversation

# Create the chat blueprint
chat_bp = func.Blueprint()


@chat_bp.route(route="chat", methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
               auth_level=func.AuthLevel.ANONYMOUS)
async def chat(req: func.HttpRequest) -> func.HttpResponse:
    settings = Settings.from_env()
    client = None
    if settings.openrouter_api_key:
        client = OpenRouterClient(settings.openrouter_api_key, settings.chat_model)
    return await handle_chat_request(req, settings, client)


async def handle_chat_request(req: func.HttpRequest, settings: Settings,
                              client: Optional[CompletionClient],
                              system_prompt: str = SYSTEM_PROMPT) -> func.HttpResponse:
    """
    Gate, validate and answer a chat request

    Returns:
    {
        "success": true,
        "message": {"role": "assistant", "content": "..."}
    }
    """
    denied = gate_response(req, "POST", settings)
    if denied is not None:
        return denied

    logging.info('Chat request received.')

    try:
        if not settings.openrouter_api_key or client is None:
            logging.error("OPENROUTER_API_KEY environment variable is not set")
            return error_response(ConfigError("AI service not configured"))

        messages = read_messages(req)

        # Build conversation with system prompt
        conversation = build_conversation(messages, system_prompt)

        try:
            assistant_message = await asyncio.to_thread(client.complete, conversation)
        except UpstreamStatusError as e:
            logging.error(f"Chat completion failed with status {e.upstream_status}: {e.body}")
            return json_response({
                "error": "Failed to get AI response",
                "details": e.upstream_status
            }, status_code=500)

        if not assistant_message:
            logging.error("Chat completion returned no content")
            return json_response({"error": "No response from AI"}, status_code=500)

        return json_response({
            "success": True,
            "message": {
                "role": "assistant",
                "content": assistant_message
            }
        })

    except ValidationError as e:
        logging.info(f"Rejected chat request: {e.message}")
        return error_response(e)

    except Exception as e:
        logging.exception(f"Chat API Error: {str(e)}")
        return json_response({
            "success": False,
            "error": "Failed to process chat request",
            "message": str(e) or 'Unknown error'
        }, status_code=500)


def read_messages(req: func.HttpRequest) -> list:
    """
    Extract the non-empty "messages" list from the JSON body
    """
    try:
        req_body = req.get_json()
    except ValueError:
        raise ValidationError("messages array is required")

    messages = req_body.get('messages') if isinstance(req_body, dict) else None
    if not messages or not isinstance(messages, list):
        raise ValidationError("messages array is required")
    return messages
