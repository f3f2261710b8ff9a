"""
Chat Blueprint - "Mindful" mental health companion chat backed by OpenRouter

This blueprint provides functionality to:
- Accept a caller conversation and keep its most recent turns
- Prepend the fixed companion system prompt
- Forward the conversation to an OpenRouter chat model and return the reply
"""
