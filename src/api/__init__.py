"""FastAPI endpoints for the Gemini chat.

HTTP and streaming routes with async request handling. Supports Server-Sent
Events for real-time chat streaming.

Endpoints:
    - GET /health: Service health status
    - GET /chat: Messages, busy flag and error banner
    - POST /chat/stream: Send a message and stream the response
    - DELETE /chat: Clear the conversation
"""

from src.api.app import app, create_app

__all__ = ["app", "create_app"]
