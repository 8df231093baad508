"""Gemini Chat - streaming chat client for the Gemini API.

Combines the google-genai SDK for streamed responses, FastAPI for an HTTP
streaming boundary, NiceGUI for the chat page, and Pydantic for data
validation and history serialization.

Components:
    - agent: Gemini configuration and chat sessions
    - session: Message store, streaming turns and history persistence
    - api: HTTP endpoints and Server-Sent Events streaming
    - ui: Web interface for chat interactions
    - models: Message model and request/response schemas
"""

__version__ = "0.1.0"
