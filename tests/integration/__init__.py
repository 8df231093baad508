"""Integration tests for components working together as a system.

Coverage:
    - Chat endpoints with real HTTP requests through ASGITransport
    - Streaming turns flowing into the store and the persisted snapshot
    - Clearing the conversation over HTTP

The Gemini API is replaced by a scripted client, so no API key is required.
"""
