"""Unit tests for individual components in isolation.

Coverage:
    - models/session: message store, persistence, stream consumer, controller
    - agent/: configuration and the Gemini client wrapper

Uses mocks for the google-genai SDK and a scripted fake chat client.
"""
