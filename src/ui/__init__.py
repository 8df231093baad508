"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Chat message display, re-rendered on every message store change
    - Typing indicator while a response streams
    - Error banner and clear-chat button

Contains no business logic. Subscribes to the session controller's store and
status and forwards user actions to it.
"""
