"""Test package for Gemini Chat.

Structure:
    - unit/: Individual function and class tests
    - integration/: HTTP boundary tests running the full session stack

Only the remote Gemini API is faked. Leverages pytest with pytest-asyncio for
async tests and pytest-check for soft assertions.
"""
