"""Chat session errors."""

INIT_ERROR_MESSAGE = (
    "Failed to initialize AI chat. Please check your API key and refresh the page."
)
STREAM_ERROR_MESSAGE = "An error occurred while fetching the response. Please try again."


class ChatError(Exception):
    """Base class for chat session errors."""


class InitializationError(ChatError):
    """Raised when the remote chat session cannot be created.

    Covers a missing credential as well as a rejected handle construction.
    Fatal to the session: the caller shows a banner and does not retry.
    """


class StreamError(ChatError):
    """Raised when an in-flight streamed response fails.

    Network failures, API rejections and malformed chunks all end up here.
    """
