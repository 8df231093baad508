"""Chat configuration with environment variable loading.

Pydantic-based configuration for the Gemini chat client.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_SYSTEM_INSTRUCTION = (
    "You are a helpful and friendly AI assistant. Your responses should be "
    "informative and concise, formatted in markdown."
)


class ChatConfig(BaseModel):
    """Configuration for the Gemini chat client.

    Attributes:
        api_key: API key for model access.
        model_name: Model identifier to use.
        system_instruction: System prompt sent with every chat session.
        temperature: Sampling temperature, None for the API default.
        max_output_tokens: Maximum tokens in a generated response, None for the API default.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY", os.getenv("API_KEY", "")),
        description="API key for the Gemini API",
        validate_default=True,
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
        description="Model to use",
    )
    system_instruction: str = Field(
        default_factory=lambda: os.getenv(
            "GEMINI_SYSTEM_INSTRUCTION", DEFAULT_SYSTEM_INSTRUCTION
        ),
        description="System instruction for the chat session",
    )
    temperature: float | None = Field(
        default=None,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )
    max_output_tokens: int | None = Field(
        default=None,
        ge=1,
        le=65536,
        description="Maximum tokens in generated response",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("API key required. Set GEMINI_API_KEY or API_KEY in .env")
        return v.strip()


def get_chat_config() -> ChatConfig:
    """Create chat configuration from environment.

    Returns:
        Configured ChatConfig instance.

    Raises:
        ValidationError: If no API key is set.
    """
    return ChatConfig()
