"""
Chat model configuration.

Dependencies: pydantic_settings
System role: Completion client configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """Settings for the chat completion model."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
    )

    model_id: str = Field(default="gemini-2.5-flash", description="Chat model identifier")
    temperature: float = Field(default=0.2, description="Sampling temperature")
    max_history_turns: int = Field(
        default=20,
        description="Most recent prior turns passed to the model (0 = all)",
    )
    max_context_chars: int = Field(
        default=12000,
        description="Maximum characters of extracted document text sent to the model",
    )
