"""Configuration management."""

import os
from urllib.parse import urlparse

from pydantic import BaseModel, Field
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config(BaseModel):
    """Application configuration."""

    # Backend
    backend_url: str = Field(
        default_factory=lambda: os.getenv("SCENEREEL_BACKEND_URL", "http://localhost:8000"),
        description="Base URL of the scene generation backend"
    )
    request_timeout: float = Field(
        default_factory=lambda: float(os.getenv("SCENEREEL_REQUEST_TIMEOUT", "60")),
        description="Backend request timeout in seconds"
    )
    max_retries: int = Field(
        default_factory=lambda: int(os.getenv("SCENEREEL_MAX_RETRIES", "3")),
        description="Attempts for transient connection failures"
    )

    # Playback defaults
    default_pacing: str = Field(
        default_factory=lambda: os.getenv("SCENEREEL_PACING", "normal"),
        description="Pacing used when none is given"
    )
    default_style: str = Field(
        default_factory=lambda: os.getenv("SCENEREEL_STYLE", "storybook"),
        description="Style used when none is given"
    )

    class Config:
        """Pydantic config."""
        frozen = False

    def validate_required(self) -> None:
        """Validate that the backend URL is usable.

        Raises:
            ValueError: If the backend URL is missing or malformed.
        """
        if not self.backend_url:
            raise ValueError("SCENEREEL_BACKEND_URL not set")

        parsed = urlparse(self.backend_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(
                f"SCENEREEL_BACKEND_URL must be an http(s) URL. "
                f"Got: {self.backend_url}"
            )


# Global config instance
config = Config()
