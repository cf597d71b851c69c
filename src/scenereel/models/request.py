"""Generation request model."""

from enum import Enum

from pydantic import BaseModel, Field


class Style(str, Enum):
    """Visual style presets offered by the backend."""
    STORYBOOK = "storybook"
    NOIR = "noir"
    SCI_FI = "sci-fi"
    WATERCOLOR = "watercolor"
    ANIME = "anime"


class Pacing(str, Enum):
    """How long each scene is held on screen."""
    SLOW = "slow"
    NORMAL = "normal"
    FAST = "fast"


class GenerationRequest(BaseModel):
    """Body of a scene generation request."""

    text: str = Field(..., description="Story text", min_length=1)
    style: Style = Field(default=Style.STORYBOOK, description="Visual style")
    pacing: Pacing = Field(default=Pacing.NORMAL, description="Scene pacing")

    class Config:
        """Pydantic config."""
        frozen = True

    def to_payload(self) -> dict:
        """Return the JSON body sent to the backend."""
        return self.model_dump(mode="json")
