"""Scene data model."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class TransitionType(str, Enum):
    """Transition kinds the player knows how to animate."""
    CROSSFADE = "crossfade"
    WIPE = "wipe"
    PAN = "pan"
    DOLLY = "dolly"
    FADE_THROUGH_BLACK = "fade-through-black"


def parse_transition_type(value: Optional[str]) -> Optional[TransitionType]:
    """Return the matching TransitionType, or None for unknown values."""
    if value is None:
        return None
    try:
        return TransitionType(value)
    except ValueError:
        return None


class Transition(BaseModel):
    """Transition applied when the scene enters."""

    type: str = Field(
        default=TransitionType.CROSSFADE.value,
        description="Transition kind; unknown kinds play as crossfade",
    )
    duration: Optional[float] = Field(None, description="Transition duration in seconds")

    @field_validator("type", mode="before")
    @classmethod
    def _null_type_is_crossfade(cls, value):
        return TransitionType.CROSSFADE.value if value is None else value

    class Config:
        """Pydantic config."""
        frozen = True

    @property
    def kind(self) -> Optional[TransitionType]:
        """Known transition kind, or None if the backend sent something else."""
        return parse_transition_type(self.type)


class CharacterAppearance(BaseModel):
    """A character appearing in a scene."""

    id: str = Field(..., description="Character id from the roster")
    emotion: Optional[str] = Field(None, description="Emotion label")
    dialogue: Optional[str] = Field(None, description="Line spoken in the scene")

    class Config:
        """Pydantic config."""
        frozen = True


class Scene(BaseModel):
    """Represents a single scene in the generated sequence."""

    id: str = Field(..., description="Unique scene identifier")
    title: str = Field(default="", description="Scene title")
    description: str = Field(default="", description="Free-text scene description")
    environment_id: Optional[str] = Field(
        None, alias="environmentId", description="Environment id from the roster"
    )
    characters: List[CharacterAppearance] = Field(
        default_factory=list, description="Characters in order of appearance"
    )
    transition: Transition = Field(
        default_factory=Transition, description="Transition into this scene"
    )

    @field_validator("transition", mode="before")
    @classmethod
    def _null_transition_is_default(cls, value):
        return Transition() if value is None else value

    class Config:
        """Pydantic config."""
        frozen = True
        populate_by_name = True
