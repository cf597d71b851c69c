"""Character and environment roster models."""

from pydantic import BaseModel, Field


class Character(BaseModel):
    """A recurring character in the generated story."""

    id: str = Field(..., description="Unique character identifier")
    name: str = Field(..., description="Display name")
    color: float = Field(default=0, description="Color seed used for presentation")

    class Config:
        """Pydantic config."""
        frozen = True

    @property
    def hue(self) -> float:
        """Hue in degrees derived from the color seed."""
        return (self.color * 55) % 360


class Environment(BaseModel):
    """A location scenes take place in."""

    id: str = Field(..., description="Unique environment identifier")
    name: str = Field(..., description="Display name")

    class Config:
        """Pydantic config."""
        frozen = True
