"""Scene graph returned by the generation backend."""

import json
from pathlib import Path
from typing import List

import yaml
from pydantic import BaseModel, Field

from .roster import Character, Environment
from .scene import Scene


class SceneGraph(BaseModel):
    """Characters, environments and the ordered scenes of one generation."""

    style: str = Field(default="", description="Global visual style")
    characters: List[Character] = Field(default_factory=list, description="Character roster")
    environments: List[Environment] = Field(default_factory=list, description="Environment roster")
    scenes: List[Scene] = Field(default_factory=list, description="Scenes in playback order")

    class Config:
        """Pydantic config."""
        frozen = True

    @classmethod
    def from_yaml(cls, path: Path) -> "SceneGraph":
        """Load a scene graph from a YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        return cls.model_validate(data or {})

    @classmethod
    def from_json(cls, path: Path) -> "SceneGraph":
        """Load a scene graph from a JSON file."""
        with open(path, "r") as f:
            data = json.load(f)
        return cls.model_validate(data)

    @classmethod
    def load(cls, path: Path) -> "SceneGraph":
        """Load a scene graph, picking the format from the file extension."""
        if path.suffix.lower() == ".json":
            return cls.from_json(path)
        return cls.from_yaml(path)

    def to_wire(self) -> dict:
        """Return the graph in the backend's camelCase wire format."""
        return self.model_dump(mode="json", by_alias=True)

    def to_yaml(self, path: Path) -> None:
        """Save the scene graph to a YAML file."""
        with open(path, "w") as f:
            yaml.safe_dump(self.to_wire(), f, default_flow_style=False, sort_keys=False)

    def to_json(self, path: Path) -> None:
        """Save the scene graph to a JSON file."""
        with open(path, "w") as f:
            json.dump(self.to_wire(), f, indent=2)

    def save(self, path: Path) -> None:
        """Save the scene graph, picking the format from the file extension."""
        if path.suffix.lower() == ".json":
            self.to_json(path)
        else:
            self.to_yaml(path)
