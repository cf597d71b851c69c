"""Data models for the scene player."""

from .scene import CharacterAppearance, Scene, Transition, TransitionType, parse_transition_type
from .roster import Character, Environment
from .graph import SceneGraph
from .request import GenerationRequest, Pacing, Style

__all__ = [
    "CharacterAppearance",
    "Scene",
    "Transition",
    "TransitionType",
    "parse_transition_type",
    "Character",
    "Environment",
    "SceneGraph",
    "GenerationRequest",
    "Pacing",
    "Style",
]
