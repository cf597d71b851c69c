"""External service integrations."""

from .backend import SceneGraphClient

__all__ = ["SceneGraphClient"]
