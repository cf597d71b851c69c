"""Exceptions raised at the generation boundary."""

from typing import Optional


class SceneReelError(Exception):
    """Base class for scene player errors."""


class BackendError(SceneReelError):
    """Generation request failed; the message is safe to show to the user."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        detail: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail if detail is not None else message


class SceneGraphError(BackendError):
    """Backend answered, but not with a usable scene graph."""
