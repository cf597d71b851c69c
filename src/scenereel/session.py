"""Preview session tying generation to playback."""

import logging
from typing import Optional

from .errors import BackendError
from .models import GenerationRequest, SceneGraph
from .playback import PlaybackController
from .services import SceneGraphClient

logger = logging.getLogger(__name__)


class PreviewSession:
    """One player fed by the generation backend.

    A failed regeneration only records the error; whatever is currently
    installed in the controller keeps playing untouched.
    """

    def __init__(
        self,
        controller: PlaybackController,
        client: Optional[SceneGraphClient] = None,
    ) -> None:
        self._controller = controller
        self._client = client or SceneGraphClient()
        self._graph: Optional[SceneGraph] = None
        self._last_error: Optional[str] = None

    @property
    def controller(self) -> PlaybackController:
        return self._controller

    @property
    def graph(self) -> Optional[SceneGraph]:
        """The graph currently installed, if any."""
        return self._graph

    @property
    def last_error(self) -> Optional[str]:
        """Message from the most recent failed request, cleared on success."""
        return self._last_error

    def regenerate(self, request: GenerationRequest) -> bool:
        """Fetch a new scene graph and install it.

        Returns:
            True if a new sequence was installed.
        """
        self._last_error = None
        try:
            graph = self._client.animate(request)
        except BackendError as e:
            logger.warning(f"Generation failed, keeping current sequence: {e}")
            self._last_error = str(e)
            return False

        self.install(graph, pacing=request.pacing)
        return True

    def install(self, graph: SceneGraph, pacing=None) -> None:
        """Install an already generated graph, optionally changing pacing."""
        if pacing is not None:
            self._controller.set_pacing(pacing)
        self._controller.install_sequence(graph)
        self._graph = graph
