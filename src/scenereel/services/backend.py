"""Scene generation backend client."""

import logging
import time
from typing import Optional

import requests
from pydantic import ValidationError

from ..config import config
from ..errors import BackendError, SceneGraphError
from ..models import GenerationRequest, SceneGraph

logger = logging.getLogger(__name__)


def _error_detail(response: requests.Response) -> str:
    """Extract the user-facing message from an error response."""
    try:
        data = response.json()
    except ValueError:
        data = {}

    detail = data.get("detail") if isinstance(data, dict) else None
    if detail:
        return detail if isinstance(detail, str) else str(detail)
    return f"Request failed: {response.status_code}"


class SceneGraphClient:
    """Client for the scene generation backend with retry logic."""

    ANIMATE_PATH = "/api/animate"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        retry_delay: float = 1.0,
    ) -> None:
        """Initialize the backend client.

        Args:
            base_url: Backend base URL. Defaults to SCENEREEL_BACKEND_URL.
            timeout: Request timeout in seconds.
            max_retries: Attempts for connection failures and timeouts.
            retry_delay: Base delay between retries in seconds (exponential backoff).
        """
        self._base_url = (base_url or config.backend_url).rstrip("/")
        self._timeout = timeout if timeout is not None else config.request_timeout
        self._max_retries = max(1, max_retries if max_retries is not None else config.max_retries)
        self._retry_delay = retry_delay

    @property
    def base_url(self) -> str:
        """Return the backend base URL."""
        return self._base_url

    def animate(self, request: GenerationRequest) -> SceneGraph:
        """Ask the backend to turn story text into a scene graph.

        Args:
            request: Story text, style and pacing.

        Returns:
            The generated scene graph, scenes in backend order.

        Raises:
            BackendError: If the request fails or the backend returns an error.
            SceneGraphError: If the response is not a valid scene graph.
        """
        url = f"{self._base_url}{self.ANIMATE_PATH}"
        payload = request.to_payload()

        logger.info(f"Requesting scenes ({request.style.value}, {request.pacing.value}) from {url}")
        response = self._post(url, payload)

        if not response.ok:
            detail = _error_detail(response)
            logger.error(f"Backend error {response.status_code}: {detail}")
            raise BackendError(detail, status_code=response.status_code, detail=detail)

        try:
            data = response.json()
        except ValueError as e:
            raise SceneGraphError(
                f"Invalid JSON in response: {e}", status_code=response.status_code
            ) from e

        try:
            graph = SceneGraph.model_validate(data)
        except ValidationError as e:
            logger.debug(f"Raw response: {data}")
            raise SceneGraphError(
                f"Malformed scene graph: {e.error_count()} validation error(s)",
                status_code=response.status_code,
            ) from e

        logger.info(f"Received {len(graph.scenes)} scenes")
        return graph

    def _post(self, url: str, payload: dict) -> requests.Response:
        for attempt in range(self._max_retries):
            try:
                logger.debug(f"POST {url} (attempt {attempt + 1}/{self._max_retries})")
                return requests.post(url, json=payload, timeout=self._timeout)

            except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
                if attempt == self._max_retries - 1:
                    raise BackendError(f"Could not reach backend: {e}") from e
                delay = self._retry_delay * (2**attempt)
                logger.warning(f"Connection error: {e}. Retrying in {delay:.1f}s...")
                time.sleep(delay)

            except requests.exceptions.RequestException as e:
                raise BackendError(f"Request failed: {e}") from e

        raise BackendError("Max retries exceeded")
