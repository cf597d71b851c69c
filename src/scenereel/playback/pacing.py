"""Scene dwell time calculation."""

import logging
from typing import Optional, Union

from ..models import Pacing, Transition

logger = logging.getLogger(__name__)

# Base hold per scene, before the transition itself
BASE_PER_SCENE_MS = {
    Pacing.SLOW: 4000,
    Pacing.NORMAL: 2800,
    Pacing.FAST: 1800,
}

DEFAULT_TRANSITION_SECONDS = 0.8


def resolve_pacing(pacing: Union[Pacing, str]) -> Pacing:
    """Coerce a pacing value, treating unknown values as normal."""
    try:
        return Pacing(pacing)
    except ValueError:
        logger.debug(f"Unknown pacing {pacing!r}, using normal")
        return Pacing.NORMAL


def base_per_scene_ms(pacing: Union[Pacing, str]) -> int:
    """Return the reading time given to every scene at this pacing."""
    return BASE_PER_SCENE_MS[resolve_pacing(pacing)]


def transition_seconds(duration: Optional[float]) -> float:
    """Return the effective transition duration in seconds."""
    if not duration or duration <= 0:
        return DEFAULT_TRANSITION_SECONDS
    return float(duration)


def transition_duration_ms(transition: Optional[Transition]) -> int:
    """Return the transition duration in milliseconds."""
    duration = transition.duration if transition is not None else None
    return int(round(transition_seconds(duration) * 1000))


def compute_delay_ms(pacing: Union[Pacing, str], transition: Optional[Transition]) -> int:
    """Return how long a scene stays up before auto-advance moves on.

    The hold covers reading time for the pacing plus the time the transition
    animation needs to finish.

    Args:
        pacing: Pacing preset.
        transition: Transition of the scene being shown.

    Returns:
        Delay in milliseconds.
    """
    return base_per_scene_ms(pacing) + transition_duration_ms(transition)
