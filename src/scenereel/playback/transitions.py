"""Motion presets for scene transitions."""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..models import Transition, TransitionType, parse_transition_type
from .pacing import transition_seconds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MotionPhase:
    """Visual state of a scene at one point of its transition.

    Unset fields are left at whatever the renderer already has.
    """

    opacity: Optional[float] = None
    x: Optional[float] = None
    x_unit: str = "px"
    scale: Optional[float] = None
    brightness: Optional[float] = None

    def as_dict(self) -> Dict[str, object]:
        """Return only the properties this phase sets."""
        values: Dict[str, object] = {}
        if self.opacity is not None:
            values["opacity"] = self.opacity
        if self.x is not None:
            values["x"] = f"{self.x:g}%" if self.x_unit == "%" else self.x
        if self.scale is not None:
            values["scale"] = self.scale
        if self.brightness is not None:
            values["filter"] = f"brightness({self.brightness:g})"
        return values


@dataclass(frozen=True)
class MotionProfile:
    """Initial, resting and exit states for one transition."""

    kind: TransitionType
    duration: float
    initial: MotionPhase
    animate: MotionPhase
    exit: MotionPhase
    fallback: bool = False

    def as_dict(self) -> Dict[str, Dict[str, object]]:
        """Return the phases keyed by name, with timing on animate and exit."""
        timing = {"transition": {"duration": self.duration}}
        return {
            "initial": self.initial.as_dict(),
            "animate": {**self.animate.as_dict(), **timing},
            "exit": {**self.exit.as_dict(), **timing},
        }


PRESETS: Dict[TransitionType, Tuple[MotionPhase, MotionPhase, MotionPhase]] = {
    TransitionType.CROSSFADE: (
        MotionPhase(opacity=0),
        MotionPhase(opacity=1),
        MotionPhase(opacity=0),
    ),
    TransitionType.WIPE: (
        MotionPhase(x=100, x_unit="%", opacity=1),
        MotionPhase(x=0, opacity=1),
        MotionPhase(x=-100, x_unit="%", opacity=1),
    ),
    TransitionType.PAN: (
        MotionPhase(scale=1.1, x=20, opacity=0.9),
        MotionPhase(scale=1, x=0, opacity=1),
        MotionPhase(scale=0.98, x=-15, opacity=0.9),
    ),
    TransitionType.DOLLY: (
        MotionPhase(scale=0.9, opacity=0),
        MotionPhase(scale=1, opacity=1),
        MotionPhase(scale=1.05, opacity=0),
    ),
    TransitionType.FADE_THROUGH_BLACK: (
        MotionPhase(opacity=0, brightness=0),
        MotionPhase(opacity=1, brightness=1),
        MotionPhase(opacity=0, brightness=0),
    ),
}


def motion_profile(kind: Optional[str], duration: Optional[float] = None) -> MotionProfile:
    """Select the motion preset for a transition kind.

    Args:
        kind: Transition kind as sent by the backend.
        duration: Transition duration in seconds; defaults when missing.

    Returns:
        The preset for the kind, or crossfade marked as a fallback.
    """
    parsed = parse_transition_type(kind)
    fallback = parsed is None
    if fallback:
        logger.debug(f"Unknown transition {kind!r}, falling back to crossfade")
        parsed = TransitionType.CROSSFADE

    initial, animate, exit_ = PRESETS[parsed]
    return MotionProfile(
        kind=parsed,
        duration=transition_seconds(duration),
        initial=initial,
        animate=animate,
        exit=exit_,
        fallback=fallback,
    )


def profile_for(transition: Optional[Transition]) -> MotionProfile:
    """Select the motion preset for a scene's transition."""
    if transition is None:
        return motion_profile(None)
    return motion_profile(transition.type, transition.duration)
