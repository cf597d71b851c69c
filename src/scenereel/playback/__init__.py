"""Scene playback engine."""

from .controller import PlaybackController, PlaybackSnapshot, PlaybackState
from .pacing import BASE_PER_SCENE_MS, base_per_scene_ms, compute_delay_ms, transition_duration_ms
from .scheduler import AsyncioScheduler, Scheduler, VirtualScheduler
from .store import SceneSequenceStore
from .transitions import PRESETS, MotionPhase, MotionProfile, motion_profile, profile_for

__all__ = [
    # Controller
    "PlaybackController",
    "PlaybackSnapshot",
    "PlaybackState",
    # Pacing
    "BASE_PER_SCENE_MS",
    "base_per_scene_ms",
    "compute_delay_ms",
    "transition_duration_ms",
    # Scheduling
    "AsyncioScheduler",
    "Scheduler",
    "VirtualScheduler",
    # Store
    "SceneSequenceStore",
    # Transitions
    "PRESETS",
    "MotionPhase",
    "MotionProfile",
    "motion_profile",
    "profile_for",
]
