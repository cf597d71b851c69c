"""Playback controller for scene sequences."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Union

from ..models import Pacing, Scene, SceneGraph
from .pacing import compute_delay_ms, resolve_pacing
from .scheduler import AsyncioScheduler, Scheduler, TimerHandle
from .store import SceneSequenceStore
from .transitions import MotionProfile, profile_for

logger = logging.getLogger(__name__)


class PlaybackState(str, Enum):
    """Playback state enum."""
    IDLE = "idle"
    PAUSED = "paused"
    PLAYING = "playing"


@dataclass(frozen=True)
class PlaybackSnapshot:
    """What the rendering layer needs to draw the player."""

    state: PlaybackState
    cursor: Optional[int]
    length: int
    auto_advancing: bool
    pending: bool
    scene: Optional[Scene]
    profile: Optional[MotionProfile]


Listener = Callable[[PlaybackSnapshot], None]


class PlaybackController:
    """Drives a cursor over the installed scenes.

    Auto-advance is a chain of single-shot timers: each timer advances the
    cursor and schedules the next one. Every operation that moves the cursor
    or changes mode cancels the pending timer before doing anything else, so
    at most one timer is ever outstanding.
    """

    def __init__(
        self,
        scheduler: Optional[Scheduler] = None,
        pacing: Union[Pacing, str] = Pacing.NORMAL,
        store: Optional[SceneSequenceStore] = None,
    ) -> None:
        """Initialize the controller.

        Args:
            scheduler: Timer source. Defaults to the running asyncio loop.
            pacing: Pacing preset used for scene hold times.
            store: Scene store. A fresh one is created if not provided.
        """
        self._scheduler = scheduler or AsyncioScheduler()
        self._pacing = resolve_pacing(pacing)
        self._store = store or SceneSequenceStore()
        self._installed = False
        self._cursor = 0
        self._auto_advancing = False
        self._timer: Optional[TimerHandle] = None
        self._timer_token = 0
        self._listeners: List[Listener] = []

    # Read-only views

    @property
    def store(self) -> SceneSequenceStore:
        return self._store

    @property
    def state(self) -> PlaybackState:
        if not self._installed:
            return PlaybackState.IDLE
        if self._auto_advancing:
            return PlaybackState.PLAYING
        return PlaybackState.PAUSED

    @property
    def cursor(self) -> Optional[int]:
        """Index of the current scene; None before a sequence is installed."""
        return self._cursor if self._installed else None

    @property
    def length(self) -> int:
        return self._store.length

    @property
    def auto_advancing(self) -> bool:
        return self._auto_advancing

    @property
    def pending(self) -> bool:
        """Whether an auto-advance timer is outstanding."""
        return self._timer is not None

    @property
    def pacing(self) -> Pacing:
        return self._pacing

    @property
    def current_scene(self) -> Optional[Scene]:
        return self._store.scene_at(self.cursor)

    @property
    def current_profile(self) -> Optional[MotionProfile]:
        scene = self.current_scene
        if scene is None:
            return None
        return profile_for(scene.transition)

    def current_delay_ms(self) -> int:
        """Hold time for the current scene, or 0 when there is none."""
        scene = self.current_scene
        if scene is None:
            return 0
        return compute_delay_ms(self._pacing, scene.transition)

    def snapshot(self) -> PlaybackSnapshot:
        return PlaybackSnapshot(
            state=self.state,
            cursor=self.cursor,
            length=self.length,
            auto_advancing=self._auto_advancing,
            pending=self.pending,
            scene=self.current_scene,
            profile=self.current_profile,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called after every state change.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Operations

    def install_sequence(self, graph: SceneGraph) -> None:
        """Adopt a new scene graph and rewind to its first scene, paused."""
        self._cancel_timer()
        self._store.install(graph)
        self._installed = True
        self._cursor = 0
        self._auto_advancing = False
        logger.info(f"Installed sequence of {self.length} scenes")
        self._notify()

    def clear(self) -> None:
        """Drop the installed sequence and return to idle."""
        self._cancel_timer()
        self._store.clear()
        self._installed = False
        self._cursor = 0
        self._auto_advancing = False
        logger.debug("Cleared sequence")
        self._notify()

    def play(self) -> None:
        """Start auto-advancing from the current scene."""
        if self._store.is_empty or self._auto_advancing:
            return
        logger.debug(f"Play from scene {self._cursor}")
        # A scheduler failure leaves the controller paused
        self._schedule()
        self._auto_advancing = True
        self._notify()

    def pause(self) -> None:
        """Stop auto-advancing, keeping the current scene."""
        if not self._auto_advancing:
            return
        self._cancel_timer()
        self._auto_advancing = False
        logger.debug(f"Paused at scene {self._cursor}")
        self._notify()

    def toggle(self) -> None:
        """Play when paused, pause when playing."""
        if self._auto_advancing:
            self.pause()
        else:
            self.play()

    def next(self) -> None:
        """Step to the following scene."""
        self._move_to(self._cursor + 1)

    def previous(self) -> None:
        """Step to the preceding scene."""
        self._move_to(self._cursor - 1)

    def reset(self) -> None:
        """Stop auto-advance and rewind to the first scene."""
        if not self._installed:
            return
        self._cancel_timer()
        self._cursor = 0
        self._auto_advancing = False
        logger.debug("Reset to first scene")
        self._notify()

    def set_pacing(self, pacing: Union[Pacing, str]) -> None:
        """Change pacing; a pending advance is rescheduled with the new hold."""
        pacing = resolve_pacing(pacing)
        if pacing == self._pacing:
            return
        self._pacing = pacing
        if self._auto_advancing:
            self._schedule()
        self._notify()

    def tick(self) -> None:
        """Advance after the current scene's hold has elapsed."""
        if not self._auto_advancing:
            return
        self._cancel_timer()
        next_index = self._cursor + 1
        if next_index < self.length:
            self._cursor = next_index
            self._schedule()
        else:
            self._auto_advancing = False
            logger.debug(f"Reached last scene ({self._cursor}), auto-advance off")
        self._notify()

    # Internals

    def _move_to(self, index: int) -> None:
        if self._store.is_empty:
            return
        index = max(0, min(self.length - 1, index))
        if index == self._cursor:
            return
        self._cursor = index
        if self._auto_advancing:
            self._schedule()
        self._notify()

    def _schedule(self) -> None:
        self._cancel_timer()
        delay_ms = self.current_delay_ms()
        if delay_ms <= 0:
            return
        token = self._timer_token
        self._timer = self._scheduler.call_later(
            delay_ms / 1000.0, lambda: self._on_timer(token)
        )
        logger.debug(f"Scheduled advance from scene {self._cursor} in {delay_ms}ms")

    def _cancel_timer(self) -> None:
        # Bumping the token also disarms a callback the scheduler already queued
        self._timer_token += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_timer(self, token: int) -> None:
        if token != self._timer_token:
            logger.debug("Ignoring stale advance timer")
            return
        self.tick()

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.error(f"Playback listener failed: {e}")
