"""Single-shot timers used to drive auto-advance."""

import asyncio
import heapq
import itertools
import logging
from typing import Callable, List, Optional, Protocol, Tuple

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    """A scheduled callback that can be cancelled."""

    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    """Something that can run a callback once after a delay."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        ...


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop.

    Timers run on the loop thread, so controller callbacks never overlap
    with other controller calls made from loop callbacks or coroutines.
    """

    def __init__(
        self,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        time_scale: float = 1.0,
    ) -> None:
        """Initialize the scheduler.

        Args:
            loop: Event loop to schedule on. Defaults to the running loop.
            time_scale: Multiplier applied to every delay.
        """
        if time_scale <= 0:
            raise ValueError(f"time_scale must be positive, got {time_scale}")
        self._loop = loop
        self._time_scale = time_scale

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        """Return the loop timers are scheduled on."""
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(delay * self._time_scale, callback)


class VirtualTimer:
    """Timer on a VirtualScheduler's clock."""

    def __init__(self, when: float, delay: float, callback: Callable[[], None]) -> None:
        self.when = when
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "pending"
        return f"<VirtualTimer when={self.when:.3f} delay={self.delay:.3f} {state}>"


class VirtualScheduler:
    """Scheduler with a manually advanced clock.

    Nothing fires until `advance` or `run_next` is called, which makes
    playback deterministic for previews and tests.
    """

    def __init__(self) -> None:
        self._now = 0.0
        self._counter = itertools.count()
        self._queue: List[Tuple[float, int, VirtualTimer]] = []

    @property
    def now(self) -> float:
        """Current virtual time in seconds."""
        return self._now

    @property
    def pending(self) -> List[VirtualTimer]:
        """Timers that have neither fired nor been cancelled, soonest first."""
        return [timer for _, _, timer in sorted(self._queue) if not timer.cancelled]

    def call_later(self, delay: float, callback: Callable[[], None]) -> VirtualTimer:
        timer = VirtualTimer(self._now + delay, delay, callback)
        heapq.heappush(self._queue, (timer.when, next(self._counter), timer))
        return timer

    def _pop_live(self, until: Optional[float] = None) -> Optional[VirtualTimer]:
        while self._queue:
            when, _, timer = self._queue[0]
            if until is not None and when > until:
                return None
            heapq.heappop(self._queue)
            if not timer.cancelled:
                return timer
        return None

    def run_next(self) -> bool:
        """Jump to the next pending timer and fire it.

        Returns:
            False if nothing was pending.
        """
        timer = self._pop_live()
        if timer is None:
            return False
        self._now = max(self._now, timer.when)
        timer.callback()
        return True

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing every timer that comes due.

        Returns:
            Number of timers fired.
        """
        target = self._now + seconds
        fired = 0
        while True:
            timer = self._pop_live(until=target)
            if timer is None:
                break
            self._now = max(self._now, timer.when)
            timer.callback()
            fired += 1
        self._now = target
        return fired

    def run_until_idle(self, max_steps: int = 10000) -> int:
        """Fire timers until none are pending.

        Raises:
            RuntimeError: If timers keep rescheduling past max_steps.
        """
        fired = 0
        while self.run_next():
            fired += 1
            if fired >= max_steps:
                raise RuntimeError(f"Scheduler still busy after {max_steps} timers")
        return fired
