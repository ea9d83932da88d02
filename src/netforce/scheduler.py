# MIT License (see LICENSE)
"""
Fixed-cadence driver for a Simulation.

The host (a UI frame callback, a test, a headless loop) calls on_frame()
whenever it gets a frame. The scheduler runs at most one step per call, and
only once frame_interval has elapsed since the previous step:

    running:  frame → (elapsed >= interval ? step : skip)
    paused:   frame → skip

Frames arriving faster than the cadence are skipped; frames arriving late
still advance a single fixed dt. The logical clock therefore never jumps,
which keeps irregular frame delivery from injecting energy.
"""
from __future__ import annotations
import logging
import time
from typing import Callable

from .errors import ConfigurationError
from .simulation import Simulation
from .types import Snapshot

logger = logging.getLogger(__name__)


class FixedRateScheduler:
    """
    Steps a simulation at a fixed target cadence.

    Attributes:
        simulation: The simulation to drive. Its running flag is the
                    running/paused state.
        interval: Minimum seconds between two steps (defaults to
                  simulation.config.frame_interval).
        clock: Monotonic time source in seconds.
        steps_taken: Steps run by this scheduler.
        frames_skipped: Frames that arrived too early or while paused.
    """

    def __init__(
        self,
        simulation: Simulation,
        interval: float | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.simulation = simulation
        self.interval = simulation.config.frame_interval if interval is None else float(interval)
        if self.interval < 0:
            raise ConfigurationError(f"interval must be >= 0, got {self.interval}")
        self.clock = clock
        self.steps_taken = 0
        self.frames_skipped = 0
        self._last = clock()

    @property
    def running(self) -> bool:
        return self.simulation.running

    def pause(self) -> None:
        """Stop stepping until resume()."""
        self.simulation.pause()

    def resume(self) -> None:
        """
        Resume stepping.

        The clock baseline restarts now, so the time spent paused does not
        trigger an immediate step.
        """
        self.simulation.resume()
        self._last = self.clock()

    def on_frame(self, now: float | None = None) -> Snapshot | None:
        """
        Handle one host frame.

        Args:
            now: Frame timestamp in seconds (defaults to clock()).

        Returns:
            The new snapshot if a step ran, else None.
        """
        now = self.clock() if now is None else now
        if not self.simulation.running or now - self._last < self.interval:
            self.frames_skipped += 1
            return None
        self._last = now
        self.steps_taken += 1
        return self.simulation.step()

    def run(
        self,
        max_steps: int | None = None,
        duration: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> int:
        """
        Blocking loop for headless use.

        Polls on_frame() and sleeps until the next step is due. Stops after
        max_steps steps, after duration seconds, or when the simulation is
        paused (e.g. from a subscriber). At least one limit is required.

        Returns:
            Number of steps run by this call.
        """
        if max_steps is None and duration is None:
            raise ValueError("run() needs max_steps or duration")
        start = self.clock()
        taken = 0
        logger.debug("Scheduler run: max_steps=%s duration=%s", max_steps, duration)
        while self.simulation.running:
            if max_steps is not None and taken >= max_steps:
                break
            now = self.clock()
            if duration is not None and now - start >= duration:
                break
            if self.on_frame(now) is not None:
                taken += 1
            else:
                sleep(max(0.0, self._last + self.interval - now))
        return taken
