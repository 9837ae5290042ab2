"""
Frame loop driving a CatcherEngine from the asyncio event loop.

One frame is scheduled at a time; stopping cancels the pending callback so
no frame runs after teardown. A host with a display passes a ``pace``
callback that waits for the next display frame, and the loop then follows
that cadence. Without one, frames fall on a fixed ``1/fps`` grid.
"""

import asyncio
import logging
from typing import Callable, Optional

import numpy as np
from numpy.typing import NDArray

from vaultfall.game.collision import Resolution
from vaultfall.game.engine import CatcherEngine
from vaultfall.game.entities import FrameInputs

logger = logging.getLogger(__name__)


class FrameLoop:
    """
    Schedules ``engine.tick`` once per frame.

    Each frame:
        1. ``pace()`` waits for the display's next frame, if given
        2. ``read_inputs()`` produces the host's FrameInputs
        3. ``engine.tick(inputs, surface_provider())`` runs the pipeline
        4. ``on_frame(resolution)`` lets the host present the frame

    A frame that raises is logged and skipped; the next one is still
    scheduled. Only ``stop()`` ends the loop.

    Usage:
        loop = FrameLoop(engine, session.read_inputs, lambda: buffer, pace=clock_tick)
        loop.start()
        await loop.wait_stopped()
    """

    def __init__(
        self,
        engine: CatcherEngine,
        read_inputs: Callable[[], FrameInputs],
        surface_provider: Callable[[], Optional[NDArray[np.uint8]]],
        on_frame: Optional[Callable[[Resolution], None]] = None,
        fps: int = 60,
        pace: Optional[Callable[[], None]] = None,
    ) -> None:
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")

        self.engine = engine
        self.read_inputs = read_inputs
        self.surface_provider = surface_provider
        self.on_frame = on_frame
        self.pace = pace
        self.interval = 1.0 / fps

        self._handle: asyncio.Handle | None = None
        self._stopped: asyncio.Event | None = None
        self._running = False
        self._deadline = 0.0
        self.frame_count = 0
        self.frames_skipped = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def pending(self) -> bool:
        """True while a frame callback is scheduled."""
        return self._handle is not None

    def start(self) -> None:
        """Start ticking on the running event loop."""
        if self._running:
            logger.warning("FrameLoop already running")
            return

        self._running = True
        self._stopped = asyncio.Event()
        self._deadline = asyncio.get_running_loop().time()
        self._schedule()
        source = "display pacing" if self.pace is not None else f"{1.0 / self.interval:.0f} fps"
        logger.info(f"FrameLoop started ({source})")

    def stop(self) -> None:
        """Cancel the pending frame. Safe to call more than once."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

        if not self._running:
            return

        self._running = False
        if self._stopped is not None:
            self._stopped.set()
        logger.info(f"FrameLoop stopped after {self.frame_count} frames ({self.frames_skipped} skipped)")

    async def wait_stopped(self) -> None:
        """Wait until ``stop`` is called."""
        if self._stopped is None:
            return
        await self._stopped.wait()

    def _schedule(self) -> None:
        loop = asyncio.get_running_loop()
        if self.pace is not None:
            # pace() does the waiting; just yield to other tasks first
            self._handle = loop.call_soon(self._on_frame)
            return

        # Fixed grid, so frame cost does not stretch the period
        self._deadline = max(self._deadline + self.interval, loop.time())
        self._handle = loop.call_at(self._deadline, self._on_frame)

    def _on_frame(self) -> None:
        self._handle = None
        if not self._running:
            return

        try:
            if self.pace is not None:
                self.pace()
            inputs = self.read_inputs()
            # The host may stop the loop while reading input (window closed)
            if not self._running:
                return
            resolution = self.engine.tick(inputs, self.surface_provider())
            if self.on_frame is not None:
                self.on_frame(resolution)
        except Exception as e:
            self.frames_skipped += 1
            logger.exception(f"Frame {self.frame_count} skipped: {e}")
        else:
            self.frame_count += 1

        if self._running:
            self._schedule()
