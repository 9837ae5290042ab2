"""
Game session for the desktop host.

Owns score, counters, lives and the round timer. Outcomes arrive from the
engine as events on the EventBus; commands (start, reset, mode toggle)
arrive as input events.
"""

import logging

from vaultfall.config.settings import SimulatorSettings
from vaultfall.core.events import Event, EventBus, EventType
from vaultfall.core.state import State, StateMachine
from vaultfall.game.entities import FrameInputs, GameMode

logger = logging.getLogger(__name__)


class GameSession:
    """
    Host-side game rules for Timed and Survival rounds.

    Timed: the round ends when ``time_left`` reaches zero.
    Survival: each penalty hit costs a life; the round ends at zero lives.
    """

    def __init__(
        self,
        settings: SimulatorSettings | None = None,
        state_machine: StateMachine | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.settings = settings or SimulatorSettings()
        self.state_machine = state_machine or StateMachine()
        self.event_bus = event_bus or EventBus()

        self.mode = GameMode.TIMED
        self.score = 0
        self.caught = 0
        self.missed = 0
        self.lives = self.settings.max_lives
        self.time_left = float(self.settings.time_limit)
        self.pointer_x: float | None = None

        self._unsubscribe = [
            self.event_bus.subscribe(EventType.POINTER_MOVE, self._on_pointer_event),
            self.event_bus.subscribe(EventType.ITEM_CAUGHT, self._on_caught_event),
            self.event_bus.subscribe(EventType.ITEM_MISSED, lambda e: self.on_miss()),
            self.event_bus.subscribe(EventType.PENALTY_HIT, lambda e: self.on_penalty_hit()),
            self.event_bus.subscribe(EventType.BUTTON_PRESS, lambda e: self.start()),
            self.event_bus.subscribe(EventType.MODE_TOGGLE, lambda e: self.toggle_mode()),
            self.event_bus.subscribe(EventType.RESET, lambda e: self.reset()),
        ]

    @property
    def is_playing(self) -> bool:
        return self.state_machine.state == State.PLAYING

    # Commands
    def start(self) -> bool:
        """Start a new round from idle or after game over."""
        if self.is_playing:
            return False
        self._reset_counters()
        if not self.state_machine.transition(State.PLAYING, end_reason=None):
            return False
        self.event_bus.emit(Event(
            EventType.GAME_STARTED, data={"mode": self.mode.name}, source="session"
        ))
        return True

    def reset(self) -> None:
        """Abandon the round and return to idle."""
        if self.state_machine.state != State.IDLE:
            self.state_machine.transition(State.IDLE, end_reason=None)
        self._reset_counters()

    def toggle_mode(self) -> bool:
        """Switch between Timed and Survival. Ignored mid-round."""
        if self.is_playing:
            logger.debug("Mode change ignored while playing")
            return False
        self.mode = GameMode.SURVIVAL if self.mode is GameMode.TIMED else GameMode.TIMED
        self._reset_counters()
        logger.info(f"Mode: {self.mode.name}")
        return True

    # Engine outcomes
    def on_score(self, delta: int) -> None:
        if not self.is_playing:
            return
        self.score += delta
        self.caught += 1

    def on_miss(self) -> None:
        if not self.is_playing:
            return
        self.missed += 1

    def on_penalty_hit(self) -> None:
        if not self.is_playing or self.mode is not GameMode.SURVIVAL:
            return
        self.lives = max(0, self.lives - 1)
        logger.info(f"Lives left: {self.lives}")
        if self.lives <= 0:
            self._end("busted")

    def _on_caught_event(self, event: Event) -> None:
        self.on_score(event.data.get("value", 0))

    def _on_pointer_event(self, event: Event) -> None:
        self.pointer_x = event.data.get("x")

    # Timing
    def update(self, delta_ms: float) -> None:
        """Advance the round timer (Timed mode only)."""
        if not self.is_playing or self.mode is not GameMode.TIMED:
            return
        self.time_left = max(0.0, self.time_left - delta_ms / 1000.0)
        if self.time_left <= 0:
            self._end("time")

    def frame_inputs(self, width: int, height: int, pointer_x: float | None = None) -> FrameInputs:
        """Snapshot of session state for one engine tick.

        ``pointer_x`` defaults to the last position seen on the bus.
        """
        return FrameInputs(
            is_playing=self.is_playing,
            lives=self.lives,
            mode=self.mode,
            viewport_width=width,
            viewport_height=height,
            pointer_x=pointer_x if pointer_x is not None else self.pointer_x,
        )

    def close(self) -> None:
        """Detach from the event bus."""
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self._unsubscribe.clear()

    def _end(self, reason: str) -> None:
        if self.state_machine.transition(State.GAME_OVER, end_reason=reason):
            logger.info(f"Game over ({reason}): score {self.score}, caught {self.caught}, missed {self.missed}")
            self.event_bus.emit(Event(
                EventType.GAME_OVER,
                data={"reason": reason, "score": self.score},
                source="session",
            ))

    def _reset_counters(self) -> None:
        self.score = 0
        self.caught = 0
        self.missed = 0
        self.lives = self.settings.max_lives
        self.time_left = float(self.settings.time_limit)
