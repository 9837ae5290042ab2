"""
Round lifecycle for a VAULTFALL play session.

    IDLE ──start──> PLAYING ──timer / last life──> GAME_OVER
      ^                │                               │
      └────reset───────┴───────────reset───────────────┘
                                 GAME_OVER ──start──> PLAYING
"""

from dataclasses import dataclass, fields
from enum import Enum, auto
from typing import Any, Callable
import logging

logger = logging.getLogger(__name__)


class State(Enum):
    """Where the session is in a round."""
    IDLE = auto()       # Waiting for start; mode may change
    PLAYING = auto()    # Engine spawns and resolves items
    GAME_OVER = auto()  # Round ended, final score shown


@dataclass
class StateContext:
    """Data that outlives a single transition."""
    end_reason: str | None = None  # "time" or "busted" once a round ends
    rounds_played: int = 0


Listener = Callable[[State, State, StateContext], None]

# Allowed targets from each state
ROUND_TRANSITIONS: dict[State, frozenset[State]] = {
    State.IDLE: frozenset({State.PLAYING}),
    State.PLAYING: frozenset({State.GAME_OVER, State.IDLE}),
    State.GAME_OVER: frozenset({State.PLAYING, State.IDLE}),
}


class StateMachine:
    """
    Guards round transitions and notifies listeners.

    A rejected transition leaves the state untouched and returns False.
    Listener errors are logged and do not undo the transition.
    """

    def __init__(self, initial_state: State = State.IDLE) -> None:
        self._state = initial_state
        self._context = StateContext()
        self._listeners: list[Listener] = []
        self._context_keys = {f.name for f in fields(StateContext)}
        logger.info(f"Session state machine starting in {initial_state.name}")

    @property
    def state(self) -> State:
        return self._state

    @property
    def context(self) -> StateContext:
        return self._context

    def can_transition(self, to_state: State) -> bool:
        return to_state in ROUND_TRANSITIONS.get(self._state, frozenset())

    def transition(self, to_state: State, **context_updates: Any) -> bool:
        """
        Move to ``to_state`` if allowed.

        Keyword arguments naming StateContext fields are written to the
        context; unknown keys are ignored.
        """
        previous = self._state
        if not self.can_transition(to_state):
            logger.warning(f"Rejected transition {previous.name} -> {to_state.name}")
            return False

        self._state = to_state
        for key in self._context_keys.intersection(context_updates):
            setattr(self._context, key, context_updates[key])
        if to_state is State.PLAYING:
            self._context.rounds_played += 1

        logger.info(f"Session {previous.name} -> {to_state.name}")
        self._notify(previous, to_state)
        return True

    def _notify(self, previous: State, current: State) -> None:
        for listener in list(self._listeners):
            try:
                listener(previous, current, self._context)
            except Exception as e:
                logger.error(f"State listener failed on {previous.name} -> {current.name}: {e}")

    def add_listener(self, callback: Listener) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: Listener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)
