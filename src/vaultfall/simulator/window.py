"""
Desktop simulator window using pygame.

Hosts one CatcherEngine: the game viewport on the left, a status panel on
the right. The engine is driven by a FrameLoop; the window only reads input
and presents the numpy frame buffer.
"""

import logging
import random
from dataclasses import dataclass

import numpy as np
import pygame
from numpy.typing import NDArray

from vaultfall.config.settings import Settings, get_settings
from vaultfall.core.events import Event, EventBus, EventType, button_press_event, pointer_event
from vaultfall.core.state import State, StateMachine
from vaultfall.game.collision import Resolution
from vaultfall.game.engine import CatcherEngine, EngineHooks
from vaultfall.game.entities import FrameInputs, GameMode
from vaultfall.game.feedback import format_money
from vaultfall.game.loop import FrameLoop
from vaultfall.simulator.host import GameSession

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Simulator window configuration."""
    width: int = 400
    height: int = 600
    scale: int = 1
    panel_width: int = 220
    title: str = "VAULTFALL"
    fps: int = 60

    # Colors
    bg_color: tuple[int, int, int] = (20, 20, 30)
    panel_color: tuple[int, int, int] = (40, 40, 50)
    text_color: tuple[int, int, int] = (200, 200, 220)
    accent_color: tuple[int, int, int] = (251, 191, 36)
    alert_color: tuple[int, int, int] = (239, 68, 68)

    @classmethod
    def from_settings(cls, settings: Settings) -> "WindowConfig":
        return cls(
            width=settings.display.width,
            height=settings.display.height,
            scale=settings.simulator.scale,
            panel_width=settings.simulator.panel_width,
            title=settings.simulator.title,
            fps=settings.display.fps,
        )

    @property
    def window_size(self) -> tuple[int, int]:
        return (self.width * self.scale + self.panel_width, self.height * self.scale)


class SimulatorWindow:
    """
    Desktop host for the catcher game.

    Controls:
        MOUSE:     Move the catcher
        SPACE:     Start / play again
        M:         Toggle Timed / Survival (while not playing)
        BACKSPACE: Reset to idle
        ESC / Q:   Quit
    """

    def __init__(
        self,
        config: WindowConfig | None = None,
        settings: Settings | None = None,
        state_machine: StateMachine | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.app_settings = settings or get_settings()
        self.config = config or WindowConfig.from_settings(self.app_settings)
        self.state_machine = state_machine or StateMachine()
        self.event_bus = event_bus or EventBus()

        self.session = GameSession(
            settings=self.app_settings.simulator,
            state_machine=self.state_machine,
            event_bus=self.event_bus,
        )
        self.engine = CatcherEngine(
            settings=self.app_settings.gameplay,
            hooks=EngineHooks.from_event_bus(self.event_bus),
            rng=random.Random(self.app_settings.seed),
        )
        self.frame_loop = FrameLoop(
            self.engine,
            read_inputs=self.read_inputs,
            surface_provider=lambda: self._buffer,
            on_frame=self.present,
            fps=self.config.fps,
            pace=self.pace,
        )

        self._buffer: NDArray[np.uint8] = np.zeros(
            (self.config.height, self.config.width, 3), dtype=np.uint8
        )

        # Pygame setup
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._small_font: pygame.font.Font | None = None

        logger.info("SimulatorWindow created")

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        self._screen = pygame.display.set_mode(self.config.window_size, pygame.DOUBLEBUF)
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, 28)
        self._small_font = pygame.font.SysFont(None, 20)

        w, h = self.config.window_size
        logger.info(f"Pygame initialized: {w}x{h}")

    # Input
    def pace(self) -> None:
        """Wait for the next display frame, capped at the configured fps."""
        if self._clock:
            self._clock.tick(self.config.fps)

    def read_inputs(self) -> FrameInputs:
        """Pump pygame events and snapshot the session for this frame."""
        self._handle_events()

        if self._clock:
            self.session.update(self._clock.get_time())

        return self.session.frame_inputs(self.config.width, self.config.height)

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.stop()

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.MOUSEMOTION:
                x, _y = event.pos
                if x < self.config.width * self.config.scale:
                    self.event_bus.emit(pointer_event(x / self.config.scale, source="mouse"))

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key

        if key == pygame.K_ESCAPE or key == pygame.K_q:
            self.stop()
        elif key == pygame.K_SPACE:
            self.event_bus.emit(button_press_event(source="keyboard"))
        elif key == pygame.K_m:
            self.event_bus.emit(Event(EventType.MODE_TOGGLE, source="keyboard"))
        elif key == pygame.K_BACKSPACE:
            self.event_bus.emit(Event(EventType.RESET, source="keyboard"))

    # Output
    def present(self, resolution: Resolution) -> None:
        """Blit the rendered frame and the status panel."""
        if not self._screen:
            return

        self._screen.fill(self.config.bg_color)

        frame = pygame.surfarray.make_surface(self._buffer.swapaxes(0, 1))
        if self.config.scale != 1:
            frame = pygame.transform.scale(
                frame, (self.config.width * self.config.scale, self.config.height * self.config.scale)
            )
        self._screen.blit(frame, (0, 0))

        self._render_panel()
        if self.state_machine.state != State.PLAYING:
            self._render_banner()

        pygame.display.flip()

    def _render_panel(self) -> None:
        """Render the status panel to the right of the viewport."""
        if not self._small_font:
            return

        x = self.config.width * self.config.scale
        rect = pygame.Rect(x, 0, self.config.panel_width, self.config.height * self.config.scale)
        pygame.draw.rect(self._screen, self.config.panel_color, rect)

        session = self.session
        if session.mode is GameMode.TIMED:
            remaining = f"Time: {int(np.ceil(session.time_left))}s"
        else:
            remaining = f"Lives: {session.lives}"

        lines = [
            (f"Score: {format_money(session.score)}", self.config.accent_color),
            (f"Caught: {session.caught}", self.config.text_color),
            (f"Missed: {session.missed}", self.config.text_color),
            (remaining, self.config.alert_color if session.lives <= 1 else self.config.text_color),
            (f"Mode: {session.mode.name}", self.config.text_color),
            (f"State: {self.state_machine.state.name}", self.config.text_color),
            (f"FPS: {self._clock.get_fps():.1f}" if self._clock else "FPS: --", self.config.text_color),
            ("", self.config.text_color),
            ("---- CONTROLS ----", self.config.text_color),
            ("MOUSE      Move", self.config.text_color),
            ("SPACE      Start", self.config.text_color),
            ("M          Mode", self.config.text_color),
            ("BACKSPACE  Reset", self.config.text_color),
            ("Q / ESC    Quit", self.config.text_color),
        ]

        y = rect.y + 15
        for line, color in lines:
            text_surface = self._small_font.render(line, True, color)
            self._screen.blit(text_surface, (rect.x + 15, y))
            y += 22

    def _render_banner(self) -> None:
        """Centered prompt while idle or after game over."""
        if not self._font:
            return

        if self.state_machine.state == State.GAME_OVER:
            reason = self.state_machine.context.end_reason
            title = "BUSTED!" if reason == "busted" else "TIME'S UP!"
            subtitle = f"Haul: {format_money(self.session.score)} - SPACE to retry"
        else:
            title = "VAULTFALL"
            subtitle = f"{self.session.mode.name} - SPACE to start"

        cx = self.config.width * self.config.scale // 2
        cy = self.config.height * self.config.scale // 2
        for text, font, dy in ((title, self._font, -14), (subtitle, self._small_font, 14)):
            surface = font.render(text, True, self.config.accent_color)
            self._screen.blit(surface, surface.get_rect(center=(cx, cy + dy)))

    # Lifecycle
    async def run(self) -> None:
        """Run until the window is closed."""
        self._init_pygame()
        self.frame_loop.start()

        logger.info("Simulator started")
        try:
            await self.frame_loop.wait_stopped()
        finally:
            self.frame_loop.stop()
            self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        self.session.close()
        pygame.quit()
        logger.info("Simulator stopped")

    def stop(self) -> None:
        """Stop the simulator."""
        self.frame_loop.stop()
        self.event_bus.emit(Event(EventType.SHUTDOWN, source="simulator"))


async def run_simulator(settings: Settings | None = None) -> None:
    """Create and run the simulator window."""
    window = SimulatorWindow(settings=settings)
    await window.run()
