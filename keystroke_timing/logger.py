# ABOUTME: Keystroke timing capture engine turning key and value events into a timing summary
import logging
from typing import Dict, List, Optional

from .events import InsertionEvent, KeyDownEvent, KeyUpEvent, TimingEvent, TimingSummary
from .surface import SurfaceEvent, TextInput
from .utils import ConfigManager, round_timing

ROUND_DIGITS = 4


class KeystrokeLogger:
    """Session-scoped capture of typing timing on one input surface.

    Timestamps fed to the handlers must come from a monotonic millisecond
    clock. Event timestamps are relative to the first observed activity of
    the session.
    """

    def __init__(self, surface: Optional[TextInput], config: Optional[ConfigManager] = None):
        self.config = config or ConfigManager()
        self.first_down_default = self.config.get("capture.first_down_default", -0.01)

        self.surface = surface
        self.events: List[TimingEvent] = []
        self.typing_start: Optional[float] = None
        self.last_key_down: Optional[float] = None
        self.held_keys: Dict[str, float] = {}
        self.previous_value = ""

        if surface is None:
            logging.warning("Input element not found, keystroke logging disabled")
            return

        surface.add_event_listener("keydown", self._on_keydown)
        surface.add_event_listener("keyup", self._on_keyup)
        surface.add_event_listener("input", self._on_input)
        logging.info(f"Keystroke logger attached to '{surface.name}'")

    @property
    def active(self) -> bool:
        return self.surface is not None

    def _on_keydown(self, event: SurfaceEvent) -> None:
        self.key_down(event.key, event.timestamp)

    def _on_keyup(self, event: SurfaceEvent) -> None:
        self.key_up(event.key, event.timestamp)

    def _on_input(self, event: SurfaceEvent) -> None:
        self.value_changed(event.value, event.timestamp)

    def _round(self, value: Optional[float]) -> Optional[float]:
        return round_timing(value, ROUND_DIGITS)

    def _relative(self, now: float) -> float:
        if self.typing_start is None:
            self.typing_start = now
        return self._round(now - self.typing_start)

    def key_down(self, key: str, now: float) -> None:
        """Handle a key press; repeats of a held key are ignored."""
        if not self.active or key in self.held_keys:
            return

        timestamp = self._relative(now)
        self.held_keys[key] = now

        down_down = None
        if self.last_key_down is not None and self.events:
            down_down = now - self.last_key_down

        if len(key) == 1:
            self.events.append(KeyDownEvent(timestamp=timestamp, down_down=self._round(down_down)))

        # Control keys still set the baseline for the next printable key
        self.last_key_down = now

    def key_up(self, key: str, now: float) -> None:
        """Handle a key release, measuring dwell when the press was seen."""
        if not self.active:
            return

        down_time = self.held_keys.pop(key, None)
        dwell_time = now - down_time if down_time is not None else None

        if len(key) == 1:
            self.events.append(
                KeyUpEvent(timestamp=self._relative(now), dwell_time=self._round(dwell_time))
            )

    def value_changed(self, value: str, now: float) -> None:
        """Handle a change of the input value.

        Clearing a non-empty field restarts the session. Growth of the value is
        recorded as an insertion; shrinking or same-length edits are not.
        """
        if not self.active:
            return

        previous = self.previous_value
        if previous and not value:
            logging.info("Input cleared, resetting keystroke session")
            self.reset()

        if len(value) > len(previous):
            self.events.append(
                InsertionEvent(timestamp=self._relative(now), length=len(value) - len(previous))
            )

        self.previous_value = value

    def get_summary(self) -> TimingSummary:
        """Summarize the session without modifying it."""
        if not self.events:
            return TimingSummary()

        first_down = self.first_down_default
        for event in self.events:
            if event.type in ("down", "insert"):
                first_down = event.timestamp
                break

        total_time = self._round(self.events[-1].timestamp - first_down)
        return TimingSummary(events=tuple(self.events), total_time=total_time)

    def reset(self) -> None:
        """Clear all session state."""
        self.events = []
        self.typing_start = None
        self.last_key_down = None
        self.held_keys = {}
        self.previous_value = ""
