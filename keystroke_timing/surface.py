# ABOUTME: DOM-like text input surface that hosts dispatch key and value events through
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

EVENT_KINDS = ("keydown", "keyup", "input")


@dataclass
class SurfaceEvent:
    """Event delivered to surface listeners."""

    kind: str
    timestamp: float
    key: Optional[str] = None
    value: Optional[str] = None


Listener = Callable[[SurfaceEvent], None]


class TextInput:
    """A single text field that keystroke listeners can attach to."""

    def __init__(self, name: str, value: str = ""):
        self.name = name
        self.value = value
        self._listeners: Dict[str, List[Listener]] = {kind: [] for kind in EVENT_KINDS}

    def add_event_listener(self, kind: str, callback: Listener) -> None:
        if kind not in self._listeners:
            raise ValueError(f"Unsupported event kind: {kind}")
        self._listeners[kind].append(callback)

    def remove_event_listener(self, kind: str, callback: Listener) -> None:
        if kind in self._listeners and callback in self._listeners[kind]:
            self._listeners[kind].remove(callback)

    def _dispatch(self, event: SurfaceEvent) -> None:
        logging.debug(f"{self.name}: dispatching {event.kind} at {event.timestamp}")
        for callback in list(self._listeners[event.kind]):
            callback(event)

    def press(self, key: str, now: float) -> None:
        self._dispatch(SurfaceEvent("keydown", now, key=key))

    def release(self, key: str, now: float) -> None:
        self._dispatch(SurfaceEvent("keyup", now, key=key))

    def set_value(self, value: str, now: float) -> None:
        self.value = value
        self._dispatch(SurfaceEvent("input", now, value=value))

    def type_text(
        self, text: str, start: float = 0.0, interval: float = 120.0, dwell: float = 80.0
    ) -> float:
        """Replay text as press, input, release for each character.

        Returns the timestamp of the last release. Each key is released before the
        next one is pressed, so dwell may not exceed the interval.
        """
        if dwell > interval:
            raise ValueError("dwell must not exceed the key interval")
        now = start
        for i, char in enumerate(text):
            now = start + i * interval
            self.press(char, now)
            self.set_value(self.value + char, now)
            self.release(char, now + dwell)
        return now + dwell if text else start
