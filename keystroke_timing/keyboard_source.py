# ABOUTME: Physical keyboard host feeding a text input surface through a pynput listener
import logging
from typing import Any, Callable, Optional

from .surface import TextInput
from .utils import ConfigManager, monotonic_ms, setup_logging

# pynput key names that differ from their browser key identifiers
SPECIAL_NAMES = {
    "space": " ",
    "enter": "Enter",
    "backspace": "Backspace",
    "tab": "Tab",
    "esc": "Escape",
    "shift": "Shift",
    "shift_r": "Shift",
    "ctrl": "Control",
    "ctrl_l": "Control",
    "ctrl_r": "Control",
    "alt": "Alt",
    "alt_l": "Alt",
    "alt_r": "Alt",
    "alt_gr": "AltGraph",
    "cmd": "Meta",
    "cmd_r": "Meta",
    "caps_lock": "CapsLock",
    "delete": "Delete",
    "left": "ArrowLeft",
    "right": "ArrowRight",
    "up": "ArrowUp",
    "down": "ArrowDown",
}


def key_identifier(key: Any) -> str:
    """Map a pynput key object to a browser-style key identifier.

    Printable characters map to themselves and are the only length-1 results.
    """
    try:
        if hasattr(key, "char") and key.char:
            return key.char
        if hasattr(key, "name") and key.name:
            name = key.name
            if name in SPECIAL_NAMES:
                return SPECIAL_NAMES[name]
            return "".join(part.capitalize() for part in name.split("_"))
    except AttributeError:
        pass
    return str(key)


class KeyboardFeed:
    """Drive a text input from the physical keyboard."""

    def __init__(
        self,
        surface: TextInput,
        clock: Callable[[], float] = monotonic_ms,
        config: Optional[ConfigManager] = None,
    ):
        self.config = config or ConfigManager()
        self.surface = surface
        self.clock = clock
        self.listener: Optional[Any] = None

        setup_logging(
            self.config.get("output.log_level", "INFO"), self.config.get("output.log_file")
        )

    @property
    def running(self) -> bool:
        return self.listener is not None

    def _next_value(self, key: str) -> str:
        value = self.surface.value
        if len(key) == 1:
            return value + key
        if key == "Backspace":
            return value[:-1]
        if key == "Escape":
            return ""
        return value

    def on_press(self, key: Any) -> None:
        """Handle key press events: keydown first, then the resulting value change."""
        try:
            now = self.clock()
            identifier = key_identifier(key)
            self.surface.press(identifier, now)

            value = self._next_value(identifier)
            if value != self.surface.value:
                self.surface.set_value(value, now)
        except Exception as e:
            logging.error(f"Error in key press handler: {e}")

    def on_release(self, key: Any) -> None:
        try:
            self.surface.release(key_identifier(key), self.clock())
        except Exception as e:
            logging.error(f"Error in key release handler: {e}")

    def start(self) -> None:
        """Start listening to the keyboard in a background thread."""
        if self.running:
            logging.warning("Keyboard feed is already running")
            return

        from pynput import keyboard

        self.listener = keyboard.Listener(on_press=self.on_press, on_release=self.on_release)
        self.listener.start()
        logging.info(f"Feeding keyboard input into '{self.surface.name}'")

    def stop(self) -> None:
        if self.listener is not None:
            self.listener.stop()
            self.listener = None
            logging.info("Keyboard feed stopped")
