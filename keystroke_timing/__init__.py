# ABOUTME: Package initialization for keystroke timing capture
"""
Keystroke Timing Capture

Turns key-down, key-up and value-change events on a password or challenge
field into a timing summary used as a behavioral-biometric signal.
"""

__version__ = "1.0.0"
__description__ = "Keystroke timing capture for behavioral-biometric authentication"

from .events import (
    InsertionEvent,
    KeyDownEvent,
    KeyUpEvent,
    PayloadError,
    TimingSummary,
    event_from_dict,
)
from .logger import KeystrokeLogger
from .surface import SurfaceEvent, TextInput
from .form import LoginForm, attach_on_init, extra_word_page, login_page, populate_submission
from .features import describe, event_counts, events_frame, timing_vector
from .keyboard_source import KeyboardFeed, key_identifier
from .utils import ConfigManager, monotonic_ms, setup_logging

__all__ = [
    "KeystrokeLogger",
    "TimingSummary",
    "KeyDownEvent",
    "KeyUpEvent",
    "InsertionEvent",
    "PayloadError",
    "event_from_dict",
    "TextInput",
    "SurfaceEvent",
    "LoginForm",
    "attach_on_init",
    "populate_submission",
    "login_page",
    "extra_word_page",
    "event_counts",
    "timing_vector",
    "describe",
    "events_frame",
    "KeyboardFeed",
    "key_identifier",
    "ConfigManager",
    "monotonic_ms",
    "setup_logging",
]
