# ABOUTME: Timing event records and the immutable session summary with its wire codec
import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union


class PayloadError(ValueError):
    """Raised when a serialized timing summary cannot be decoded."""


@dataclass(frozen=True)
class KeyDownEvent:
    """Press of a printable key."""

    timestamp: Optional[float]
    down_down: Optional[float] = None

    type = "down"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "timestamp": self.timestamp, "down_down": self.down_down}


@dataclass(frozen=True)
class KeyUpEvent:
    """Release of a printable key."""

    timestamp: Optional[float]
    dwell_time: Optional[float] = None

    type = "up"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "timestamp": self.timestamp, "dwellTime": self.dwell_time}


@dataclass(frozen=True)
class InsertionEvent:
    """Growth of the input value, whatever produced it (typing, paste, autofill, IME)."""

    timestamp: Optional[float]
    length: int

    type = "insert"

    def to_dict(self) -> Dict[str, Any]:
        return {"len": self.length, "type": self.type, "timestamp": self.timestamp}


TimingEvent = Union[KeyDownEvent, KeyUpEvent, InsertionEvent]


def _number(data: Dict[str, Any], key: str, nullable: bool = False) -> Optional[float]:
    value = data.get(key)
    if value is None:
        if nullable:
            return None
        raise PayloadError(f"Missing numeric field '{key}' in {data!r}")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PayloadError(f"Field '{key}' must be a number, got {value!r}")
    return float(value)


def event_from_dict(data: Dict[str, Any]) -> TimingEvent:
    """Create an event from its wire dictionary.

    The timestamp key must be present but may be null, like the durations.
    """
    if not isinstance(data, dict):
        raise PayloadError(f"Keystroke entry must be an object, got {data!r}")

    if "timestamp" not in data:
        raise PayloadError(f"Missing timestamp in {data!r}")
    kind = data.get("type")
    timestamp = _number(data, "timestamp", nullable=True)
    if kind == "down":
        return KeyDownEvent(timestamp=timestamp, down_down=_number(data, "down_down", nullable=True))
    if kind == "up":
        return KeyUpEvent(timestamp=timestamp, dwell_time=_number(data, "dwellTime", nullable=True))
    if kind == "insert":
        length = data.get("len")
        if isinstance(length, bool) or not isinstance(length, int) or length < 1:
            raise PayloadError(f"Insertion length must be a positive integer, got {length!r}")
        return InsertionEvent(timestamp=timestamp, length=length)
    raise PayloadError(f"Unknown keystroke type: {kind!r}")


@dataclass(frozen=True)
class TimingSummary:
    """Finalized view of one capture session, as handed to the form submission."""

    events: Tuple[TimingEvent, ...] = ()
    total_time: float = 0

    def __len__(self) -> int:
        return len(self.events)

    def of_type(self, kind: str) -> Tuple[TimingEvent, ...]:
        """Events of one kind ("down", "up" or "insert"), in recorded order."""
        return tuple(event for event in self.events if event.type == kind)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "keystrokes": [event.to_dict() for event in self.events],
            "totalTime": self.total_time,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TimingSummary":
        """Create from dictionary."""
        if not isinstance(data, dict):
            raise PayloadError(f"Timing payload must be an object, got {type(data).__name__}")
        keystrokes = data.get("keystrokes")
        if not isinstance(keystrokes, list):
            raise PayloadError("Timing payload is missing the 'keystrokes' list")
        events = tuple(event_from_dict(item) for item in keystrokes)
        return cls(events=events, total_time=_number(data, "totalTime"))

    @classmethod
    def from_json(cls, text: str) -> "TimingSummary":
        try:
            data = json.loads(text)
        except (TypeError, json.JSONDecodeError) as e:
            raise PayloadError(f"Timing payload is not valid JSON: {e}") from e
        return cls.from_dict(data)
