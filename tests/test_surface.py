# ABOUTME: Unit tests for the text input surface
import pytest

from keystroke_timing.surface import TextInput


class TestTextInput:
    """Test event dispatch on a text input."""

    def test_dispatch_to_listeners(self):
        field = TextInput("password")
        seen = []
        field.add_event_listener("keydown", seen.append)
        field.add_event_listener("input", seen.append)

        field.press("a", 5.0)
        field.set_value("a", 5.0)
        field.release("a", 9.0)

        assert [(e.kind, e.key, e.value, e.timestamp) for e in seen] == [
            ("keydown", "a", None, 5.0),
            ("input", None, "a", 5.0),
        ]
        assert field.value == "a"

    def test_unknown_event_kind(self):
        with pytest.raises(ValueError):
            TextInput("password").add_event_listener("paste", lambda event: None)

    def test_remove_listener(self):
        field = TextInput("password")
        seen = []
        field.add_event_listener("keyup", seen.append)
        field.remove_event_listener("keyup", seen.append)

        field.release("a", 0.0)
        assert seen == []

    def test_type_text(self):
        field = TextInput("extraWord")
        end = field.type_text("abc", start=10.0, interval=100.0, dwell=30.0)

        assert field.value == "abc"
        assert end == 240.0

    def test_type_text_rejects_overlapping_keys(self):
        with pytest.raises(ValueError):
            TextInput("password").type_text("ab", interval=50.0, dwell=80.0)
