"""Tests for preference state."""

import pytest

from moodcapsule.domain.entities import Preferences
from moodcapsule.domain.errors import InvalidNameError, ValidationError
from moodcapsule.domain.preferences import PreferenceState


def test_defaults(preferences):
    assert preferences.dark_mode is False
    assert preferences.display_name == ""
    assert preferences.avatar_image is None
    assert preferences.snapshot() == Preferences()


def test_set_dark_mode(preferences):
    preferences.set_dark_mode(True)
    assert preferences.dark_mode is True
    preferences.set_dark_mode(False)
    assert preferences.dark_mode is False


def test_set_display_name_too_short(preferences):
    with pytest.raises(InvalidNameError):
        preferences.set_display_name("A")
    assert preferences.display_name == ""


def test_set_display_name_trims(preferences):
    stored = preferences.set_display_name("  Al  ")
    assert stored == "Al"
    assert preferences.display_name == "Al"


def test_set_display_name_length_bounds(preferences):
    preferences.set_display_name("x" * 20)
    assert preferences.display_name == "x" * 20

    with pytest.raises(InvalidNameError, match="between 2 and 20"):
        preferences.set_display_name("y" * 21)
    assert preferences.display_name == "x" * 20


def test_set_display_name_whitespace_only(preferences):
    with pytest.raises(InvalidNameError):
        preferences.set_display_name("      ")


def test_set_display_name_rejects_unchanged(preferences):
    preferences.set_display_name("Alice")
    with pytest.raises(InvalidNameError, match="already"):
        preferences.set_display_name(" Alice ")
    assert preferences.display_name == "Alice"


def test_invalid_name_is_validation_error(preferences):
    with pytest.raises(ValidationError):
        preferences.set_display_name("")


def test_set_avatar(preferences):
    preferences.set_avatar(b"\x89PNG fake")
    assert preferences.avatar_image == b"\x89PNG fake"
    preferences.set_avatar(None)
    assert preferences.avatar_image is None


def test_mutations_keep_other_fields(preferences):
    preferences.set_display_name("Bob")
    preferences.set_avatar(b"img")
    preferences.set_dark_mode(True)

    assert preferences.snapshot() == Preferences(
        dark_mode=True, display_name="Bob", avatar_image=b"img"
    )


def test_apply_replaces_everything():
    state = PreferenceState(Preferences(dark_mode=True, display_name="Old", avatar_image=b"a"))
    state.apply(Preferences(display_name="New"))
    assert state.snapshot() == Preferences(display_name="New")
