"""Tests for the screensaver host adapter."""

import numpy as np

from redacted_screensaver.engine import RedactionLayoutEngine
from redacted_screensaver.models import WordBox
from redacted_screensaver.render import ImageSurface
from redacted_screensaver.screensaver import (
    EVENT_EXPECTS_PORTRAIT,
    EVENT_MENU,
    EVENT_SETUP,
    EVENT_SHOW,
    SCREENSAVER_TYPE,
    HookRegistry,
    ReaderState,
    RedactedScreensaver,
    ScreensaverSettings,
)


def word_everywhere(document, point):
    x, y = point
    return WordBox(x=x, y=y, w=20, h=10, text="w")


def reader(**overrides):
    values = dict(
        document=object(),
        document_id="novel.epub",
        page_id=42,
        width=300,
        height=200,
        font_size=10,
    )
    values.update(overrides)
    return ReaderState(**values)


def screensaver(enabled=True, lookup=word_everywhere):
    return RedactedScreensaver(
        RedactionLayoutEngine(), lookup, ScreensaverSettings(enabled=enabled)
    )


# ── Hook registry ────────────────────────────────────────────────────

def test_emit_returns_first_non_none_result():
    hooks = HookRegistry()
    hooks.register("setup", lambda: None)
    hooks.register("setup", lambda: "second")
    hooks.register("setup", lambda: "third")

    assert hooks.emit("setup") == "second"


def test_emit_without_handlers():
    assert HookRegistry().emit("anything", 1, 2) is None


def test_register_wires_all_extension_points():
    hooks = HookRegistry()
    screensaver().register(hooks)

    for event in (EVENT_SETUP, EVENT_SHOW, EVENT_EXPECTS_PORTRAIT, EVENT_MENU):
        assert len(hooks.handlers(event)) == 1


# ── Activation ───────────────────────────────────────────────────────

def test_disabled_setting_keeps_default_screensaver():
    assert screensaver(enabled=False).on_setup(reader()) is None


def test_reflowable_document_activates():
    assert screensaver().on_setup(reader()) == SCREENSAVER_TYPE


def test_paged_document_does_not_activate():
    assert screensaver().on_setup(reader(reflowable=False)) is None


def test_no_document_does_not_activate():
    assert screensaver().on_setup(reader(document=None)) is None
    assert screensaver().on_setup(None) is None


# ── Showing ──────────────────────────────────────────────────────────

def test_show_paints_over_current_page():
    hooks = HookRegistry()
    screensaver().register(hooks)
    image = np.full((200, 300, 3), 255, dtype=np.uint8)

    state = reader()
    screensaver_type = hooks.emit(EVENT_SETUP, state)
    shown = hooks.emit(EVENT_SHOW, screensaver_type, state, ImageSurface(image))

    assert shown is True
    assert (image == 0).any()


def test_show_ignores_other_screensaver_types():
    image = np.full((200, 300, 3), 255, dtype=np.uint8)
    assert screensaver().on_show("cover", reader(), ImageSurface(image)) is None
    assert (image == 255).all()


def test_show_falls_back_when_page_has_no_words():
    image = np.full((200, 300, 3), 255, dtype=np.uint8)
    saver = screensaver(lookup=lambda doc, p: None)

    assert saver.on_show(SCREENSAVER_TYPE, reader(), ImageSurface(image)) is False
    assert (image == 255).all()


def test_show_without_reader():
    image = np.full((10, 10, 3), 255, dtype=np.uint8)
    assert screensaver().on_show(SCREENSAVER_TYPE, None, ImageSurface(image)) is False


# ── Orientation and menu ─────────────────────────────────────────────

def test_redacted_keeps_current_orientation():
    saver = screensaver()
    assert saver.expects_portrait(SCREENSAVER_TYPE) is False
    assert saver.expects_portrait("cover") is None


def test_menu_item_toggles_setting():
    settings = ScreensaverSettings()
    saver = RedactedScreensaver(RedactionLayoutEngine(), word_everywhere, settings)
    item = saver.menu_item()

    assert "redacted" in item["text"]
    assert item["checked_func"]() is False

    item["callback"]()
    assert settings.enabled is True
    assert item["checked_func"]() is True

    item["callback"]()
    assert settings.enabled is False
