"""
Screensaver host integration.

Registers the redacted screensaver against a host's lifecycle hooks
instead of replacing host methods. The host emits events on a
HookRegistry; handlers return None to let the host carry on with its
default behaviour.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .engine import RedactionLayoutEngine
from .models import PageContext
from .render import RenderSurface
from .sampler import WordLookup


logger = logging.getLogger(__name__)

SCREENSAVER_TYPE = "redacted"

EVENT_SETUP = "setup"
EVENT_SHOW = "show"
EVENT_EXPECTS_PORTRAIT = "expects_portrait"
EVENT_MENU = "menu"

MENU_TEXT = "Use redacted screensaver when reading"
MENU_HELP_TEXT = (
    "When enabled, shows the current page with random words blacked out "
    "like a redacted document while reading a book. This overrides the "
    "wallpaper setting when in reader mode."
)


class HookRegistry:
    """Named extension points the host emits events on."""

    def __init__(self):
        self._handlers: dict[str, list[Callable]] = defaultdict(list)

    def register(self, event: str, handler: Callable) -> None:
        self._handlers[event].append(handler)

    def emit(self, event: str, *args) -> Any:
        """Call handlers in registration order; return the first non-None result."""
        for handler in self._handlers.get(event, []):
            result = handler(*args)
            if result is not None:
                return result
        return None

    def handlers(self, event: str) -> list[Callable]:
        return list(self._handlers.get(event, []))


@dataclass
class ScreensaverSettings:
    """User-facing settings for the redacted screensaver."""
    enabled: bool = False

    def toggle(self) -> bool:
        self.enabled = not self.enabled
        return self.enabled


@dataclass
class ReaderState:
    """What the host reader exposes about the open document."""
    document: Any
    document_id: Optional[str]
    page_id: Optional[Any]
    width: int
    height: int
    font_size: Optional[float] = None
    rotation: int = 0
    reflowable: bool = True

    def to_page_context(self) -> PageContext:
        return PageContext(
            document=self.document,
            document_id=self.document_id,
            page_id=self.page_id,
            width=self.width,
            height=self.height,
            font_size=self.font_size,
            rotation=self.rotation,
        )


class RedactedScreensaver:
    """
    Shows the current page with random words covered by redaction bars.

    Only applies to reflowable documents (EPUB, FB2, ...); fixed-layout
    documents keep the host's own screensaver.
    """

    def __init__(
        self,
        engine: RedactionLayoutEngine,
        lookup: WordLookup,
        settings: Optional[ScreensaverSettings] = None
    ):
        self.engine = engine
        self.lookup = lookup
        self.settings = settings or ScreensaverSettings()

    def should_show(self, reader: Optional[ReaderState]) -> bool:
        if not self.settings.enabled:
            return False
        return bool(reader and reader.document is not None and reader.reflowable)

    def on_setup(self, reader: Optional[ReaderState]) -> Optional[str]:
        if self.should_show(reader):
            logger.info("Activating redacted screensaver")
            return SCREENSAVER_TYPE
        return None

    def on_show(
        self,
        screensaver_type: Optional[str],
        reader: Optional[ReaderState],
        surface: RenderSurface
    ) -> Optional[bool]:
        """
        Paint redactions over the page currently on the surface.

        Returns:
            None if another screensaver type is active, True if bars were
            painted, False if the host should fall back to its default
        """
        if screensaver_type != SCREENSAVER_TYPE:
            return None
        if reader is None:
            logger.warning("No reader available")
            return False

        layout = self.engine.calculate_redactions(reader.to_page_context(), self.lookup)
        if layout.is_empty:
            return False
        return self.engine.paint(surface, layout) > 0

    def expects_portrait(self, screensaver_type: Optional[str]) -> Optional[bool]:
        if screensaver_type == SCREENSAVER_TYPE:
            return False  # Keep current orientation
        return None

    def menu_item(self) -> dict:
        return {
            "text": MENU_TEXT,
            "help_text": MENU_HELP_TEXT,
            "checked_func": lambda: self.settings.enabled,
            "callback": self.settings.toggle,
            "separator": True,
        }

    def register(self, hooks: HookRegistry) -> None:
        hooks.register(EVENT_SETUP, self.on_setup)
        hooks.register(EVENT_SHOW, self.on_show)
        hooks.register(EVENT_EXPECTS_PORTRAIT, self.expects_portrait)
        hooks.register(EVENT_MENU, self.menu_item)
