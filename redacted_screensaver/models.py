"""
Data models for redaction layouts.

Defines dataclasses for sampled word boxes, text lines, cached page boxes,
the page being shown, and the parameters that tune the layout engine.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from .exceptions import ConfigurationError


@dataclass(frozen=True)
class WordBox:
    """
    A word (or merged phrase) and the screen rectangle it occupies.

    Coordinates are in viewport pixels, origin at the top-left corner.
    """
    x: float
    y: float
    w: float
    h: float
    text: str = ""

    def __post_init__(self):
        if not (self.w > 0 and self.h > 0):
            raise ValueError(f"Degenerate word box: w={self.w}, h={self.h}")

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    @property
    def rounded_key(self) -> tuple[int, int, int, int]:
        """Rounded geometry, used to recognise the same word hit twice."""
        return (round(self.x), round(self.y), round(self.w), round(self.h))

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "w": self.w, "h": self.h, "text": self.text}


@dataclass
class Line:
    """
    Word boxes judged to sit on the same visual text row.

    reference_y is set by the first box that opened the line and never
    moves afterwards.
    """
    reference_y: float
    boxes: list[WordBox] = field(default_factory=list)

    def sort(self) -> None:
        self.boxes.sort(key=lambda b: b.x)


@dataclass
class CachedBoxes:
    """Sampled boxes for one page and layout configuration."""
    boxes: list[WordBox]
    size: int = 0


@dataclass
class PageContext:
    """
    The page currently on screen, as seen by the layout engine.

    `document` is an opaque handle handed back to the word-lookup
    collaborator; the engine never inspects it.
    """
    document: Any
    document_id: Optional[str]
    page_id: Optional[Any]
    width: int
    height: int
    font_size: Optional[float] = None
    rotation: int = 0


@dataclass
class PageLayout:
    """Result of laying out redactions for a single page."""
    page_id: Optional[Any]
    redactions: list[WordBox] = field(default_factory=list)
    sampled_count: int = 0
    from_cache: bool = False
    error: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.redactions


@dataclass
class LayoutParams:
    """Tunables for the redaction layout engine."""
    redaction_chance: float = 0.35  # Chance a scanned word starts a phrase
    min_redactions: int = 5
    max_redactions: int = 50
    padding_h: int = 2  # Horizontal padding per side when painting
    padding_v: int = 1  # Vertical padding per side when painting
    merge_gap_tolerance: float = 20  # Max gap (px) bridged by one bar
    phrase_length_probs: dict[int, float] = field(
        default_factory=lambda: {1: 0.6, 2: 0.25, 3: 0.15}
    )
    max_cached_boxes: int = 500
    fill_chance: float = 0.5  # Per-box chance in the minimum-fill pass
    default_font_size: float = 16  # Grid sizing fallback
    default_line_tolerance: int = 5  # Line tolerance without font metrics

    def __post_init__(self):
        if not 0.0 <= self.redaction_chance <= 1.0:
            raise ConfigurationError(
                f"redaction_chance must be in [0, 1], got {self.redaction_chance}"
            )
        if not 0.0 <= self.fill_chance <= 1.0:
            raise ConfigurationError(
                f"fill_chance must be in [0, 1], got {self.fill_chance}"
            )
        if self.min_redactions < 0 or self.max_redactions < 0:
            raise ConfigurationError("Redaction counts must not be negative")
        if self.min_redactions > self.max_redactions:
            raise ConfigurationError(
                f"min_redactions ({self.min_redactions}) exceeds "
                f"max_redactions ({self.max_redactions})"
            )
        if self.padding_h < 0 or self.padding_v < 0:
            raise ConfigurationError("Padding must not be negative")
        if self.max_cached_boxes <= 0:
            raise ConfigurationError("max_cached_boxes must be positive")
        if not self.phrase_length_probs:
            raise ConfigurationError("phrase_length_probs must not be empty")
        if any(length < 1 for length in self.phrase_length_probs):
            raise ConfigurationError("Phrase lengths must be at least 1")
        if abs(sum(self.phrase_length_probs.values()) - 1.0) > 1e-6:
            raise ConfigurationError(
                f"phrase_length_probs must sum to 1, got "
                f"{sum(self.phrase_length_probs.values())}"
            )

    def to_dict(self) -> dict:
        return {
            "redaction_chance": self.redaction_chance,
            "min_redactions": self.min_redactions,
            "max_redactions": self.max_redactions,
            "padding_h": self.padding_h,
            "padding_v": self.padding_v,
            "merge_gap_tolerance": self.merge_gap_tolerance,
            "phrase_length_probs": {str(k): v for k, v in self.phrase_length_probs.items()},
            "max_cached_boxes": self.max_cached_boxes,
            "fill_chance": self.fill_chance,
        }
