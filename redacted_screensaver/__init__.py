"""
Redacted Screensaver - page layouts covered by random redaction bars.

This package samples word boxes from a rendered page, groups them into
text lines, picks random words and phrases to black out, and merges
neighbouring picks into the bars painted over the page.
"""

__version__ = "0.1.0"
