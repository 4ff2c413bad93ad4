"""Exception hierarchy for the redaction layout engine.

Nothing raised here is meant to reach the host application: sampling
failures are recovered inside the sampler and configuration errors are
raised at construction time, before a screensaver is ever shown.
"""


class RedactionLayoutError(Exception):
    """Base exception for all package-specific errors."""

    pass


class ConfigurationError(RedactionLayoutError):
    """Raised when layout parameters are out of range."""

    pass


class WordLookupError(RedactionLayoutError):
    """Raised by a word-lookup collaborator when a lookup fails.

    Distinct from a lookup that simply finds no word at the point.
    """

    pass
