class MatcherError(Exception):
    """Base exception for reconciliation failures."""


class GedcomLoadError(MatcherError):
    """Raised when an input file cannot be read or parsed. Always fatal."""


class EditQueueError(MatcherError):
    """Raised when the deferred edit queue is misused."""
