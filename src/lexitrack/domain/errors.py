"""Exception hierarchy for lexitrack.

Only the strict (validating) entry points raise these. The default entry
points coerce malformed input to the nearest valid value instead.
"""


class LexitrackError(Exception):
    """Base class for all lexitrack errors."""


class ValidationError(LexitrackError, ValueError):
    """Input outside its documented domain."""


class InvalidGradeError(ValidationError):
    """Review grade is not one of forgot/hard/good/easy."""


class InvalidStateError(ValidationError):
    """Scheduling state or counters violate their invariants."""


class InvalidScoreError(ValidationError):
    """Dictionary difficulty outside [0, 100]."""
