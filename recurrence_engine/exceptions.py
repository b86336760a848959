"""Exception hierarchy for the recurrence engine.

The engine is otherwise pure and total; these exceptions mark the few
places where a caller must be told that its input cannot be honored.
"""

from typing import Optional


class RecurrenceError(Exception):
    """Base exception for all recurrence engine errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class RRuleParseError(RecurrenceError):
    """Recurrence rule string does not follow the supported grammar.

    Raised when:
    - FREQ is missing or not WEEKLY/MONTHLY
    - a part is not KEY=VALUE or the key is unknown
    - INTERVAL or COUNT is not a positive integer
    - BYDAY holds an unknown day code or an out-of-range ordinal
    - UNTIL and COUNT are both present

    Rules produced by the builder never trigger this, so seeing it usually
    means the stored rule was corrupted upstream.
    """

    def __init__(self, message: str, rule: Optional[str] = None) -> None:
        super().__init__(message)
        self.rule = rule


class RecurrenceValidationError(RecurrenceError):
    """Caller supplied arguments that make the requested operation meaningless."""


class InstanceCancelledError(RecurrenceError):
    """Requested occurrence exists in the series but has been cancelled."""

    def __init__(self, message: str, instance_date: Optional[object] = None) -> None:
        super().__init__(message)
        self.instance_date = instance_date
