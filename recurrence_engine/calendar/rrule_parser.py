"""Parser and serializer for the stored recurrence rule grammar.

Grammar (subset of RFC 5545 RRULE)::

    FREQ=<WEEKLY|MONTHLY>[;INTERVAL=<n>][;BYDAY=<day-list>][;UNTIL=<YYYYMMDD>T235959Z|;COUNT=<n>]

``ParsedRule`` is the engine's own representation of a rule. Evaluation
backends consume it; nothing outside this package sees a backend type.
"""

# ruff: noqa: I001
from dataclasses import dataclass, replace
from datetime import date, datetime
import logging
import re
from typing import Optional

from ..exceptions import RRuleParseError
from .date_utils import end_of_day, format_compact
from .day_ordinals import DAY_CODES

logger = logging.getLogger(__name__)

SUPPORTED_FREQUENCIES: tuple[str, ...] = ("WEEKLY", "MONTHLY")

_KNOWN_KEYS = frozenset({"FREQ", "INTERVAL", "BYDAY", "UNTIL", "COUNT"})

_BYDAY_TOKEN = re.compile(r"^([+-]?\d{1,2})?([A-Z]{2})$")
_UNTIL_VALUE = re.compile(r"^(\d{4})(\d{2})(\d{2})(?:T(\d{2})(\d{2})(\d{2})Z?)?$")
_END_CLAUSE = re.compile(r";?(UNTIL|COUNT)=[^;]*", re.IGNORECASE)


@dataclass(frozen=True)
class ByDay:
    """One BYDAY entry: a weekday with an optional signed ordinal in the month."""

    day_code: str
    ordinal: Optional[int] = None

    def __str__(self) -> str:
        if self.ordinal is None:
            return self.day_code
        return f"{self.ordinal}{self.day_code}"


@dataclass(frozen=True)
class ParsedRule:
    """Structured form of a recurrence rule string."""

    freq: str
    interval: int = 1
    by_day: tuple[ByDay, ...] = ()
    until: Optional[date] = None
    count: Optional[int] = None

    @property
    def is_open_ended(self) -> bool:
        return self.until is None and self.count is None

    def without_end(self) -> "ParsedRule":
        """Same pattern with UNTIL and COUNT removed."""
        return replace(self, until=None, count=None)

    def with_until(self, until: date) -> "ParsedRule":
        return replace(self, until=until, count=None)

    def with_count(self, count: int) -> "ParsedRule":
        return replace(self, until=None, count=count)

    def pattern_key(self) -> tuple[str, int, frozenset[ByDay]]:
        """Frequency, interval and day set; used for structural comparison."""
        return (self.freq, self.interval, frozenset(self.by_day))

    def to_string(self) -> str:
        """Serialize in canonical part order: FREQ, INTERVAL, BYDAY, end clause."""
        parts = [f"FREQ={self.freq}"]
        if self.interval > 1:
            parts.append(f"INTERVAL={self.interval}")
        if self.by_day:
            parts.append("BYDAY=" + ",".join(str(d) for d in self.by_day))
        if self.until is not None:
            parts.append(f"UNTIL={format_compact(self.until)}T235959Z")
        elif self.count is not None:
            parts.append(f"COUNT={self.count}")
        return ";".join(parts)


def parse_byday_token(token: str, freq: Optional[str] = None) -> ByDay:
    """Parse one BYDAY token such as ``TU``, ``2TU`` or ``-1FR``.

    Ordinals are only meaningful for monthly rules; pass ``freq`` to have a
    weekly ordinal rejected.

    Raises:
        RRuleParseError: If the token is not a valid day reference
    """
    match = _BYDAY_TOKEN.match(token.strip().upper())
    if not match:
        raise RRuleParseError(f"Invalid BYDAY value: {token!r}")
    raw_ordinal, day_code = match.groups()
    if day_code not in DAY_CODES:
        raise RRuleParseError(f"Unknown day code in BYDAY: {token!r}")
    ordinal = None
    if raw_ordinal is not None:
        ordinal = int(raw_ordinal)
        if ordinal == 0 or not -5 <= ordinal <= 5:
            raise RRuleParseError(f"BYDAY ordinal out of range: {token!r}")
        if freq == "WEEKLY":
            raise RRuleParseError(f"Ordinal BYDAY is not valid for weekly rules: {token!r}")
    return ByDay(day_code=day_code, ordinal=ordinal)


def _parse_positive_int(key: str, value: str, rule: str) -> int:
    try:
        number = int(value)
    except ValueError as e:
        raise RRuleParseError(f"{key} must be an integer, got {value!r}", rule=rule) from e
    if number < 1:
        raise RRuleParseError(f"{key} must be positive, got {number}", rule=rule)
    return number


def _parse_until(value: str, rule: str) -> date:
    match = _UNTIL_VALUE.match(value)
    if not match:
        raise RRuleParseError(f"Invalid UNTIL value: {value!r}", rule=rule)
    year, month, day = (int(g) for g in match.groups()[:3])
    try:
        return date(year, month, day)
    except ValueError as e:
        raise RRuleParseError(f"Invalid UNTIL date: {value!r}", rule=rule) from e


def parse_rule(rule: str) -> ParsedRule:
    """Parse a stored rule string.

    Parsing is case-insensitive and tolerant of part order and a leading
    ``RRULE:`` prefix.

    Args:
        rule: Rule string, e.g. ``FREQ=MONTHLY;BYDAY=-1TU;COUNT=6``

    Returns:
        ParsedRule

    Raises:
        RRuleParseError: If the rule does not follow the grammar
    """
    if not rule or not rule.strip():
        raise RRuleParseError("Empty RRULE string", rule=rule)

    text = rule.strip().upper()
    if text.startswith("RRULE:"):
        text = text[len("RRULE:") :]

    fields: dict[str, str] = {}
    for part in text.split(";"):
        if not part:
            continue
        key, sep, value = part.partition("=")
        key = key.strip()
        if not sep or not value.strip():
            raise RRuleParseError(f"Malformed RRULE part: {part!r}", rule=rule)
        if key not in _KNOWN_KEYS:
            raise RRuleParseError(f"Unsupported RRULE part: {key}", rule=rule)
        if key in fields:
            raise RRuleParseError(f"Duplicate RRULE part: {key}", rule=rule)
        fields[key] = value.strip()

    freq = fields.get("FREQ")
    if freq is None:
        raise RRuleParseError("RRULE has no FREQ", rule=rule)
    if freq not in SUPPORTED_FREQUENCIES:
        raise RRuleParseError(f"Unsupported FREQ: {freq}", rule=rule)

    if "UNTIL" in fields and "COUNT" in fields:
        raise RRuleParseError("RRULE cannot carry both UNTIL and COUNT", rule=rule)

    interval = 1
    if "INTERVAL" in fields:
        interval = _parse_positive_int("INTERVAL", fields["INTERVAL"], rule)

    by_day: tuple[ByDay, ...] = ()
    if "BYDAY" in fields:
        try:
            by_day = tuple(
                parse_byday_token(token, freq) for token in fields["BYDAY"].split(",")
            )
        except RRuleParseError as e:
            raise RRuleParseError(e.message, rule=rule) from e

    until = _parse_until(fields["UNTIL"], rule) if "UNTIL" in fields else None
    count = _parse_positive_int("COUNT", fields["COUNT"], rule) if "COUNT" in fields else None

    parsed = ParsedRule(freq=freq, interval=interval, by_day=by_day, until=until, count=count)
    logger.debug("Parsed RRULE %r -> %r", rule, parsed)
    return parsed


def strip_end_clause(rule: str) -> str:
    """Remove any UNTIL/COUNT parts from a rule string without parsing it."""
    core = _END_CLAUSE.sub("", rule.strip())
    return core.strip(";")


def until_as_datetime(parsed: ParsedRule) -> Optional[datetime]:
    """End of the UNTIL day in UTC, or None."""
    return end_of_day(parsed.until) if parsed.until is not None else None
