"""Typed view over dynamically typed card property values.

Card property maps hold strings, numbers, nested date envelopes or lists of
person ids. ``PropertyValue`` tags each raw value once so callers extract
fields through explicit, total helpers instead of ad-hoc type checks.
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# Same grammar as a base-10 int64 parse: optional sign, digits only
_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")

# Sign plus the 19 digits of INT64_MAX; anything longer cannot fit
_MAX_DECIMAL_LEN = 20

NO_DUE_DATE = 0


class ValueKind(StrEnum):
    """Tag for the shape of a raw property value."""

    NUMBER = "number"
    STRING = "string"
    DATE_ENVELOPE = "date_envelope"
    LIST = "list"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class PropertyValue:
    """A raw property value paired with its shape tag."""

    kind: ValueKind
    raw: Any = None

    @classmethod
    def of(cls, raw: Any) -> PropertyValue:
        """Classify a raw value from a card's property map."""
        # bool is an int subclass but never a timestamp or identifier
        if isinstance(raw, bool):
            return cls(ValueKind.UNKNOWN, raw)
        if isinstance(raw, int | float):
            return cls(ValueKind.NUMBER, raw)
        if isinstance(raw, str):
            if raw.startswith("{"):
                return cls(ValueKind.DATE_ENVELOPE, raw)
            return cls(ValueKind.STRING, raw)
        if isinstance(raw, Mapping):
            return cls(ValueKind.DATE_ENVELOPE, raw)
        if isinstance(raw, list | tuple):
            return cls(ValueKind.LIST, tuple(raw))
        return cls(ValueKind.UNKNOWN, raw)

    @classmethod
    def lookup(cls, properties: Mapping[str, Any], property_id: str) -> PropertyValue:
        """Classify ``properties[property_id]``; absent keys are UNKNOWN."""
        if not property_id or property_id not in properties:
            return cls(ValueKind.UNKNOWN)
        return cls.of(properties[property_id])

    @property
    def is_missing(self) -> bool:
        return self.kind is ValueKind.UNKNOWN and self.raw is None

    def as_text(self) -> str:
        """Return the value when it is a plain string, else an empty string."""
        if self.kind is ValueKind.STRING:
            return self.raw
        return ""

    def as_ids(self) -> tuple[str, ...]:
        """Return the identifiers held by a person-like value.

        A single string is one identifier; a list yields its string members.
        """
        if self.kind is ValueKind.STRING:
            return (self.raw,) if self.raw else ()
        if self.kind is ValueKind.LIST:
            return tuple(item for item in self.raw if isinstance(item, str) and item)
        return ()

    def as_epoch_ms(self) -> int:
        """Resolve the value to epoch milliseconds, or ``NO_DUE_DATE``."""
        if self.kind is ValueKind.NUMBER:
            return _truncate(self.raw)
        if self.kind is ValueKind.STRING:
            return _parse_decimal(self.raw)
        if self.kind is ValueKind.DATE_ENVELOPE:
            return _parse_envelope(self.raw)
        return NO_DUE_DATE


def parse_due_date(raw: Any) -> int:
    """Convert a raw due-date field into canonical epoch milliseconds.

    Accepted encodings, checked in order:

    1. A number, truncated to integer milliseconds.
    2. A string starting with ``{``: a JSON object whose ``from`` field is a
       number (truncated) or a base-10 numeric string.
    3. A plain base-10 numeric string.

    Any other shape, malformed JSON or non-numeric text yields ``0``, the
    "no due date" sentinel. This function never raises.

    Example:
        >>> parse_due_date('{"from": "1700000000000"}')
        1700000000000
        >>> parse_due_date("abc")
        0
    """
    return PropertyValue.of(raw).as_epoch_ms()


def _truncate(number: int | float) -> int:
    if isinstance(number, float):
        if not math.isfinite(number):
            return NO_DUE_DATE
        number = int(number)
    if INT64_MIN <= number <= INT64_MAX:
        return number
    return NO_DUE_DATE


def _parse_decimal(text: str) -> int:
    if len(text) > _MAX_DECIMAL_LEN or not _DECIMAL_RE.fullmatch(text):
        return NO_DUE_DATE
    value = int(text)
    if INT64_MIN <= value <= INT64_MAX:
        return value
    return NO_DUE_DATE


def _parse_envelope(envelope: str | Mapping[str, Any]) -> int:
    if isinstance(envelope, str):
        try:
            envelope = json.loads(envelope)
        except (ValueError, RecursionError):
            return NO_DUE_DATE
    if not isinstance(envelope, Mapping):
        return NO_DUE_DATE

    start = envelope.get("from")
    if isinstance(start, bool):
        return NO_DUE_DATE
    if isinstance(start, int | float):
        return _truncate(start)
    if isinstance(start, str):
        return _parse_decimal(start)
    return NO_DUE_DATE
