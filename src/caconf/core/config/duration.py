"""Duration values written as human-readable unit strings.

Durations in config documents are strings such as ``"500ms"``, ``"30s"`` or
``"1h30m"``, in JSON and in YAML alike. Numbers are refused: a bare ``30`` could
mean seconds or milliseconds, so it is an error rather than a guess.

Grammar: an optional sign followed by one or more ``<quantity><unit>`` pairs with
no separators. Quantities may carry a decimal fraction (``1.5h``, ``.5s``). Units
are ``ns``, ``us`` (or ``µs``/``μs``), ``ms``, ``s``, ``m`` and ``h``. A lone ``0``
needs no unit.

Canonical form, produced by ``format_duration``:

- zero is ``0s``
- below one second a single unit is used: ``750ns``, ``1.5µs``, ``500ms``
- from one second up hours, minutes and seconds are spelled out once the
  largest non-zero unit is reached: ``1h30m0s``, ``2m0s``, ``1.5s``

So ``"90m"`` decodes to ninety minutes and encodes back as ``"1h30m0s"``.
Values are held in nanoseconds and bounded by the signed 64-bit range.
"""

import functools
import re
from datetime import timedelta
from typing import Any
from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from .errors import DurationParseError, DurationTypeError

NANOSECOND = 1
MICROSECOND = 1_000 * NANOSECOND
MILLISECOND = 1_000 * MICROSECOND
SECOND = 1_000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE

MAX_DURATION = (1 << 63) - 1
MIN_DURATION = -(1 << 63)

UNITS = {
    "ns": NANOSECOND,
    "us": MICROSECOND,
    "µs": MICROSECOND,  # micro sign
    "μs": MICROSECOND,  # greek small letter mu
    "ms": MILLISECOND,
    "s": SECOND,
    "m": MINUTE,
    "h": HOUR,
}

_COMPONENT_PATTERN = re.compile(r"([0-9]*)(?:\.([0-9]*))?([^0-9.]*)")

# Longest digit run that can still fit in a signed 64-bit nanosecond count
_MAX_DIGITS = 19


def parse_duration(text: str) -> int:
    """Parse a duration string into nanoseconds.

    Args:
        text: Duration string like '500ms', '1h30m' or '-1.5h'

    Returns:
        The duration in nanoseconds

    Raises:
        DurationParseError: If the string does not follow the grammar or overflows
    """
    original = text
    negative = False
    if text[:1] in ("-", "+"):
        negative = text[0] == "-"
        text = text[1:]

    if text == "0":
        return 0
    if not text:
        raise DurationParseError(original, original)

    total = 0
    pos = 0
    while pos < len(text):
        char = text[pos]
        if char != "." and not "0" <= char <= "9":
            raise DurationParseError(text[pos:], original)

        match = _COMPONENT_PATTERN.match(text, pos)
        if match is None or match.end() == pos:
            raise DurationParseError(text[pos:], original)
        whole, fraction, unit = match.groups()
        component = match.group(0)

        if not whole and not fraction:
            raise DurationParseError(component, original)
        if not unit:
            raise DurationParseError(component, original, "missing unit for")
        scale = UNITS.get(unit)
        if scale is None:
            raise DurationParseError(unit, original, "unknown unit")

        whole = whole.lstrip("0")
        if len(whole) > _MAX_DIGITS:
            raise DurationParseError(component, original, "overflow at")
        value = int(whole or "0") * scale
        # Digits past the nanosecond resolution of the largest unit never count
        fraction = fraction[:_MAX_DIGITS] if fraction else ""
        if fraction:
            value += int(fraction) * scale // 10 ** len(fraction)

        total += value
        if total > 1 << 63:
            raise DurationParseError(component, original, "overflow at")
        pos = match.end()

    if negative:
        return -total
    if total > MAX_DURATION:
        raise DurationParseError(original, original, "duration overflows")
    return total


def _split_fraction(value: int, precision: int) -> tuple[int, str]:
    whole, fraction = divmod(value, 10**precision)
    if not fraction:
        return whole, ""
    return whole, "." + f"{fraction:0{precision}d}".rstrip("0")


def format_duration(nanoseconds: int) -> str:
    """Format nanoseconds in the canonical duration form.

    Args:
        nanoseconds: The duration in nanoseconds

    Returns:
        Canonical duration string, '0s' for zero
    """
    if nanoseconds == 0:
        return "0s"

    sign = "-" if nanoseconds < 0 else ""
    value = abs(nanoseconds)

    if value < SECOND:
        if value < MICROSECOND:
            return f"{sign}{value}ns"
        if value < MILLISECOND:
            whole, fraction = _split_fraction(value, 3)
            return f"{sign}{whole}{fraction}µs"
        whole, fraction = _split_fraction(value, 6)
        return f"{sign}{whole}{fraction}ms"

    seconds, fraction = _split_fraction(value, 9)
    minutes, seconds = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)

    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}{fraction}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}{fraction}s"
    return f"{sign}{seconds}{fraction}s"


@functools.total_ordering
class ConfigDuration:
    """A duration config field.

    Zero means unset, which call sites treat as "no wait" or "use the default".
    Instances are immutable and hashable. Python-mode dumps keep them as
    ``ConfigDuration``; JSON-mode dumps write the canonical string.

    Attributes:
        nanoseconds: The duration in nanoseconds

    Example:
        >>> decode("1h30m")
        ConfigDuration(nanoseconds=5400000000000)
        >>> str(decode("90m"))
        '1h30m0s'
    """

    __slots__ = ("_nanoseconds",)

    def __init__(self, nanoseconds: int = 0) -> None:
        if isinstance(nanoseconds, bool) or not isinstance(nanoseconds, int):
            raise TypeError(f"nanoseconds must be an int, got {type(nanoseconds).__name__}")
        if not MIN_DURATION <= nanoseconds <= MAX_DURATION:
            raise OverflowError(f"duration out of range: {nanoseconds}ns")
        object.__setattr__(self, "_nanoseconds", nanoseconds)

    @property
    def nanoseconds(self) -> int:
        return self._nanoseconds

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigDuration):
            return NotImplemented
        return self._nanoseconds == other._nanoseconds

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ConfigDuration):
            return NotImplemented
        return self._nanoseconds < other._nanoseconds

    def __hash__(self) -> int:
        return hash((ConfigDuration, self._nanoseconds))

    def __repr__(self) -> str:
        return f"ConfigDuration(nanoseconds={self._nanoseconds})"

    def __reduce__(self) -> tuple[Any, ...]:
        return (ConfigDuration, (self._nanoseconds,))

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> "ConfigDuration":
        micros = (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds
        return cls(micros * MICROSECOND)

    def as_timedelta(self) -> timedelta:
        """The duration as a ``timedelta``, truncated to microseconds."""
        micros = abs(self.nanoseconds) // MICROSECOND
        return timedelta(microseconds=-micros if self.nanoseconds < 0 else micros)

    def total_seconds(self) -> float:
        return self.nanoseconds / SECOND

    def __bool__(self) -> bool:
        return self.nanoseconds != 0

    def __str__(self) -> str:
        return format_duration(self.nanoseconds)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            _validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                encode, when_used="json"
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {"type": "string", "examples": ["500ms", "30s", "1h30m0s"]}


def decode(raw: Any) -> ConfigDuration:
    """Decode a raw document scalar into a duration.

    Args:
        raw: The scalar as produced by the JSON or YAML parser

    Returns:
        The decoded duration

    Raises:
        DurationTypeError: If the scalar is not a string
        DurationParseError: If the string is not a valid duration
    """
    if not isinstance(raw, str):
        raise DurationTypeError(raw)
    return ConfigDuration(parse_duration(raw))


def encode(duration: ConfigDuration) -> str:
    """Encode a duration as its canonical string."""
    return format_duration(duration.nanoseconds)


def _validate(raw: Any) -> ConfigDuration:
    # Values built in code are already typed
    if isinstance(raw, ConfigDuration):
        return raw
    return decode(raw)

