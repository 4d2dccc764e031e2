"""Tagged representation of caller-supplied metadata."""

import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Tuple

# Largest integer a JSON/IEEE-754 double represents exactly
MAX_SAFE_INTEGER = 2**53 - 1


class MetadataKind(Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    BIG_INTEGER = "bigint"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    OTHER = "other"


SCALAR_KINDS = frozenset({
    MetadataKind.STRING, MetadataKind.NUMBER, MetadataKind.BOOLEAN,
    MetadataKind.BIG_INTEGER, MetadataKind.OTHER,
})


def format_number(number: float) -> str:
    """
    Format a float the way a JSON producer prints it.

    Shortest round-trip digits; integral values drop the fraction;
    exponent form only when the decimal exponent is >= 21 or <= -7.
    """
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number == 0:
        return "0"

    sign = "-" if number < 0 else ""
    parts = Decimal(repr(abs(number))).normalize().as_tuple()
    digits = "".join(str(d) for d in parts.digits)
    k = len(digits)
    n = parts.exponent + k  # value = 0.digits * 10**n

    if k <= n <= 21:
        return f"{sign}{digits}{'0' * (n - k)}"
    if 0 < n <= 21:
        return f"{sign}{digits[:n]}.{digits[n:]}"
    if -6 < n <= 0:
        return f"{sign}0.{'0' * -n}{digits}"

    exponent = n - 1
    exp_sign = "+" if exponent >= 0 else "-"
    mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
    return f"{sign}{mantissa}e{exp_sign}{abs(exponent)}"


def to_text(value: Any) -> str:
    """Text form of a scalar metadata value."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format_number(value)
    if value is None:
        return "null"
    return str(value)


@dataclass(frozen=True)
class MetadataValue:
    """
    One node of a metadata tree.

    SEQUENCE holds a tuple of MetadataValue, MAPPING a tuple of
    (key, MetadataValue) pairs in insertion order, scalars the raw value.
    """
    kind: MetadataKind
    value: Any

    @property
    def is_scalar(self) -> bool:
        return self.kind in SCALAR_KINDS

    @property
    def text(self) -> str:
        if not self.is_scalar:
            raise TypeError(f"{self.kind.value} metadata has no text form")
        return to_text(self.value)

    @property
    def items(self) -> Tuple[Tuple[str, "MetadataValue"], ...]:
        if self.kind is not MetadataKind.MAPPING:
            raise TypeError(f"{self.kind.value} metadata has no items")
        return self.value

    @classmethod
    def from_raw(cls, raw: Any) -> "MetadataValue":
        """Classify a JSON-like Python value (recursively)."""
        # bool before int: bool is an int subclass
        if isinstance(raw, str):
            return cls(MetadataKind.STRING, raw)
        if isinstance(raw, bool):
            return cls(MetadataKind.BOOLEAN, raw)
        if isinstance(raw, int):
            if abs(raw) > MAX_SAFE_INTEGER:
                return cls(MetadataKind.BIG_INTEGER, raw)
            return cls(MetadataKind.NUMBER, raw)
        if isinstance(raw, float):
            return cls(MetadataKind.NUMBER, raw)
        if isinstance(raw, Mapping):
            return cls(MetadataKind.MAPPING, tuple(
                (to_text(key), cls.from_raw(child)) for key, child in raw.items()
            ))
        if isinstance(raw, (list, tuple)):
            return cls(MetadataKind.SEQUENCE, tuple(cls.from_raw(item) for item in raw))
        return cls(MetadataKind.OTHER, raw)
