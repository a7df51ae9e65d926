"""Field validation: pure functions.

``normalize(descriptor, raw)`` turns whatever an editor control sent into a
value that conforms to the descriptor. It never raises: unparseable numbers
fall back to the descriptor's floor, out-of-range numbers are clamped, and
unrecognised enum values fall back to the default.

The function is idempotent: ``normalize(d, normalize(d, x)) == normalize(d, x)``.
"""

import math
from typing import Any

from verticals.combo_builder.schema import ParamKind, ParameterDescriptor

_TRUE_STRINGS = frozenset({"true", "on", "1", "yes"})
_FALSE_STRINGS = frozenset({"false", "off", "0", "no", ""})


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------

def parse_number(raw: Any) -> float | None:
    """Parse ``raw`` as a finite number, or return None."""
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    else:
        return None
    return value if math.isfinite(value) else None


def clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


def coerce_bool(raw: Any) -> bool:
    if isinstance(raw, str):
        text = raw.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    return bool(raw)


# ---------------------------------------------------------------------------
# Per-kind normalizers
# ---------------------------------------------------------------------------

def _normalize_numeric(descriptor: ParameterDescriptor, raw: Any) -> int:
    floor = descriptor.minimum if descriptor.minimum is not None else 0
    number = parse_number(raw)
    if number is None:
        return floor
    ceiling = descriptor.maximum if descriptor.maximum is not None else number
    return int(round(clamp(number, floor, ceiling)))


def _normalize_enum(descriptor: ParameterDescriptor, raw: Any) -> str:
    if isinstance(raw, float) and raw.is_integer():
        raw = int(raw)
    candidate = raw if isinstance(raw, str) else str(raw)
    if candidate in descriptor.choices:
        return candidate
    return descriptor.default


def _normalize_text(descriptor: ParameterDescriptor, raw: Any) -> str:
    if raw is None:
        return descriptor.default
    return raw if isinstance(raw, str) else str(raw)


def _normalize_reference(raw: Any) -> int | None:
    number = parse_number(raw)
    if number is None or number < 1 or not number.is_integer():
        return None
    return int(number)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def normalize(descriptor: ParameterDescriptor, raw: Any) -> Any:
    """Normalize a raw editor value against its descriptor.

    Args:
        descriptor: Schema entry of the key being written.
        raw: Value as received from the editor (string, number, bool...).

    Returns:
        A value valid under the descriptor's bounds.
    """
    kind = descriptor.kind
    if kind.is_numeric:
        return _normalize_numeric(descriptor, raw)
    if kind.is_text:
        return _normalize_text(descriptor, raw)
    if kind == ParamKind.ENUM:
        return _normalize_enum(descriptor, raw)
    if kind == ParamKind.BOOLEAN:
        return coerce_bool(raw)
    if kind == ParamKind.DISCOUNT_REF:
        return _normalize_reference(raw)
    return descriptor.default
