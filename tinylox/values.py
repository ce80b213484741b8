"""Runtime values for tinylox.

Values produced during evaluation map onto Python objects: numbers are
`float`, strings are `str`, booleans are `bool` and `nil` is the `Nil`
singleton. This module holds the helpers shared by the interpreter for
naming, displaying and testing those values.
"""

from __future__ import annotations

import decimal
import math
from typing import Any


class NilType:
    """Marker type for the tinylox `nil` value."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'nil'


Nil = NilType()


def is_number(value: Any) -> bool:
    # bool is not a float subclass, so booleans never count as numbers
    return isinstance(value, float)


def type_name(value: Any) -> str:
    if isinstance(value, bool):
        return 'Bool'
    if isinstance(value, float):
        return 'Number'
    if isinstance(value, str):
        return 'String'
    if value is Nil:
        return 'Nil'
    return type(value).__name__


def format_number(value: float) -> str:
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'inf' if value > 0 else '-inf'
    # shortest round-trip digits, written out without an exponent
    text = format(decimal.Decimal(repr(value)), 'f')
    if text.endswith('.0'):
        text = text[:-2]
    return text


def to_string(value: Any) -> str:
    """Return the display form used by `print`."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return format_number(value)
    if value is Nil:
        return 'nil'
    return str(value)


def is_truthy(value: Any) -> bool:
    """Zero and the empty string are false, booleans are themselves,
    everything else (nil included) is true."""
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return value != 0.0
    if isinstance(value, str):
        return value != ''
    return True
