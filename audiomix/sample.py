"""Sample formats and conversion between them."""

from __future__ import annotations

import enum
import math
import operator
import struct
from typing import Iterable, Iterator, Optional, Tuple

_I16_MIN, _I16_MAX = -32768, 32767
_U16_MIN, _U16_MAX = 0, 65535


def _to_f32(value: float) -> float:
    """Round a float to single precision."""
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _float_to_int(value: float, low: int, high: int) -> int:
    """Cast a float to an integer range, truncating and saturating."""
    if math.isnan(value):
        return 0
    if value <= low:
        return low
    if value >= high:
        return high
    return math.trunc(value)


def _wrap(value: int, bits: int, signed: bool) -> int:
    """Wrap an integer to a fixed width, as a two's complement cast does."""
    mask = (1 << bits) - 1
    value &= mask
    if signed and value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _trunc_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator >= 0) else -quotient


def _size_hint_of(iterator: Iterator) -> Tuple[int, Optional[int]]:
    """Bounds on the number of items an iterator has left."""
    hint = getattr(iterator, "size_hint", None)
    if callable(hint):
        return hint()
    try:
        length = len(iterator)  # type: ignore[arg-type]
    except TypeError:
        pass
    else:
        return length, length
    length = operator.length_hint(iterator, -1)
    if length < 0:
        return 0, None
    return length, length


class SampleFormat(enum.Enum):
    """The data type of a single sample."""

    I16 = "i16"
    U16 = "u16"
    F32 = "f32"

    def lerp(self, first, second, numerator: int, denominator: int):
        """Linear interpolation: ``first + (second - first) * numerator / denominator``."""
        if self is SampleFormat.F32:
            diff = _to_f32(second - first)
            scaled = _to_f32(diff * _to_f32(float(numerator)))
            return _to_f32(first + _to_f32(scaled / _to_f32(float(denominator))))
        value = first + _trunc_div((second - first) * numerator, denominator)
        return _wrap(value, 16, self is SampleFormat.I16)

    def amplify(self, value, factor: float):
        """Multiply a sample by ``factor``."""
        product = _to_f32(_to_f32(float(value)) * _to_f32(factor))
        if self is SampleFormat.F32:
            return product
        if self is SampleFormat.I16:
            return _float_to_int(product, _I16_MIN, _I16_MAX)
        return _float_to_int(product, _U16_MIN, _U16_MAX)

    def saturating_add(self, first, second):
        """Add two samples, clamping integer formats to their range."""
        if self is SampleFormat.F32:
            return _to_f32(first + second)
        if self is SampleFormat.I16:
            return min(max(first + second, _I16_MIN), _I16_MAX)
        return min(max(first + second, _U16_MIN), _U16_MAX)

    def zero_value(self):
        """The value that stands for silence."""
        if self is SampleFormat.F32:
            return 0.0
        if self is SampleFormat.I16:
            return 0
        return 32768

    def convert(self, value, target: "SampleFormat"):
        """Convert a sample of this format to ``target``."""
        if self is target:
            return value
        if self is SampleFormat.F32:
            as_i16 = _float_to_int(_to_f32(value * 32768.0), _I16_MIN, _I16_MAX)
            return SampleFormat.I16.convert(as_i16, target)
        if self is SampleFormat.U16:
            return SampleFormat.I16.convert(value - 32768, target)
        if target is SampleFormat.U16:
            return value + 32768
        return _to_f32(value / 32768.0)


class DataConverter:
    """Iterator converting each sample of ``source`` to another format."""

    def __init__(
        self,
        source: Iterable,
        source_format: SampleFormat,
        target_format: SampleFormat,
    ) -> None:
        self._input = iter(source)
        self.source_format = source_format
        self.target_format = target_format

    def __iter__(self) -> "DataConverter":
        return self

    def __next__(self):
        return self.source_format.convert(next(self._input), self.target_format)

    def size_hint(self) -> Tuple[int, Optional[int]]:
        """Bounds on the number of samples left."""
        return _size_hint_of(self._input)