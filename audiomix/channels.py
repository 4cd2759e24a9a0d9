"""Conversion of an interleaved sample stream between channel counts."""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from audiomix.sample import _size_hint_of

_MISSING = object()


class ChannelCountConverter:
    """Iterator turning frames of ``from_channels`` samples into frames of ``to_channels``.

    Extra input channels are dropped; missing output channels repeat the last
    input channel of the frame.
    """

    def __init__(self, source: Iterable, from_channels: int, to_channels: int) -> None:
        if from_channels < 1:
            raise ValueError("source channel count must be at least 1")
        if to_channels < 1:
            raise ValueError("target channel count must be at least 1")
        self._input = iter(source)
        self._from = from_channels
        self._to = to_channels
        self._sample_repeat = _MISSING
        self._next_output_sample_pos = 0

    def __iter__(self) -> "ChannelCountConverter":
        return self

    def __next__(self):
        if self._next_output_sample_pos == self._from - 1:
            value = next(self._input, _MISSING)
            self._sample_repeat = value
        elif self._next_output_sample_pos < self._from:
            value = next(self._input, _MISSING)
        else:
            value = self._sample_repeat

        self._next_output_sample_pos += 1
        if self._next_output_sample_pos == self._to:
            self._next_output_sample_pos = 0
            # Discard the input channels that have no place in the output frame.
            for _ in range(self._to, self._from):
                next(self._input, None)

        if value is _MISSING:
            raise StopIteration
        return value

    def size_hint(self) -> Tuple[int, Optional[int]]:
        """Bounds on the number of samples left."""
        low, high = _size_hint_of(self._input)
        pos = self._next_output_sample_pos
        low = (low // self._from) * self._to + pos
        if high is not None:
            high = (high // self._from) * self._to + pos
        return low, high

    def __len__(self) -> int:
        low, high = self.size_hint()
        if high != low:
            raise TypeError("length of the converted stream is not known exactly")
        return low