"""Conversion of an interleaved sample stream between sample rates."""

from __future__ import annotations

import math
from itertools import islice
from typing import Iterable, Optional, Tuple

from audiomix.sample import SampleFormat, _size_hint_of


class SampleRateConverter:
    """Iterator resampling ``source`` from one rate to another by linear interpolation."""

    def __init__(
        self,
        source: Iterable,
        from_rate: int,
        to_rate: int,
        channels: int,
        sample_format: SampleFormat = SampleFormat.F32,
    ) -> None:
        if from_rate < 1:
            raise ValueError("source sample rate must be at least 1")
        if to_rate < 1:
            raise ValueError("target sample rate must be at least 1")
        if channels < 1:
            raise ValueError("channel count must be at least 1")

        self._input = iter(source)
        self._format = sample_format
        self._channels = channels

        divisor = math.gcd(from_rate, to_rate)
        if from_rate == to_rate:
            self._current_frame: list = []
            self._next_frame: list = []
        else:
            self._current_frame = list(islice(self._input, channels))
            self._next_frame = list(islice(self._input, channels))

        self._from = from_rate // divisor
        self._to = to_rate // divisor
        self._current_frame_pos_in_chunk = 0
        self._next_output_frame_pos_in_chunk = 0
        self._output_buffer: list = []

    def _next_input_frame(self) -> None:
        self._current_frame_pos_in_chunk += 1
        self._current_frame = self._next_frame
        self._next_frame = list(islice(self._input, self._channels))

    def __iter__(self) -> "SampleRateConverter":
        return self

    def __next__(self):
        if self._from == self._to:
            return next(self._input)

        if self._output_buffer:
            return self._output_buffer.pop(0)

        if self._next_output_frame_pos_in_chunk == self._to:
            self._next_output_frame_pos_in_chunk = 0
            self._next_input_frame()
            while self._current_frame_pos_in_chunk != self._from:
                self._next_input_frame()
            self._current_frame_pos_in_chunk = 0
        else:
            left = (self._from * self._next_output_frame_pos_in_chunk // self._to) % self._from
            while self._current_frame_pos_in_chunk != left:
                self._next_input_frame()

        numerator = (self._from * self._next_output_frame_pos_in_chunk) % self._to
        interpolated = [
            self._format.lerp(current, following, numerator, self._to)
            for current, following in zip(self._current_frame, self._next_frame)
        ]
        self._next_output_frame_pos_in_chunk += 1

        if interpolated:
            self._output_buffer.extend(interpolated[1:])
            return interpolated[0]

        if self._current_frame:
            first = self._current_frame.pop(0)
            self._output_buffer = self._current_frame
            self._current_frame = []
            return first
        raise StopIteration

    def _estimate(self, samples: int) -> int:
        after_chunk = samples
        if self._current_frame_pos_in_chunk == self._from - 1:
            after_chunk += len(self._next_frame)
        unread = max(0, self._from - (self._current_frame_pos_in_chunk + 2)) * self._channels
        after_chunk = max(0, after_chunk - unread)
        after_chunk = after_chunk * self._to // self._from
        current_chunk = (self._to - self._next_output_frame_pos_in_chunk) * self._channels
        return current_chunk + after_chunk + len(self._output_buffer)

    def size_hint(self) -> Tuple[int, Optional[int]]:
        """Bounds on the number of samples left."""
        low, high = _size_hint_of(self._input)
        if self._from == self._to:
            return low, high
        return self._estimate(low), None if high is None else self._estimate(high)

    def __len__(self) -> int:
        low, high = self.size_hint()
        if high != low:
            raise TypeError("length of the resampled stream is not known exactly")
        return low