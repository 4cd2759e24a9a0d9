"""A source of samples held in memory."""

from __future__ import annotations

from datetime import timedelta
from typing import Iterable, Optional, Tuple

from audiomix.sample import SampleFormat
from audiomix.source import SeekNotSupported, Source

_U64_MAX = (1 << 64) - 1


class SamplesBuffer(Source):
    """A list of samples played as a source."""

    def __init__(
        self,
        channels: int,
        sample_rate: int,
        data: Iterable,
        sample_format: SampleFormat = SampleFormat.F32,
    ) -> None:
        if channels == 0:
            raise ValueError("channel count must not be zero")
        if sample_rate == 0:
            raise ValueError("sample rate must not be zero")

        samples = list(data)
        scaled = 1_000_000_000 * len(samples)
        if scaled > _U64_MAX:
            raise OverflowError("buffer is too long for its duration to be computed")
        duration_ns = scaled // sample_rate // channels

        self.sample_format = sample_format
        self._channels = channels
        self._sample_rate = sample_rate
        self._duration = timedelta(microseconds=duration_ns // 1000)
        self._data = iter(samples)
        self._remaining = len(samples)

    def __next__(self):
        value = next(self._data)
        self._remaining -= 1
        return value

    def current_frame_len(self) -> Optional[int]:
        return None

    def channels(self) -> int:
        return self._channels

    def sample_rate(self) -> int:
        return self._sample_rate

    def total_duration(self) -> Optional[timedelta]:
        return self._duration

    def try_seek(self, position: timedelta) -> None:
        raise SeekNotSupported(type(self).__name__)

    def size_hint(self) -> Tuple[int, Optional[int]]:
        return self._remaining, self._remaining