"""Mixer that plays several sounds at the same time."""

from __future__ import annotations

import threading
from datetime import timedelta
from typing import List, Optional, Tuple

from audiomix.channels import ChannelCountConverter
from audiomix.sample import DataConverter, SampleFormat, _size_hint_of
from audiomix.sample_rate import SampleRateConverter
from audiomix.source import SeekNotSupported, Source


class _Take:
    """Iterator yielding at most ``limit`` items of a source; no limit when None."""

    def __init__(self, source: Source, limit: Optional[int]) -> None:
        self.source = source
        self._limit = limit

    def __iter__(self) -> "_Take":
        return self

    def __next__(self):
        if self._limit is None:
            return next(self.source)
        if self._limit <= 0:
            raise StopIteration
        value = next(self.source)
        self._limit -= 1
        return value

    def size_hint(self) -> Tuple[int, Optional[int]]:
        low, high = _size_hint_of(self.source)
        if self._limit is None:
            return low, high
        return min(low, self._limit), self._limit if high is None else min(high, self._limit)


class _UniformSource(Source):
    """Converts a source to a fixed channel count, sample rate and sample format.

    The conversion is rebuilt at every frame boundary of the wrapped source,
    so changes in its channel count or rate are followed.
    """

    def __init__(
        self,
        source: Source,
        channels: int,
        sample_rate: int,
        sample_format: SampleFormat,
    ) -> None:
        self._source = source
        self._channels = channels
        self._sample_rate = sample_rate
        self.sample_format = sample_format
        self._chain = self._bootstrap()

    def _bootstrap(self) -> DataConverter:
        source = self._source
        source_format = getattr(source, "sample_format", self.sample_format)
        from_channels = source.channels()
        taken = _Take(source, source.current_frame_len())
        resampled = SampleRateConverter(
            taken, source.sample_rate(), self._sample_rate, from_channels, source_format
        )
        rechanneled = ChannelCountConverter(resampled, from_channels, self._channels)
        return DataConverter(rechanneled, source_format, self.sample_format)

    def __next__(self):
        try:
            return next(self._chain)
        except StopIteration:
            self._chain = self._bootstrap()
            return next(self._chain)

    def current_frame_len(self) -> Optional[int]:
        return None

    def channels(self) -> int:
        return self._channels

    def sample_rate(self) -> int:
        return self._sample_rate

    def total_duration(self) -> Optional[timedelta]:
        return self._source.total_duration()

    def try_seek(self, position: timedelta) -> None:
        self._source.try_seek(position)

    def size_hint(self) -> Tuple[int, Optional[int]]:
        return self._chain.size_hint()


class DynamicMixerController:
    """The input side of a mixer: sounds added here are mixed into the output."""

    def __init__(self, channels: int, sample_rate: int, sample_format: SampleFormat) -> None:
        self.channels = channels
        self.sample_rate = sample_rate
        self.sample_format = sample_format
        self._lock = threading.Lock()
        self._pending: List[Source] = []
        self._has_pending = False

    def add(self, source: Source) -> None:
        """Add a new source to mix with the ones already playing."""
        uniform = _UniformSource(source, self.channels, self.sample_rate, self.sample_format)
        with self._lock:
            self._pending.append(uniform)
            self._has_pending = True


class DynamicMixer(Source):
    """The output side of a mixer: the sum of all sounds playing."""

    def __init__(self, controller: DynamicMixerController) -> None:
        self._input = controller
        self.sample_format = controller.sample_format
        self._current: List[Source] = []
        self._sample_count = 0

    def _start_pending_sources(self) -> None:
        # A source only starts at a sample index aligned to its frame, so that
        # its channels line up with the interleaved output.
        controller = self._input
        with controller._lock:
            still_pending = []
            for source in controller._pending:
                if self._sample_count % source.channels() == 0:
                    self._current.append(source)
                else:
                    still_pending.append(source)
            controller._pending = still_pending
            controller._has_pending = bool(still_pending)

    def _sum_current_sources(self):
        fmt = self.sample_format
        total = fmt.zero_value()
        still_current = []
        for source in self._current:
            try:
                value = next(source)
            except StopIteration:
                continue
            total = fmt.saturating_add(total, value)
            still_current.append(source)
        self._current = still_current
        return total

    def __next__(self):
        if self._input._has_pending:
            self._start_pending_sources()
        self._sample_count += 1
        total = self._sum_current_sources()
        if not self._current:
            raise StopIteration
        return total

    def current_frame_len(self) -> Optional[int]:
        return None

    def channels(self) -> int:
        return self._input.channels

    def sample_rate(self) -> int:
        return self._input.sample_rate

    def total_duration(self) -> Optional[timedelta]:
        return None

    def try_seek(self, position: timedelta) -> None:
        raise SeekNotSupported(type(self).__name__)

    def size_hint(self) -> Tuple[int, Optional[int]]:
        return 0, None


def mixer(
    channels: int,
    sample_rate: int,
    sample_format: SampleFormat = SampleFormat.F32,
) -> Tuple[DynamicMixerController, DynamicMixer]:
    """Build a mixer producing ``channels`` channels at ``sample_rate``.

    Returns the controller, used to add sounds, and the mixer output.
    """
    controller = DynamicMixerController(channels, sample_rate, sample_format)
    return controller, DynamicMixer(controller)