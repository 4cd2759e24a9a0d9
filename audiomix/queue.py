"""Queue that plays sounds one after the other."""

from __future__ import annotations

import threading
from collections import deque
from datetime import timedelta
from typing import Deque, Optional, Tuple

from audiomix.sample import SampleFormat, _size_hint_of
from audiomix.source import Source

THRESHOLD = 512


class _Silence(Source):
    """A fixed number of silent samples."""

    def __init__(
        self, channels: int, sample_rate: int, count: int, sample_format: SampleFormat
    ) -> None:
        self._channels = channels
        self._sample_rate = sample_rate
        self._remaining = count
        self.sample_format = sample_format

    def __next__(self):
        if self._remaining <= 0:
            raise StopIteration
        self._remaining -= 1
        return self.sample_format.zero_value()

    def current_frame_len(self) -> Optional[int]:
        return self._remaining

    def channels(self) -> int:
        return self._channels

    def sample_rate(self) -> int:
        return self._sample_rate

    def total_duration(self) -> Optional[timedelta]:
        frames = self._remaining / self._channels
        return timedelta(seconds=frames / self._sample_rate)

    def size_hint(self) -> Tuple[int, Optional[int]]:
        return self._remaining, self._remaining


class SourcesQueueInput:
    """The input side of a queue: sounds appended here play in order."""

    def __init__(self, keep_alive_if_empty: bool) -> None:
        self._lock = threading.Lock()
        self._next_sounds: Deque[Tuple[Source, Optional[threading.Event]]] = deque()
        self._keep_alive_if_empty = keep_alive_if_empty

    def append(self, source: Source) -> None:
        """Add a source to the end of the queue."""
        with self._lock:
            self._next_sounds.append((source, None))

    def append_with_signal(self, source: Source) -> threading.Event:
        """Add a source to the end of the queue.

        The returned event is set once the source has finished playing.
        """
        done = threading.Event()
        with self._lock:
            self._next_sounds.append((source, done))
        return done

    def set_keep_alive_if_empty(self, keep_alive_if_empty: bool) -> None:
        """Choose whether the queue plays silence rather than ending when empty."""
        self._keep_alive_if_empty = keep_alive_if_empty

    def clear(self) -> int:
        """Remove every queued sound; return how many were removed."""
        with self._lock:
            count = len(self._next_sounds)
            self._next_sounds.clear()
        return count

    def _is_empty(self) -> bool:
        with self._lock:
            return not self._next_sounds

    def _pop(self) -> Optional[Tuple[Source, Optional[threading.Event]]]:
        with self._lock:
            return self._next_sounds.popleft() if self._next_sounds else None


class SourcesQueueOutput(Source):
    """The output side of a queue: plays the queued sounds one after another."""

    def __init__(self, queue_input: SourcesQueueInput, sample_format: SampleFormat) -> None:
        self._input = queue_input
        self.sample_format = sample_format
        self._current: Source = _Silence(1, 48000, 0, sample_format)
        self._signal_after_end: Optional[threading.Event] = None

    def _go_next(self) -> bool:
        """Move to the next sound; False when playback should stop."""
        if self._signal_after_end is not None:
            self._signal_after_end.set()
            self._signal_after_end = None

        entry = self._input._pop()
        if entry is None:
            if not self._input._keep_alive_if_empty:
                return False
            # A short silence avoids spinning while waiting for new sounds.
            entry = (_Silence(1, 44100, THRESHOLD, self.sample_format), None)
        self._current, self._signal_after_end = entry
        return True

    def __next__(self):
        while True:
            try:
                return next(self._current)
            except StopIteration:
                pass
            if not self._go_next():
                raise StopIteration

    def current_frame_len(self) -> Optional[int]:
        # The boundary between two sounds must also be a frame boundary.
        length = self._current.current_frame_len()
        if length is not None:
            if length != 0:
                return length
            if self._input._keep_alive_if_empty and self._input._is_empty():
                return THRESHOLD

        lower, _ = _size_hint_of(self._current)
        if lower > 0:
            return lower
        return THRESHOLD

    def channels(self) -> int:
        return self._current.channels()

    def sample_rate(self) -> int:
        return self._current.sample_rate()

    def total_duration(self) -> Optional[timedelta]:
        return None

    def try_seek(self, position: timedelta) -> None:
        self._current.try_seek(position)

    def size_hint(self) -> Tuple[int, Optional[int]]:
        return _size_hint_of(self._current)[0], None


def queue(
    keep_alive_if_empty: bool,
    sample_format: SampleFormat = SampleFormat.F32,
) -> Tuple[SourcesQueueInput, SourcesQueueOutput]:
    """Build a queue; returns its input and its output.

    With ``keep_alive_if_empty`` the output plays silence while the queue is
    empty; otherwise it ends.
    """
    queue_input = SourcesQueueInput(keep_alive_if_empty)
    return queue_input, SourcesQueueOutput(queue_input, sample_format)