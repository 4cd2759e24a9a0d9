"""The interface shared by every stream of audio samples."""

from __future__ import annotations

import abc
from datetime import timedelta
from typing import Optional, Tuple


class SeekError(Exception):
    """Seeking in a source failed."""


class SeekNotSupported(SeekError):
    """The source cannot seek."""

    def __init__(self, underlying_source: str) -> None:
        super().__init__(f"seeking is not supported by {underlying_source}")
        self.underlying_source = underlying_source


class Source(abc.ABC):
    """An iterator of interleaved samples with a known channel count and rate."""

    def __iter__(self) -> "Source":
        return self

    @abc.abstractmethod
    def __next__(self):
        """Return the next sample, or raise StopIteration."""

    @abc.abstractmethod
    def current_frame_len(self) -> Optional[int]:
        """Samples left before channels or rate may change, or None if unbounded."""

    @abc.abstractmethod
    def channels(self) -> int:
        """Number of interleaved channels."""

    @abc.abstractmethod
    def sample_rate(self) -> int:
        """Frames per second."""

    @abc.abstractmethod
    def total_duration(self) -> Optional[timedelta]:
        """Total length of the sound, or None if not known."""

    def try_seek(self, position: timedelta) -> None:
        """Move playback to ``position``; raises SeekError when that fails."""
        raise SeekNotSupported(type(self).__name__)

    def size_hint(self) -> Tuple[int, Optional[int]]:
        """Bounds on the number of samples left."""
        return 0, None