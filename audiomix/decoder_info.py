"""Decoder errors, container hints and playback progress information."""

from __future__ import annotations

import enum
import threading
from datetime import timedelta
from typing import Optional

from audiomix.source import Source


class DecoderError(Exception):
    """Creating a decoder failed."""


class UnrecognizedFormat(DecoderError):
    """The format of the data was not recognised."""

    def __init__(self, message: str = "Unrecognized format") -> None:
        super().__init__(message)


class Mp4Type(enum.Enum):
    """Extensions of the MP4 container family."""

    MP4 = "mp4"
    M4A = "m4a"
    M4P = "m4p"
    M4B = "m4b"
    M4R = "m4r"
    M4V = "m4v"
    MOV = "mov"

    @classmethod
    def parse(cls, text: str) -> "Mp4Type":
        """Parse an extension, ignoring case."""
        try:
            return cls(text.lower())
        except ValueError:
            raise ValueError(f"{text} is not a valid mp4 extension") from None

    def __str__(self) -> str:
        return self.value


class DecoderInfo:
    """Format and progress of a decoder, shared with whoever plays it."""

    def __init__(self, channels: int, sample_rate: int) -> None:
        self._channels = channels
        self._sample_rate = sample_rate
        self._samples_elapsed = 0
        self._lock = threading.Lock()

    @classmethod
    def _from_source(cls, source: Source) -> "DecoderInfo":
        return cls(source.channels(), source.sample_rate())

    def _advance(self, count: int = 1) -> None:
        with self._lock:
            self._samples_elapsed += count

    def _set_elapsed(self, samples: int) -> None:
        with self._lock:
            self._samples_elapsed = samples

    def channels(self) -> int:
        return self._channels

    def sample_rate(self) -> int:
        return self._sample_rate

    def elapsed_samples(self) -> int:
        """Samples produced so far, across all channels."""
        with self._lock:
            return self._samples_elapsed

    def elapsed_duration(self) -> Optional[timedelta]:
        """Playing time of the samples produced so far, or None if it cannot be computed."""
        if self._sample_rate == 0 or self._channels == 0:
            return None
        seconds = self.elapsed_samples() / self._sample_rate / self._channels
        try:
            return timedelta(seconds=seconds)
        except OverflowError:
            return None