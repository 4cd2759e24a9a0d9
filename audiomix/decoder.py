"""Decoding of audio data into sources of 16-bit samples."""

from __future__ import annotations

from datetime import timedelta
from typing import BinaryIO, Optional, Tuple

from audiomix.decoder_info import DecoderInfo, UnrecognizedFormat
from audiomix.sample import SampleFormat
from audiomix.source import SeekNotSupported, Source
from audiomix.wav import WavDecoder


class Decoder(Source):
    """Source of samples decoded from audio data whose format is detected."""

    def __init__(self, data: BinaryIO) -> None:
        try:
            inner = WavDecoder(data)
        except UnrecognizedFormat:
            raise UnrecognizedFormat() from None
        self._inner: Optional[WavDecoder] = inner
        self._info = DecoderInfo._from_source(inner)
        self.sample_format = SampleFormat.I16

    @classmethod
    def new_wav(cls, data: BinaryIO) -> "Decoder":
        """Build a decoder for WAV data."""
        return cls(data)

    @classmethod
    def new_looped(cls, data: BinaryIO) -> "LoopedDecoder":
        """Build a decoder that starts over when the data ends."""
        return LoopedDecoder(cls(data))

    def get_info(self) -> DecoderInfo:
        """The shared format and progress information of this decoder."""
        return self._info

    def __next__(self) -> int:
        if self._inner is None:
            raise StopIteration
        sample = next(self._inner)
        self._info._advance()
        return sample

    def current_frame_len(self) -> Optional[int]:
        if self._inner is None:
            return 0
        return self._inner.current_frame_len()

    def channels(self) -> int:
        if self._inner is None:
            return 0
        return self._inner.channels()

    def sample_rate(self) -> int:
        if self._inner is None:
            return 1
        return self._inner.sample_rate()

    def total_duration(self) -> Optional[timedelta]:
        if self._inner is None:
            return timedelta(0)
        return self._inner.total_duration()

    def try_seek(self, position: timedelta) -> None:
        try:
            if self._inner is None:
                raise SeekNotSupported("Decoder")
            self._inner.try_seek(position)
        finally:
            whole_seconds = int(position.total_seconds())
            self._info._set_elapsed(
                whole_seconds * self._info.sample_rate() * self._info.channels()
            )

    def size_hint(self) -> Tuple[int, Optional[int]]:
        if self._inner is None:
            return 0, None
        return self._inner.size_hint()


class LoopedDecoder(Source):
    """A decoder that restarts from the beginning of its data when it runs out."""

    def __init__(self, decoder: Decoder) -> None:
        self._inner: Optional[WavDecoder] = decoder._inner
        self._info = decoder._info
        self.sample_format = SampleFormat.I16

    def get_info(self) -> DecoderInfo:
        """The shared format and progress information of this decoder."""
        return self._info

    def __next__(self) -> int:
        if self._inner is None:
            raise StopIteration
        try:
            sample = next(self._inner)
        except StopIteration:
            pass
        else:
            self._info._advance()
            return sample

        reader = self._inner.into_inner()
        self._inner = None
        try:
            reader.seek(0)
            restarted = WavDecoder(reader)
        except (OSError, UnrecognizedFormat):
            raise StopIteration from None
        self._inner = restarted
        return next(restarted)

    def current_frame_len(self) -> Optional[int]:
        if self._inner is None:
            return 0
        return self._inner.current_frame_len()

    def channels(self) -> int:
        if self._inner is None:
            return 0
        return self._inner.channels()

    def sample_rate(self) -> int:
        if self._inner is None:
            return 1
        return self._inner.sample_rate()

    def total_duration(self) -> Optional[timedelta]:
        return None

    def try_seek(self, position: timedelta) -> None:
        if self._inner is None:
            raise SeekNotSupported("LoopedDecoder")
        self._inner.try_seek(position)

    def size_hint(self) -> Tuple[int, Optional[int]]:
        if self._inner is None:
            return 0, None
        return self._inner.size_hint()[0], None