"""Decoder for RIFF/WAVE data."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from datetime import timedelta
from typing import BinaryIO, Optional, Tuple

from audiomix.decoder_info import UnrecognizedFormat
from audiomix.sample import SampleFormat, _float_to_int, _to_f32
from audiomix.source import SeekError, Source

_FORMAT_PCM = 0x0001
_FORMAT_IEEE_FLOAT = 0x0003
_FORMAT_EXTENSIBLE = 0xFFFE

_I16_MAX = 32767
_U32_MAX = (1 << 32) - 1


@dataclass(frozen=True)
class _WavSpec:
    is_float: bool
    channels: int
    sample_rate: int
    bits_per_sample: int
    data_start: int
    num_samples: int

    @property
    def bytes_per_sample(self) -> int:
        return (self.bits_per_sample + 7) // 8


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    chunk = stream.read(size)
    if len(chunk) != size:
        raise UnrecognizedFormat()
    return chunk


def _parse_fmt(body: bytes) -> Tuple[bool, int, int, int]:
    if len(body) < 16:
        raise UnrecognizedFormat()
    tag, channels, sample_rate, _byte_rate, block_align, bits = struct.unpack_from(
        "<HHIIHH", body
    )
    if tag == _FORMAT_EXTENSIBLE:
        if len(body) < 40:
            raise UnrecognizedFormat()
        (tag,) = struct.unpack_from("<H", body, 24)
    if tag not in (_FORMAT_PCM, _FORMAT_IEEE_FLOAT):
        raise UnrecognizedFormat()
    if channels == 0 or sample_rate == 0 or bits == 0:
        raise UnrecognizedFormat()
    is_float = tag == _FORMAT_IEEE_FLOAT
    if is_float and bits != 32:
        raise UnrecognizedFormat()
    if bits > 32:
        raise UnrecognizedFormat()
    if block_align != channels * ((bits + 7) // 8):
        raise UnrecognizedFormat()
    return is_float, channels, sample_rate, bits


def _read_header(stream: BinaryIO) -> _WavSpec:
    """Parse the header and leave ``stream`` at the start of the sample data."""
    riff = _read_exact(stream, 12)
    if riff[:4] != b"RIFF" or riff[8:12] != b"WAVE":
        raise UnrecognizedFormat()

    fmt: Optional[Tuple[bool, int, int, int]] = None
    while True:
        chunk_id, size = struct.unpack("<4sI", _read_exact(stream, 8))
        if chunk_id == b"fmt ":
            fmt = _parse_fmt(_read_exact(stream, size))
            if size & 1:
                stream.read(1)
        elif chunk_id == b"data":
            if fmt is None:
                raise UnrecognizedFormat()
            is_float, channels, sample_rate, bits = fmt
            bytes_per_sample = (bits + 7) // 8
            return _WavSpec(
                is_float=is_float,
                channels=channels,
                sample_rate=sample_rate,
                bits_per_sample=bits,
                data_start=stream.tell(),
                num_samples=size // bytes_per_sample,
            )
        else:
            stream.seek(size + (size & 1), 1)


def is_wave(data: BinaryIO) -> bool:
    """Whether ``data`` holds WAV data; the stream position is left unchanged."""
    position = data.tell()
    try:
        _read_header(data)
    except (UnrecognizedFormat, OSError, struct.error):
        return False
    finally:
        data.seek(position)
    return True


def _f32_to_i16(value: float) -> int:
    clipped = min(max(_to_f32(value), -1.0), 1.0)
    return _float_to_int(_to_f32(clipped * float(_I16_MAX)), -32768, _I16_MAX)


class WavDecoder(Source):
    """Source of 16-bit samples decoded from WAV data."""

    def __init__(self, data: BinaryIO) -> None:
        if not is_wave(data):
            raise UnrecognizedFormat()
        self._data = data
        self._spec = _read_header(data)
        self._position = 0
        self.sample_format = SampleFormat.I16
        spec = self._spec
        micros = 1_000_000 * spec.num_samples // (spec.sample_rate * spec.channels)
        self._total_duration = timedelta(microseconds=micros)

    def into_inner(self) -> BinaryIO:
        """Return the underlying stream."""
        return self._data

    def _convert(self, raw: bytes) -> int:
        spec = self._spec
        if spec.is_float:
            return _f32_to_i16(struct.unpack("<f", raw)[0])
        bits = spec.bits_per_sample
        if bits == 8:
            return (raw[0] - 128) * 256
        value = int.from_bytes(raw, "little", signed=True)
        if bits == 16:
            return value
        if bits == 24:
            return value >> 8
        if bits == 32:
            return value >> 16
        raise ValueError(f"unsupported wav spec: int, {bits} bits per sample")

    def __next__(self) -> int:
        spec = self._spec
        if self._position >= spec.num_samples:
            raise StopIteration
        if not spec.is_float and spec.bits_per_sample not in (8, 16, 24, 32):
            raise ValueError(
                f"unsupported wav spec: int, {spec.bits_per_sample} bits per sample"
            )
        size = spec.bytes_per_sample
        raw = self._data.read(size)
        self._position += 1
        if len(raw) != size:
            return 0
        return self._convert(raw)

    def current_frame_len(self) -> Optional[int]:
        return None

    def channels(self) -> int:
        return self._spec.channels

    def sample_rate(self) -> int:
        return self._spec.sample_rate

    def total_duration(self) -> Optional[timedelta]:
        return self._total_duration

    def try_seek(self, position: timedelta) -> None:
        spec = self._spec
        frames = _to_f32(_to_f32(position.total_seconds()) * float(spec.sample_rate))
        frame = _float_to_int(frames, 0, _U32_MAX)
        sample = min(frame * spec.channels, spec.num_samples)
        try:
            self._data.seek(spec.data_start + sample * spec.bytes_per_sample)
        except OSError as error:
            raise SeekError(str(error)) from error
        self._position = sample

    def size_hint(self) -> Tuple[int, Optional[int]]:
        remaining = max(0, self._spec.num_samples - self._position)
        return remaining, remaining

    def __len__(self) -> int:
        return self.size_hint()[0]