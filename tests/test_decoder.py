import io
import struct
import wave
from datetime import timedelta
from itertools import islice

import pytest

from audiomix.decoder import Decoder, LoopedDecoder
from audiomix.decoder_info import DecoderError, UnrecognizedFormat


def _wav_bytes(samples, channels=1, rate=4):
    out = io.BytesIO()
    with wave.open(out, "wb") as writer:
        writer.setnchannels(channels)
        writer.setsampwidth(2)
        writer.setframerate(rate)
        writer.writeframes(struct.pack("<%dh" % len(samples), *samples))
    out.seek(0)
    return out


SAMPLES = [1, 2, 3, -4, 5, -6, 7, -8]


def test_decodes_samples():
    decoder = Decoder(_wav_bytes(SAMPLES))
    assert list(decoder) == SAMPLES


def test_format_properties():
    decoder = Decoder(_wav_bytes(SAMPLES, channels=2, rate=4))
    assert decoder.channels() == 2
    assert decoder.sample_rate() == 4
    assert decoder.current_frame_len() is None


def test_total_duration():
    decoder = Decoder(_wav_bytes(SAMPLES, channels=1, rate=4))
    assert decoder.total_duration() == timedelta(seconds=2)


def test_size_hint_counts_down():
    decoder = Decoder(_wav_bytes(SAMPLES))
    assert decoder.size_hint() == (len(SAMPLES), len(SAMPLES))
    next(decoder)
    next(decoder)
    assert decoder.size_hint() == (len(SAMPLES) - 2, len(SAMPLES) - 2)


def test_unrecognized_format():
    with pytest.raises(UnrecognizedFormat):
        Decoder(io.BytesIO(b"definitely not audio data"))


def test_unrecognized_is_decoder_error():
    with pytest.raises(DecoderError):
        Decoder.new_wav(io.BytesIO(b""))


def test_new_wav_decodes():
    decoder = Decoder.new_wav(_wav_bytes(SAMPLES))
    assert list(decoder) == SAMPLES


def test_info_tracks_elapsed_samples():
    decoder = Decoder(_wav_bytes(SAMPLES, rate=4))
    info = decoder.get_info()
    assert info.elapsed_samples() == 0
    list(islice(decoder, 3))
    assert info.elapsed_samples() == 3
    assert info.channels() == 1
    assert info.sample_rate() == 4


def test_info_elapsed_duration_after_full_read():
    decoder = Decoder(_wav_bytes(SAMPLES, rate=4))
    list(decoder)
    assert decoder.get_info().elapsed_duration() == decoder.total_duration()


def test_seek_moves_playback_and_info():
    decoder = Decoder(_wav_bytes(SAMPLES, rate=4))
    decoder.try_seek(timedelta(seconds=1))
    assert decoder.get_info().elapsed_samples() == 4
    assert list(decoder) == SAMPLES[4:]


def test_seek_info_uses_whole_seconds():
    decoder = Decoder(_wav_bytes(SAMPLES, rate=4))
    decoder.try_seek(timedelta(seconds=1, milliseconds=500))
    assert decoder.get_info().elapsed_samples() == 4
    assert list(decoder) == SAMPLES[6:]


def test_seek_to_start_after_reading():
    decoder = Decoder(_wav_bytes(SAMPLES))
    list(decoder)
    decoder.try_seek(timedelta(0))
    assert decoder.get_info().elapsed_samples() == 0
    assert list(decoder) == SAMPLES


def test_looped_repeats():
    looped = Decoder.new_looped(_wav_bytes(SAMPLES[:3]))
    assert list(islice(looped, 9)) == SAMPLES[:3] * 3


def test_looped_total_duration_unknown():
    looped = Decoder.new_looped(_wav_bytes(SAMPLES))
    assert looped.total_duration() is None
    assert looped.size_hint() == (len(SAMPLES), None)


def test_looped_from_decoder_keeps_format():
    looped = LoopedDecoder(Decoder(_wav_bytes(SAMPLES, channels=2, rate=4)))
    assert looped.channels() == 2
    assert looped.sample_rate() == 4


def test_looped_seek():
    looped = Decoder.new_looped(_wav_bytes(SAMPLES, rate=4))
    looped.try_seek(timedelta(seconds=1))
    assert list(islice(looped, 6)) == SAMPLES[4:] + SAMPLES[:2]


def test_looped_stops_when_stream_unreadable():
    data = _wav_bytes(SAMPLES[:2])
    looped = Decoder.new_looped(data)
    assert list(islice(looped, 2)) == SAMPLES[:2]
    data.seek(0)
    data.truncate(0)
    with pytest.raises(StopIteration):
        next(looped)
    assert looped.channels() == 0
    assert looped.sample_rate() == 1