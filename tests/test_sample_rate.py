import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from audiomix.sample import SampleFormat
from audiomix.sample_rate import SampleRateConverter

U16 = SampleFormat.U16
rates = st.integers(min_value=1, max_value=200_000)
channel_counts = st.integers(min_value=1, max_value=8)
ks = st.integers(min_value=1, max_value=6)
u16_lists = st.lists(st.integers(min_value=0, max_value=65535), max_size=64)


def _frames(samples, channels):
    return [samples[i:i + channels] for i in range(0, len(samples) - channels + 1, channels)]


def _truncate(samples, channels):
    return samples[: channels * (len(samples) // channels)]


@given(rates, rates, channel_counts)
def test_empty(from_rate, to_rate, channels):
    output = list(SampleRateConverter([], from_rate, to_rate, channels, U16))
    assert output == []


@given(rates, channel_counts, u16_lists)
def test_identity(rate, channels, samples):
    output = list(SampleRateConverter(samples, rate, rate, channels, U16))
    assert output == samples


@settings(max_examples=200)
@given(rates, ks, u16_lists, channel_counts)
def test_divide_sample_rate(to_rate, k, samples, channels):
    samples = _truncate(samples, channels)
    output = list(SampleRateConverter(samples, to_rate * k, to_rate, channels, U16))
    expected = [s for frame in _frames(samples, channels)[::k] for s in frame]
    assert output == expected


@settings(max_examples=200)
@given(rates, ks, u16_lists, channel_counts)
def test_multiply_sample_rate(from_rate, k, samples, channels):
    samples = _truncate(samples, channels)
    output = list(SampleRateConverter(samples, from_rate, from_rate * k, channels, U16))
    picked = [s for frame in _frames(output, channels)[::k] for s in frame]
    assert picked == samples


def test_upsample():
    data = [2, 16, 4, 18, 6, 20, 8, 22]
    output = SampleRateConverter(data, 2000, 3000, 2, U16)
    assert len(output) == 12
    assert list(output) == [2, 16, 3, 17, 4, 18, 6, 20, 7, 21, 8, 22]


def test_passthrough_size_hint():
    converter = SampleRateConverter([1, 2, 3], 44100, 44100, 1, U16)
    assert converter.size_hint() == (3, 3)
    assert len(converter) == 3


def test_len_requires_known_size():
    converter = SampleRateConverter((x for x in [1, 2, 3, 4]), 1, 2, 1, U16)
    assert converter.size_hint()[1] is None
    with pytest.raises(TypeError):
        len(converter)


@pytest.mark.parametrize(
    "from_rate, to_rate, channels",
    [(0, 44100, 1), (44100, 0, 1), (44100, 48000, 0)],
)
def test_invalid_parameters(from_rate, to_rate, channels):
    with pytest.raises(ValueError):
        SampleRateConverter([1, 2], from_rate, to_rate, channels, U16)