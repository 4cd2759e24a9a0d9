import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from audiomix.sample import DataConverter, SampleFormat

i16s = st.integers(min_value=-32768, max_value=32767)
u16s = st.integers(min_value=0, max_value=65535)

FORMAT_NAMES = [member.name for member in SampleFormat]


def test_zero_values():
    assert SampleFormat.I16.zero_value() == 0
    assert SampleFormat.U16.zero_value() == 32768
    assert SampleFormat.F32.zero_value() == 0.0


@pytest.mark.parametrize("fmt_name", FORMAT_NAMES)
@pytest.mark.parametrize("target_name", FORMAT_NAMES)
def test_zero_converts_to_zero(fmt_name, target_name):
    source_format = SampleFormat[fmt_name]
    target_format = SampleFormat[target_name]
    converted = SampleFormat[fmt_name].convert(source_format.zero_value(), target_format)
    assert converted == SampleFormat[target_name].zero_value()


@given(i16s, i16s, st.integers(min_value=1, max_value=1000))
def test_lerp_endpoints_i16(first, second, denominator):
    assert SampleFormat.I16.lerp(first, second, 0, denominator) == first
    assert SampleFormat.I16.lerp(first, second, denominator, denominator) == second


@given(u16s, u16s, st.integers(min_value=1, max_value=1000))
def test_lerp_endpoints_u16(first, second, denominator):
    assert SampleFormat.U16.lerp(first, second, 0, denominator) == first
    assert SampleFormat.U16.lerp(first, second, denominator, denominator) == second


def test_lerp_midpoint():
    assert SampleFormat.I16.lerp(0, 10, 1, 2) == 5
    assert SampleFormat.F32.lerp(0.0, 1.0, 1, 2) == 0.5


def test_lerp_truncates_toward_zero():
    # (-3) * 1 / 2 rounds toward zero, leaving -1 added to the first sample
    assert SampleFormat.I16.lerp(0, -3, 1, 2) == -1


@given(i16s, i16s)
def test_saturating_add_i16_stays_in_range(first, second):
    result = SampleFormat.I16.saturating_add(first, second)
    assert -32768 <= result <= 32767
    if -32768 <= first + second <= 32767:
        assert result == first + second


def test_saturating_add_clamps():
    assert SampleFormat.I16.saturating_add(32767, 1) == 32767
    assert SampleFormat.I16.saturating_add(-32768, -1) == -32768
    assert SampleFormat.U16.saturating_add(65535, 1) == 65535


@given(i16s)
def test_amplify_identity_and_silence(value):
    assert SampleFormat.I16.amplify(value, 1.0) == value
    assert SampleFormat.I16.amplify(value, 0.0) == 0


def test_amplify_float():
    assert SampleFormat.F32.amplify(0.5, 0.5) == 0.25


def test_amplify_saturates():
    assert SampleFormat.I16.amplify(32767, 2.0) == 32767
    assert SampleFormat.I16.amplify(0, math.nan) == 0


@given(i16s)
def test_i16_u16_round_trip(value):
    as_u16 = SampleFormat.I16.convert(value, SampleFormat.U16)
    assert 0 <= as_u16 <= 65535
    assert SampleFormat.U16.convert(as_u16, SampleFormat.I16) == value


@given(i16s)
def test_i16_f32_round_trip(value):
    as_f32 = SampleFormat.I16.convert(value, SampleFormat.F32)
    assert -1.0 <= as_f32 < 1.0
    assert SampleFormat.F32.convert(as_f32, SampleFormat.I16) == value


def test_f32_to_i16_saturates():
    assert SampleFormat.F32.convert(1.0, SampleFormat.I16) == 32767
    assert SampleFormat.F32.convert(-1.0, SampleFormat.I16) == -32768
    assert SampleFormat.F32.convert(4.0, SampleFormat.I16) == 32767


def test_data_converter_converts_each_sample():
    data = [10, -10, 20, -20]
    converted = list(DataConverter(data, SampleFormat.I16, SampleFormat.F32))
    assert len(converted) == len(data)
    back = list(DataConverter(converted, SampleFormat.F32, SampleFormat.I16))
    assert back == data


def test_data_converter_size_hint():
    converter = DataConverter([1, 2, 3], SampleFormat.I16, SampleFormat.U16)
    assert converter.size_hint() == (3, 3)
    next(converter)
    assert converter.size_hint() == (2, 2)


def test_data_converter_unknown_size():
    converter = DataConverter((x for x in [1, 2]), SampleFormat.I16, SampleFormat.I16)
    assert converter.size_hint() == (0, None)
    assert list(converter) == [1, 2]