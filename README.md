# audiomix

Pure-Python building blocks for working with streams of PCM audio samples.
It has no dependencies outside the standard library.

Every stream is a `Source` (in `audiomix.source`): an iterator of
interleaved samples that also reports `channels()`, `sample_rate()`,
`current_frame_len()`, `total_duration()` (a `datetime.timedelta` or
`None`) and `size_hint()`. `try_seek(position)` moves playback to a
`timedelta`; sources that cannot seek raise `SeekNotSupported`, a subclass
of `SeekError`.

## Modules

- `audiomix.sample`: `SampleFormat` with the members `I16`, `U16` and
  `F32`. Each format offers `lerp`, `amplify`, `saturating_add`,
  `zero_value` (0, 32768 and 0.0 respectively) and `convert(value, target)`.
  Floats are kept at single precision. `DataConverter` converts every sample
  of an iterable from one format to another.
- `audiomix.channels`: `ChannelCountConverter(source, from_channels,
  to_channels)` changes the channel count of an interleaved stream. Extra
  input channels are dropped; missing output channels repeat the last input
  channel of the frame.
- `audiomix.sample_rate`: `SampleRateConverter(source, from_rate, to_rate,
  channels, sample_format)` resamples by linear interpolation. When both
  rates are equal the samples pass through unchanged.
- `audiomix.buffer`: `SamplesBuffer(channels, sample_rate, data,
  sample_format)` plays a list of samples. A zero channel count or sample
  rate raises `ValueError`.
- `audiomix.dynamic_mixer`: `mixer(channels, sample_rate, sample_format)`
  returns a `DynamicMixerController` and a `DynamicMixer`. Sources added
  with `controller.add(source)` are converted to the mixer's channel count,
  sample rate and sample format, then summed (saturating for integer
  formats). A new source starts on a frame boundary of the output. The
  output ends once no source is left playing.
- `audiomix.queue`: `queue(keep_alive_if_empty, sample_format)` returns a
  `SourcesQueueInput` and a `SourcesQueueOutput`. Sources are played one
  after another. `append_with_signal` returns a `threading.Event` that is
  set when that source has finished. With `keep_alive_if_empty` the output
  plays silence in blocks of 512 samples while the queue is empty;
  otherwise it ends. `set_keep_alive_if_empty` changes this later, and
  `clear()` removes all queued sources and returns how many there were.
- `audiomix.wav`: `WavDecoder` reads RIFF/WAVE data from a seekable binary
  stream and yields signed 16-bit samples. It handles integer PCM of 8, 16,
  24 and 32 bits and 32-bit float, including the extensible format header.
  `is_wave(data)` tests a stream without moving its position.
- `audiomix.decoder`: `Decoder(data)` detects the format of the data and
  decodes it; `Decoder.new_wav` is the same for WAV alone.
  `Decoder.new_looped` returns a `LoopedDecoder`, which starts over from the
  beginning of the data when it runs out. `get_info()` returns a
  `DecoderInfo`.
- `audiomix.decoder_info`: `DecoderInfo` reports `channels()`,
  `sample_rate()`, `elapsed_samples()` and `elapsed_duration()`. After a
  seek the elapsed count is set from the whole seconds of the position.
  Also holds `DecoderError`, `UnrecognizedFormat` and `Mp4Type`, whose
  `parse` reads a container extension without regard to case.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from audiomix.buffer import SamplesBuffer
from audiomix.dynamic_mixer import mixer
from audiomix.sample import SampleFormat

controller, output = mixer(1, 48000, SampleFormat.I16)
controller.add(SamplesBuffer(1, 48000, [10, -10, 10, -10], SampleFormat.I16))
controller.add(SamplesBuffer(1, 48000, [5, 5, 5, 5], SampleFormat.I16))

print(list(output))  # [15, -5, 15, -5]
```

Decoding a WAV file:

```python
from audiomix.decoder import Decoder

with open("sound.wav", "rb") as handle:
    decoder = Decoder(handle)
    print(decoder.channels(), decoder.sample_rate(), decoder.total_duration())
    samples = list(decoder)
```

Data that is not WAV raises `UnrecognizedFormat`, a subclass of
`DecoderError`.

## What it does not do

- It does not play sound. There is no output stream or connection to an
  audio device; sources are only iterated, and what is done with the
  samples is up to the caller.
- The only format it decodes is WAV. MP3, FLAC, Ogg Vorbis and MP4/AAC data
  are not decoded and raise `UnrecognizedFormat`; `Mp4Type` only names the
  container extensions.
- It offers no effects beyond what `SampleFormat` provides per sample
  (amplification, interpolation, addition).