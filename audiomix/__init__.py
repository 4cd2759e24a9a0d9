"""Audio sample sources, format, channel and rate converters, a dynamic mixer, a playback queue and a WAV decoder."""

__version__ = "0.1.0"