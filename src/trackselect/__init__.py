"""Track Select - audio and subtitle track selection for media playback."""

__version__ = "0.4.0"
