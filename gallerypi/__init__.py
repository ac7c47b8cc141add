"""Photo and video gallery toolkit: media indexing, month-grouped grid model, thumbnails and mpv playback."""

__version__ = "0.1.0"