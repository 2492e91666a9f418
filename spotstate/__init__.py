"""State, data models, caches and UI state for a terminal Spotify player."""

__version__ = "0.1.0"