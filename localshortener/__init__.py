"""URL shortener backed by an embedded Redis key-value store."""

__version__ = '0.1.0'
