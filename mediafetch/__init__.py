"""Twitter/X media link lookup: merge several upstream sources into one ranked JSON payload."""

__version__ = "0.1.0"
