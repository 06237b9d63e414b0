"""QuickRank - quickselect-based player ranking with a replayable trace."""

__version__ = "1.0.0"
