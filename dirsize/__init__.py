"""Directory and file-type disk usage summaries."""

__version__ = "0.1.0"
