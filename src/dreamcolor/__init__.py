"""DreamColor - AI generated printable coloring books."""

__version__ = "0.1.0"
