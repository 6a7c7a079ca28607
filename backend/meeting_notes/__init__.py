"""Meeting transcript to Markdown summary service."""

__version__ = "0.1.0"
