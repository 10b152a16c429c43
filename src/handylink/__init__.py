"""HandyLink booking page."""

__version__ = "0.1.0"
