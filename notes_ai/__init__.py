"""AI-assisted personal notes API."""

__version__ = "1.0.0"
