"""Topic-to-quiz generation and scoring service."""

__version__ = "0.1.0"
