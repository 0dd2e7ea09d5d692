"""URL service: deterministic URL shortening with click tracking."""

__version__ = "0.1.0"
