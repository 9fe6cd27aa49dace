"""Multi-elevator dispatch and movement simulator."""

__version__ = "0.1.0"
