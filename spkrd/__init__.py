"""spkrd: share a single speaker device with network clients over HTTP."""

__version__ = "0.1.0"
