"""Metrics agent and in-memory HTTP metrics server."""

__version__ = "0.1.0"