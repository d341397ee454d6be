"""Insight CLI — command-line client for the Insight query service."""

__version__ = "0.1.0"
