"""Falling-block puzzle rules engine with an optional pygame front end."""

__version__ = "0.1.0"
