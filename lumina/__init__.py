"""Lumina: a small local book catalog browser."""

__version__ = "1.0.0"
