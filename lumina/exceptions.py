"""Exceptions raised by the Lumina application."""


class LuminaError(Exception):
    """Base class for application errors."""


class ConfigError(LuminaError):
    """The configuration file or an override could not be used."""
