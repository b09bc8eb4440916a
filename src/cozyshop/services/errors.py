"""Service-layer exceptions."""


class ConfigError(Exception):
    """Raised when an explicitly requested settings file cannot be used."""
