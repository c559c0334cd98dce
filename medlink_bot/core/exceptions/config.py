"""
Configuration exceptions.
"""


class ConfigurationError(Exception):
    """Exception raised when required settings are missing or invalid."""
    pass
