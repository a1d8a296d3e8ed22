"""
config_exceptions.py

Unified exception hierarchy for all configuration-related errors.

All exceptions here share a common base (ConfigurationError) so callers
can either catch broadly:

    except ConfigurationError: ...

or precisely:

    except InvalidConfigValueError: ...

Anything derived from ConfigurationError is fatal at startup: the exporter
exits before the metrics server is started.
"""


class ConfigurationError(Exception):
    """Base class for all configuration-related errors."""


class InvalidConfigValueError(ConfigurationError):
    """Raised when a config value fails validation."""


class ConfigFileNotFoundError(ConfigurationError, FileNotFoundError):
    """Raised when an explicitly requested configuration file cannot be located."""
