"""
sensors.py

Shared base exception classes for all sensor drivers.

Each driver module (bmp, sht3x) defines its own sensor-specific exception
names (e.g. SHT3xReadError) as thin subclasses of these bases.  This lets
callers catch at either level:

    # Driver-specific (precise):
    except SHT3xReadError: ...

    # Cross-sensor (broad):
    except SensorReadError: ...
"""


class SensorInitError(Exception):
    """Raised when a sensor cannot be initialised."""


class SensorReadError(Exception):
    """Raised when a sensor read fails."""
