from .config_exceptions import (
    ConfigurationError,
    InvalidConfigValueError,
    ConfigFileNotFoundError,
)
from .descriptor_exceptions import (
    DescriptorError,
    DuplicateSensorError,
    MissingSensorModelError,
    UnknownSensorOptionError,
    InvalidSensorOptionError,
)
from .factory_exceptions import FactoryError, UnknownSensorModelError, UnknownRepeatabilityError
from .sensors import (
    SensorInitError,
    SensorReadError,
)

__all__ = [
    "ConfigurationError",
    "InvalidConfigValueError",
    "ConfigFileNotFoundError",
    "DescriptorError",
    "DuplicateSensorError",
    "MissingSensorModelError",
    "UnknownSensorOptionError",
    "InvalidSensorOptionError",
    "FactoryError",
    "UnknownSensorModelError",
    "UnknownRepeatabilityError",
    "SensorInitError",
    "SensorReadError",
]
