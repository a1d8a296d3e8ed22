from .base import BaseSensor, Reading
from .descriptor import SensorConfig, parse_descriptor, parse_descriptors
from .factory import SensorFactory

__all__ = [
    "BaseSensor",
    "Reading",
    "SensorConfig",
    "parse_descriptor",
    "parse_descriptors",
    "SensorFactory",
]
