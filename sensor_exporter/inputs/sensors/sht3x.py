"""
sht3x.py

Provides a sensor driver for the Sensirion SHT30, SHT31 and SHT35
temperature and humidity sensors.
"""

import logging

from sensor_exporter import PACKAGE_LOGGER_NAME
from sensor_exporter.exceptions import SensorReadError
from sensor_exporter.inputs.sensors import transport
from sensor_exporter.inputs.sensors.base import BaseSensor, Reading

logger = logging.getLogger(f"{PACKAGE_LOGGER_NAME}.{__name__.split('.')[-1]}")


class SHT3xReadError(SensorReadError):
    """
    Raised when reading data from an SHT3x sensor fails.
    """
    pass


class SHT3xSensor(BaseSensor):
    """
    Sensor driver for the SHT3x series.

    Temperature and humidity come from a single measurement. The
    repeatability trades conversion time for measurement noise.
    """

    def __init__(self, *, address: int, bus: int, model: str,
                 repeatability: transport.Repeatability):
        super().__init__()
        self.address = address
        self.bus = bus
        self.model = model
        self.repeatability = repeatability

        logger.info(
            "New SHT3x sensor: %s,address=%#x,bus=%d,repeatability=%s",
            model, address, bus, repeatability.value,
        )
        self.device = transport.open_sht3x(address, bus, repeatability)

        self._labels = {
            "address": f"{address:#x}",
            "bus": str(bus),
            "model": model,
            "repeatability": repeatability.value,
        }

    def labels(self) -> dict[str, str]:
        return self._labels

    def _read(self) -> Reading:
        try:
            temperature, humidity = self.device.read_temperature_and_humidity()
        except Exception as e:
            raise SHT3xReadError(f"Failed to read {self.model}: {e}") from e
        return Reading(temperature=temperature, humidity=humidity)

    def close(self) -> None:
        self.device.close()
