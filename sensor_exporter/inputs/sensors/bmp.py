"""
bmp.py

Provides a sensor driver for the Bosch BMP180, BMP280, BME280 and BMP388
chips. All of them measure temperature, only the BME280 measures humidity.
"""

import logging

from sensor_exporter import PACKAGE_LOGGER_NAME
from sensor_exporter.exceptions import SensorReadError
from sensor_exporter.inputs.sensors import transport
from sensor_exporter.inputs.sensors.base import BaseSensor, Reading

logger = logging.getLogger(f"{PACKAGE_LOGGER_NAME}.{__name__.split('.')[-1]}")


class BMPReadError(SensorReadError):
    """
    Raised when reading data from a BMP family sensor fails.
    """
    pass


class BMPSensor(BaseSensor):
    """
    Sensor driver for the Bosch BMP family.

    A poll reads the temperature first and then asks for the humidity. Chips
    without a humidity sensor answer that request with "unsupported", which
    leaves the humidity of the reading unset rather than failing the poll.
    """

    def __init__(self, *, address: int, bus: int, model: str, chip: transport.BMPChip):
        super().__init__()
        self.address = address
        self.bus = bus
        self.model = model
        self.chip = chip

        logger.info("New BMP sensor: %s,address=%#x,bus=%d", model, address, bus)
        self.device = transport.open_bmp(chip, address, bus)

        self._labels = {
            "address": f"{address:#x}",
            "bus": str(bus),
            "model": model,
            "repeatability": "",
        }

    def labels(self) -> dict[str, str]:
        return self._labels

    def _read(self) -> Reading:
        try:
            temperature = self.device.read_temperature()
        except Exception as e:
            raise BMPReadError(f"Failed to read {self.model} temperature: {e}") from e

        # TODO: read temperature and humidity in one burst on the BME280
        try:
            supported, humidity = self.device.read_humidity()
        except Exception as e:
            raise BMPReadError(f"Failed to read {self.model} humidity: {e}") from e

        return Reading(temperature=temperature, humidity=humidity if supported else None)

    def close(self) -> None:
        self.device.close()
