"""
transport.py

I2C transport adapters for the supported sensor chips.

This is the only module that talks to hardware libraries. The libraries are
imported when a device is opened, so the rest of the package imports on
machines without an I2C bus. Errors raised by the libraries while opening a
device are passed through unchanged; read errors are left for the sensor
drivers to translate.
"""

import struct
import time
from enum import Enum
from typing import Any, Optional

from sensor_exporter.exceptions import SensorInitError


class BMPChip(Enum):
    """Bosch pressure/temperature chips, selected by sensor model."""
    BMP180 = "BMP180"
    BMP280 = "BMP280"
    BME280 = "BME280"
    BMP388 = "BMP388"


class Repeatability(Enum):
    """SHT3x measurement repeatability. Higher means slower and less noisy."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# --- Bosch BMP family ------------------------------------------------------

class BMP180Device:
    """
    BMP180 accessed through raw SMBus transfers.

    Only the temperature path is implemented: read the calibration PROM once,
    then trigger an uncompensated temperature conversion per read.
    """
    CHIP_ID_REGISTER = 0xD0
    CHIP_ID = 0x55
    CALIBRATION_REGISTER = 0xAA
    CONTROL_REGISTER = 0xF4
    DATA_REGISTER = 0xF6
    READ_TEMPERATURE_COMMAND = 0x2E
    CONVERSION_TIME = 0.005  # seconds, datasheet max is 4.5 ms

    def __init__(self, address: int, bus: int) -> None:
        from smbus3 import SMBus

        self.address = address
        self._smbus = SMBus(bus)
        try:
            self._load_calibration(bus)
        except Exception:
            self._smbus.close()
            raise

    def _load_calibration(self, bus: int) -> None:
        chip_id = self._smbus.read_byte_data(self.address, self.CHIP_ID_REGISTER)
        if chip_id != self.CHIP_ID:
            raise SensorInitError(
                f"Unexpected chip id {chip_id:#x} at address {self.address:#x} on bus {bus}, "
                f"expected BMP180 ({self.CHIP_ID:#x})"
            )
        prom = self._smbus.read_i2c_block_data(self.address, self.CALIBRATION_REGISTER, 22)
        (self._ac1, self._ac2, self._ac3, self._ac4, self._ac5, self._ac6,
         self._b1, self._b2, self._mb, self._mc, self._md) = struct.unpack(">hhhHHHhhhhh", bytes(prom))

    def read_temperature(self) -> float:
        self._smbus.write_byte_data(self.address, self.CONTROL_REGISTER, self.READ_TEMPERATURE_COMMAND)
        time.sleep(self.CONVERSION_TIME)
        msb, lsb = self._smbus.read_i2c_block_data(self.address, self.DATA_REGISTER, 2)
        uncompensated = (msb << 8) | lsb

        x1 = ((uncompensated - self._ac6) * self._ac5) >> 15
        x2 = (self._mc << 11) // (x1 + self._md)
        b5 = x1 + x2
        return ((b5 + 8) >> 4) / 10.0

    def read_humidity(self) -> tuple[bool, Optional[float]]:
        return False, None

    def close(self) -> None:
        self._smbus.close()


class AdafruitBMPDevice:
    """
    BMP280, BME280 or BMP388 through the Adafruit CircuitPython drivers.
    """

    def __init__(self, chip: BMPChip, address: int, bus: int) -> None:
        from adafruit_extended_bus import ExtendedI2C

        self.chip = chip
        self._i2c = ExtendedI2C(bus)
        try:
            self._driver = self._create_driver(chip, address)
        except Exception:
            self._i2c.deinit()
            raise

    def _create_driver(self, chip: BMPChip, address: int) -> Any:
        if chip is BMPChip.BME280:
            from adafruit_bme280 import basic as adafruit_bme280
            return adafruit_bme280.Adafruit_BME280_I2C(self._i2c, address=address)
        if chip is BMPChip.BMP280:
            import adafruit_bmp280
            return adafruit_bmp280.Adafruit_BMP280_I2C(self._i2c, address=address)
        if chip is BMPChip.BMP388:
            import adafruit_bmp3xx
            return adafruit_bmp3xx.BMP3XX_I2C(self._i2c, address=address)
        raise ValueError(f"{chip.value} is not handled by the Adafruit drivers")

    @property
    def supports_humidity(self) -> bool:
        return self.chip is BMPChip.BME280

    def read_temperature(self) -> float:
        return float(self._driver.temperature)

    def read_humidity(self) -> tuple[bool, Optional[float]]:
        """
        Return (supported, relative humidity). Chips without a humidity
        sensor report (False, None) instead of failing.
        """
        if not self.supports_humidity:
            return False, None
        return True, float(self._driver.relative_humidity)

    def close(self) -> None:
        self._i2c.deinit()


def open_bmp(chip: BMPChip, address: int, bus: int):
    """Open a Bosch BMP family device on the given bus."""
    if chip is BMPChip.BMP180:
        return BMP180Device(address, bus)
    return AdafruitBMPDevice(chip, address, bus)


# --- Sensirion SHT3x family ------------------------------------------------

class SHT3xDevice:
    """
    SHT30/SHT31/SHT35 in single shot mode through adafruit_sht31d.
    """

    def __init__(self, address: int, bus: int, repeatability: Repeatability) -> None:
        from adafruit_extended_bus import ExtendedI2C
        import adafruit_sht31d

        levels = {
            Repeatability.LOW: adafruit_sht31d.REP_LOW,
            Repeatability.MEDIUM: adafruit_sht31d.REP_MED,
            Repeatability.HIGH: adafruit_sht31d.REP_HIGH,
        }

        self._i2c = ExtendedI2C(bus)
        try:
            self._driver = adafruit_sht31d.SHT31D(self._i2c, address=address)
            self._driver.mode = adafruit_sht31d.MODE_SINGLE
            self._driver.repeatability = levels[repeatability]
        except Exception:
            self._i2c.deinit()
            raise

    def read_temperature_and_humidity(self) -> tuple[float, float]:
        """One combined measurement, returned as (temperature, humidity)."""
        temperature, humidity = self._driver.measurements
        return float(temperature), float(humidity)

    def close(self) -> None:
        self._i2c.deinit()


def open_sht3x(address: int, bus: int, repeatability: Repeatability) -> SHT3xDevice:
    """Open a Sensirion SHT3x device on the given bus."""
    return SHT3xDevice(address, bus, repeatability)
