"""
conftest.py

Shared fakes for unit tests.

The sensor drivers open their devices through
sensor_exporter.inputs.sensors.transport. The fixtures here replace
transport.open_bmp and transport.open_sht3x with factories returning fake
devices, so no I2C bus or hardware library is needed. Each fixture returns
the list of fake devices it created, letting tests script readings or
failures on them after the sensor has been built.
"""

import pytest

from sensor_exporter.inputs.sensors import transport
from sensor_exporter.inputs.sensors.base import BaseSensor, Reading


class FakeBMPDevice:
    def __init__(self, chip, address, bus):
        self.chip = chip
        self.address = address
        self.bus = bus
        self.temperature = 21.456
        self.humidity = 45.678 if chip is transport.BMPChip.BME280 else None
        self.temperature_error = None
        self.humidity_error = None
        self.calls = []
        self.closed = False

    def read_temperature(self):
        self.calls.append("temperature")
        if self.temperature_error:
            raise self.temperature_error
        return self.temperature

    def read_humidity(self):
        self.calls.append("humidity")
        if self.humidity_error:
            raise self.humidity_error
        if self.humidity is None:
            return False, None
        return True, self.humidity

    def close(self):
        self.closed = True


class FakeSHT3xDevice:
    def __init__(self, address, bus, repeatability):
        self.address = address
        self.bus = bus
        self.repeatability = repeatability
        self.temperature = 22.125
        self.humidity = 51.994
        self.error = None
        self.calls = 0
        self.closed = False

    def read_temperature_and_humidity(self):
        self.calls += 1
        if self.error:
            raise self.error
        return self.temperature, self.humidity

    def close(self):
        self.closed = True


@pytest.fixture
def fake_bmp_devices(monkeypatch):
    devices = []

    def _open(chip, address, bus):
        device = FakeBMPDevice(chip, address, bus)
        devices.append(device)
        return device

    monkeypatch.setattr(transport, "open_bmp", _open)
    return devices


@pytest.fixture
def fake_sht3x_devices(monkeypatch):
    devices = []

    def _open(address, bus, repeatability):
        device = FakeSHT3xDevice(address, bus, repeatability)
        devices.append(device)
        return device

    monkeypatch.setattr(transport, "open_sht3x", _open)
    return devices


class StubSensor(BaseSensor):
    """
    Sensor returning a scripted reading, or raising a scripted error.
    """

    def __init__(self, reading=None, error=None, labels=None):
        super().__init__()
        self.reading = reading if reading is not None else Reading()
        self.error = error
        self.polls = 0
        self.closed = False
        self._labels = labels or {
            "address": "0x45",
            "bus": "1",
            "model": "SHT31",
            "repeatability": "high",
        }

    def labels(self):
        return self._labels

    def _read(self):
        self.polls += 1
        if self.error:
            raise self.error
        return self.reading

    def close(self):
        self.closed = True


@pytest.fixture
def stub_sensor_class():
    return StubSensor
