import pytest

from sensor_exporter.exceptions import SensorReadError
from sensor_exporter.inputs.sensors.base import Reading
from sensor_exporter.inputs.sensors.bmp import BMPReadError, BMPSensor
from sensor_exporter.inputs.sensors.transport import BMPChip


def make_sensor(chip=BMPChip.BME280, model="BME280"):
    return BMPSensor(address=0x76, bus=1, model=model, chip=chip)


def test_bme280_poll_reads_temperature_then_humidity(fake_bmp_devices):
    sensor = make_sensor()
    reading = sensor.poll()
    assert reading == Reading(temperature=21.46, humidity=45.68)
    assert fake_bmp_devices[0].calls == ["temperature", "humidity"]


def test_chip_without_humidity_leaves_humidity_unset(fake_bmp_devices):
    sensor = make_sensor(BMPChip.BMP280, "BMP280")
    reading = sensor.poll()
    assert reading.temperature == 21.46
    assert reading.humidity is None


def test_poll_rounds_half_away_from_zero(fake_bmp_devices):
    sensor = make_sensor()
    fake_bmp_devices[0].temperature = -1.2345
    fake_bmp_devices[0].humidity = 50.125
    reading = sensor.poll()
    assert reading.temperature == -1.23
    assert reading.humidity == 50.13


def test_temperature_failure_skips_humidity_read(fake_bmp_devices):
    sensor = make_sensor()
    fake_bmp_devices[0].temperature_error = OSError("remote I/O error")
    with pytest.raises(BMPReadError) as e:
        sensor.poll()
    assert isinstance(e.value.__cause__, OSError)
    assert fake_bmp_devices[0].calls == ["temperature"]


def test_humidity_failure_fails_whole_poll(fake_bmp_devices):
    sensor = make_sensor()
    fake_bmp_devices[0].humidity_error = OSError("remote I/O error")
    with pytest.raises(SensorReadError):
        sensor.poll()


def test_poll_recovers_after_failure(fake_bmp_devices):
    sensor = make_sensor()
    fake_bmp_devices[0].temperature_error = OSError("busy")
    with pytest.raises(BMPReadError):
        sensor.poll()
    fake_bmp_devices[0].temperature_error = None
    assert sensor.poll().temperature == 21.46


def test_labels_are_fixed_and_do_not_touch_device(fake_bmp_devices):
    sensor = make_sensor()
    assert sensor.labels() == {
        "address": "0x76",
        "bus": "1",
        "model": "BME280",
        "repeatability": "",
    }
    assert sensor.labels() is sensor.labels()
    assert fake_bmp_devices[0].calls == []


def test_close_closes_device(fake_bmp_devices):
    sensor = make_sensor()
    sensor.close()
    assert fake_bmp_devices[0].closed


def test_read_error_is_sensor_read_error():
    assert issubclass(BMPReadError, SensorReadError)
