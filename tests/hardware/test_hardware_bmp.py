import os
import platform
import pytest

from sensor_exporter.inputs.sensors import SensorFactory, parse_descriptor

pytestmark = pytest.mark.skipif(
    not any(platform.machine().startswith(arch) for arch in ("arm", "aarch64")),
    reason="Hardware tests only run on Raspberry Pi"
)


@pytest.mark.hardware
def test_bmp_hardware_poll_once():
    """
    Poll a Bosch sensor once. Set BMP_DESCRIPTOR, e.g. 'BMP280,address=0x77,bus=1'.
    """
    config = parse_descriptor(os.environ.get("BMP_DESCRIPTOR", "BME280,bus=1"))
    sensor = SensorFactory().build(config)
    try:
        reading = sensor.poll()
    finally:
        sensor.close()

    assert reading.temperature is not None
    assert -40.0 <= reading.temperature <= 85.0
    if config.model == "BME280":
        assert 0.0 <= reading.humidity <= 100.0
    else:
        assert reading.humidity is None
