import os
import time
import platform
import pytest

from sensor_exporter.inputs.sensors import SensorFactory, parse_descriptor
from sensor_exporter.telemetry import SensorCollector

pytestmark = pytest.mark.skipif(
    not any(platform.machine().startswith(arch) for arch in ("arm", "aarch64")),
    reason="Hardware tests only run on Raspberry Pi"
)


def _descriptor_from_env(default: str = "SHT31,bus=1") -> str:
    """Allow overriding the sensor via env var SHT3X_DESCRIPTOR, e.g. 'SHT31,address=0x44,bus=1'."""
    return os.environ.get("SHT3X_DESCRIPTOR", default)


@pytest.mark.hardware
def test_sht3x_hardware_read_via_factory_once():
    """
    Build an SHT3x sensor via SensorFactory and scrape it once through
    SensorCollector. Tolerate transient failures for up to 10 seconds.
    """
    config = parse_descriptor(_descriptor_from_env())
    sensor = SensorFactory().build(config)
    collector = SensorCollector(sensor)

    try:
        deadline = time.time() + 10.0
        values = {}
        while time.time() < deadline:
            values = {
                sample.name: sample.value
                for family in collector.collect()
                for sample in family.samples
            }
            if values.get("sensor_up") == 1:
                break
            time.sleep(1.0)
    finally:
        sensor.close()

    assert values.get("sensor_up") == 1, f"SHT3x never answered: {values}"
    assert -40.0 <= values["sensor_temperature_celsius"] <= 125.0
    assert 0.0 <= values["sensor_humidity_percent"] <= 100.0
    assert values["sensor_humidity_grams_per_cubic_meter"] >= 0.0
