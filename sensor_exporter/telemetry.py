"""
telemetry.py

Provides the SensorCollector and ExporterCollector classes, responsible for
turning sensor polls into Prometheus metrics on every scrape.

SensorCollector wraps one sensor: it polls, applies the calibration offsets,
derives absolute humidity and emits the resulting gauges. A failed poll is
reported as sensor_up 0 and nothing else. ExporterCollector fans a scrape out
to all sensor collectors and merges their output so that every metric name is
exposed as a single family.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional

from prometheus_client import CollectorRegistry, Info, PlatformCollector, ProcessCollector
from prometheus_client.metrics_core import GaugeMetricFamily, Metric
from prometheus_client.registry import Collector

from sensor_exporter import PACKAGE_LOGGER_NAME
from sensor_exporter.__version__ import __version__
from sensor_exporter.humidity import absolute_humidity
from sensor_exporter.inputs.sensors.base import LABEL_NAMES, BaseSensor
from sensor_exporter.rounding import round_half_away

logger = logging.getLogger(f"{PACKAGE_LOGGER_NAME}.telemetry")

UP = "sensor_up"
TEMPERATURE = "sensor_temperature_celsius"
RAW_TEMPERATURE = "sensor_raw_temperature_celsius"
HUMIDITY = "sensor_humidity_percent"
RAW_HUMIDITY = "sensor_raw_humidity_percent"
ABSOLUTE_HUMIDITY = "sensor_humidity_grams_per_cubic_meter"
RAW_ABSOLUTE_HUMIDITY = "sensor_raw_humidity_grams_per_cubic_meter"

METRIC_DOCUMENTATION = {
    UP: "Value is 1 if reading sensor data was successful, 0 otherwise.",
    TEMPERATURE: "Temperature in Celsius",
    RAW_TEMPERATURE: "Uncorrected temperature in Celsius",
    HUMIDITY: "Relative humidity in percent",
    RAW_HUMIDITY: "Uncorrected relative humidity in percent",
    ABSOLUTE_HUMIDITY: "Absolute humidity in gram / cubic meter",
    RAW_ABSOLUTE_HUMIDITY: "Uncorrected absolute humidity in gram / cubic meter",
}


def _new_families() -> dict[str, GaugeMetricFamily]:
    return {
        name: GaugeMetricFamily(name, documentation, labels=LABEL_NAMES)
        for name, documentation in METRIC_DOCUMENTATION.items()
    }


class SensorCollector(Collector):
    """
    Collect metrics from a single sensor.

    Args:
        sensor: The sensor driver to poll on every scrape.
        temp_offset: Added to the raw temperature for the corrected gauge.
        humidity_offset: Added to the raw relative humidity for the
            corrected gauge.
    """

    def __init__(self, sensor: BaseSensor, temp_offset: float = 0.0, humidity_offset: float = 0.0):
        self.sensor = sensor
        self.temp_offset = temp_offset
        self.humidity_offset = humidity_offset

        labels = sensor.labels()
        self._label_values = [labels[name] for name in LABEL_NAMES]

    @property
    def label_values(self) -> list[str]:
        return list(self._label_values)

    def describe(self) -> list[Metric]:
        """
        Every metric family this collector can emit, without samples.

        Never polls the sensor.
        """
        return list(_new_families().values())

    def collect(self) -> list[Metric]:
        """
        Poll the sensor and return the metric families that have samples.

        Never raises: a failing poll is logged and reported as sensor_up 0.
        """
        families = _new_families()
        try:
            reading = self.sensor.poll()
        except Exception as e:
            logger.warning("Polling sensor %s failed: %s", self.sensor.labels(), e)
            families[UP].add_metric(self._label_values, 0)
            return [families[UP]]

        families[UP].add_metric(self._label_values, 1)

        temperature = reading.temperature
        humidity = reading.humidity

        if temperature is not None:
            self._add(families, TEMPERATURE, temperature + self.temp_offset)
            self._add(families, RAW_TEMPERATURE, temperature)

        if humidity is not None:
            self._add(families, HUMIDITY, humidity + self.humidity_offset)
            self._add(families, RAW_HUMIDITY, humidity)

        if temperature is not None and humidity is not None:
            corrected = self._absolute_humidity(
                humidity + self.humidity_offset, temperature + self.temp_offset
            )
            raw = self._absolute_humidity(humidity, temperature)
            if corrected is not None:
                self._add(families, ABSOLUTE_HUMIDITY, corrected)
            if raw is not None:
                self._add(families, RAW_ABSOLUTE_HUMIDITY, raw)

        return [family for family in families.values() if family.samples]

    def _absolute_humidity(self, relative_humidity: float, temperature: float) -> Optional[float]:
        """
        Absolute humidity, or None when the conversion is undefined at this
        temperature (division by zero or overflow near the formula's poles).
        """
        try:
            return absolute_humidity(relative_humidity, temperature)
        except ArithmeticError as e:
            logger.warning(
                "Cannot derive absolute humidity for sensor %s at %r °C: %s",
                self.sensor.labels(), temperature, e,
            )
            return None

    def _add(self, families: dict[str, GaugeMetricFamily], name: str, value: float) -> None:
        """Add one sample, rounded to two decimals."""
        families[name].add_metric(self._label_values, round_half_away(value, 2))


class ExporterCollector(Collector):
    """
    Aggregate the sensor collectors into one set of metric families.

    A scrape polls all sensors concurrently, one worker per sensor. Sensors
    share no state, so a slow or failing sensor only affects its own samples.
    """

    def __init__(self, collectors: Iterable[SensorCollector]):
        self._collectors = list(collectors)

    @property
    def collectors(self) -> list[SensorCollector]:
        return list(self._collectors)

    def describe(self) -> list[Metric]:
        merged: dict[str, Metric] = {}
        for collector in self._collectors:
            for family in collector.describe():
                merged.setdefault(family.name, family)
        return list(merged.values())

    def collect(self) -> list[Metric]:
        if not self._collectors:
            return []
        with ThreadPoolExecutor(
            max_workers=len(self._collectors), thread_name_prefix="sensor-poll"
        ) as pool:
            results = list(pool.map(lambda collector: collector.collect(), self._collectors))

        merged: dict[str, GaugeMetricFamily] = {}
        for families in results:
            for family in families:
                target = merged.get(family.name)
                if target is None:
                    target = GaugeMetricFamily(family.name, family.documentation, labels=LABEL_NAMES)
                    merged[family.name] = target
                target.samples.extend(family.samples)
        return list(merged.values())


def build_registry(collectors: Iterable[SensorCollector]) -> CollectorRegistry:
    """
    Create the registry served by the metrics endpoint: the sensor metrics,
    the build info and the process/platform collectors.
    """
    registry = CollectorRegistry()
    registry.register(ExporterCollector(collectors))
    ProcessCollector(registry=registry)
    PlatformCollector(registry=registry)
    build_info = Info("sensor_exporter_build", "Version of the sensor exporter", registry=registry)
    build_info.info({"version": __version__})
    return registry
