"""
input_manager.py

Manages input devices such as sensors. Responsible for constructing sensor
drivers from parsed descriptors and wrapping each of them in a collector.
"""

import logging

from sensor_exporter.exceptions import DuplicateSensorError
from sensor_exporter.inputs.sensors.base import LABEL_NAMES
from sensor_exporter.inputs.sensors.descriptor import SensorConfig
from sensor_exporter.inputs.sensors.factory import SensorFactory
from sensor_exporter.telemetry import SensorCollector


class InputManager:
    """
    Manages input devices such as sensors.

    Encapsulates sensor construction (via SensorFactory) and the per-sensor
    collectors behind a single interface. Any sensor that cannot be built is
    fatal: the error is logged with the position and descriptor of the
    sensor and re-raised unchanged. Two descriptors resolving to the same
    label set raise DuplicateSensorError.
    """

    def __init__(
        self,
        sensor_configs: list[SensorConfig],
        logger: logging.Logger,
    ) -> None:
        self._logger = logger
        self._collectors: list[SensorCollector] = []

        factory = SensorFactory()
        seen: dict[tuple[str, ...], int] = {}
        for index, config in enumerate(sensor_configs, start=1):
            try:
                sensor = factory.build(config)
            except Exception as e:
                self._logger.error("sensor %d '%s': %s", index, config, e)
                self.close()
                raise

            # A label set identifies exactly one device.
            key = tuple(sensor.labels()[name] for name in LABEL_NAMES)
            if key in seen:
                error = DuplicateSensorError(seen[key], index=index, descriptor=str(config))
                self._logger.error(str(error))
                sensor.close()
                self.close()
                raise error
            seen[key] = index

            self._collectors.append(
                SensorCollector(
                    sensor,
                    temp_offset=config.temp_offset,
                    humidity_offset=config.humidity_offset,
                )
            )

        if not self._collectors:
            self._logger.warning(
                "No sensors configured. Only process metrics will be exposed."
            )

    @property
    def collectors(self) -> list[SensorCollector]:
        return list(self._collectors)

    def close(self) -> None:
        """
        Release the transports of all sensors built so far.
        """
        for collector in self._collectors:
            try:
                collector.sensor.close()
            except Exception:
                self._logger.warning(
                    "Failed to close sensor %s", collector.sensor.labels(), exc_info=True
                )
        self._collectors = []
