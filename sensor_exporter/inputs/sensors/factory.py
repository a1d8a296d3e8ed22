"""
factory.py

Provides the SensorFactory. The factory is the one place that knows which
sensor model belongs to which driver family and which defaults that family
uses for options a descriptor left unset.
"""


from sensor_exporter.exceptions import UnknownRepeatabilityError, UnknownSensorModelError
from sensor_exporter.inputs.sensors.base import BaseSensor
from sensor_exporter.inputs.sensors.bmp import BMPSensor
from sensor_exporter.inputs.sensors.descriptor import SensorConfig
from sensor_exporter.inputs.sensors.sht3x import SHT3xSensor
from sensor_exporter.inputs.sensors.transport import BMPChip, Repeatability

BMP_DEFAULT_ADDRESS = 0x76
SHT3X_DEFAULT_ADDRESS = 0x45
DEFAULT_BUS = 0
DEFAULT_REPEATABILITY = "high"

BMP_MODELS = {
    "BME280": BMPChip.BME280,
    "BMP180": BMPChip.BMP180,
    "BMP280": BMPChip.BMP280,
    "BMP388": BMPChip.BMP388,
}
SHT3X_MODELS = ("SHT30", "SHT31", "SHT35")


class SensorFactory:
    """
    Construct sensor drivers from SensorConfig records.

    Errors raised while opening the transport are not wrapped; they reach
    the caller as raised by the bus library.
    """

    @property
    def known_models(self) -> list[str]:
        return [*BMP_MODELS, *SHT3X_MODELS]

    def build(self, config: SensorConfig) -> BaseSensor:
        """
        Build a single sensor driver for the given configuration.

        Raises:
            UnknownSensorModelError: The model is not supported.
            UnknownRepeatabilityError: An SHT3x repeatability is not one of
                low, medium or high.
        """
        if config.model in BMP_MODELS:
            return self._build_bmp(config, BMP_MODELS[config.model])
        if config.model in SHT3X_MODELS:
            return self._build_sht3x(config)
        raise UnknownSensorModelError(
            config.model, self.known_models, descriptor=str(config)
        )

    @staticmethod
    def _build_bmp(config: SensorConfig, chip: BMPChip) -> BMPSensor:
        address = config.address if config.address is not None else BMP_DEFAULT_ADDRESS
        bus = config.bus if config.bus is not None else DEFAULT_BUS
        return BMPSensor(address=address, bus=bus, model=config.model, chip=chip)

    @staticmethod
    def _build_sht3x(config: SensorConfig) -> SHT3xSensor:
        address = config.address if config.address is not None else SHT3X_DEFAULT_ADDRESS
        bus = config.bus if config.bus is not None else DEFAULT_BUS
        name = config.repeatability or DEFAULT_REPEATABILITY
        try:
            repeatability = Repeatability(name)
        except ValueError:
            raise UnknownRepeatabilityError(
                name, model=config.model, descriptor=str(config)
            ) from None
        return SHT3xSensor(
            address=address, bus=bus, model=config.model, repeatability=repeatability
        )
