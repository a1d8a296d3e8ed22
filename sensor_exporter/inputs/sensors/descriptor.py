"""
descriptor.py

Parses sensor descriptors of the form

    MODEL[,address=<uint8>][,bus=<int>][,repeatability=low|medium|high]
         [,temp_offset=<float>][,humidity_offset=<float>]

into SensorConfig records. Options left out of a descriptor stay unset (None)
so the factory can apply per-family defaults later, and so that rendering a
config back to text only repeats what was given.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from sensor_exporter.exceptions import (
    DescriptorError,
    InvalidSensorOptionError,
    MissingSensorModelError,
    UnknownSensorOptionError,
)


@dataclass
class SensorConfig:
    """
    Structured form of one sensor descriptor.

    address, bus and repeatability are None when the descriptor did not set
    them. The offsets default to 0.0 and are added to the raw readings.
    """
    model: str
    address: Optional[int] = None
    bus: Optional[int] = None
    repeatability: Optional[str] = None
    temp_offset: float = 0.0
    humidity_offset: float = 0.0

    def __str__(self) -> str:
        parts = [self.model]
        if self.address is not None:
            parts.append(f"address={self.address:#x}")
        if self.bus is not None:
            parts.append(f"bus={self.bus}")
        if self.repeatability:
            parts.append(f"repeatability={self.repeatability}")
        if self.temp_offset != 0.0:
            parts.append(f"temp_offset={self.temp_offset!r}")
        if self.humidity_offset != 0.0:
            parts.append(f"humidity_offset={self.humidity_offset!r}")
        return ",".join(parts)


# --- Value parsers ---------------------------------------------------------

_LEGACY_OCTAL = re.compile(r"[+-]?0[0-7]+")


def _parse_int(value: str, *, bits: int, signed: bool) -> int:
    """
    Parse an integer literal that must fit into the given width.

    Accepts decimal, 0x, 0o and 0b prefixed literals and, like C, a leading
    0 for octal ("010" is 8).
    """
    if not value or value != value.strip():
        raise ValueError("invalid syntax")
    if not signed and value[0] in "+-":
        raise ValueError("invalid syntax")
    if _LEGACY_OCTAL.fullmatch(value):
        number = int(value, 8)
    else:
        number = int(value, 0)
    if signed:
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        low, high = 0, (1 << bits) - 1
    if not low <= number <= high:
        raise ValueError("value out of range")
    return number


def _parse_float(value: str) -> float:
    """
    Parse a decimal or hexadecimal ("0x1p-2") float. Digit separators are
    rejected; nan and inf are accepted.
    """
    if not value or value != value.strip() or "_" in value:
        raise ValueError("invalid syntax")
    if value.lstrip("+-")[:2].lower() == "0x":
        return float.fromhex(value)
    return float(value)


def _set_address(config: SensorConfig, value: str) -> None:
    try:
        config.address = _parse_int(value, bits=8, signed=False)
    except ValueError as e:
        raise InvalidSensorOptionError(
            f"Specified address '{value}' is not an unsigned integer: {e}",
            option="address", value=value, cause=e,
        ) from e


def _set_bus(config: SensorConfig, value: str) -> None:
    try:
        config.bus = _parse_int(value, bits=32, signed=True)
    except ValueError as e:
        raise InvalidSensorOptionError(
            f"Specified bus '{value}' is not an integer: {e}",
            option="bus", value=value, cause=e,
        ) from e


def _set_repeatability(config: SensorConfig, value: str) -> None:
    # Validated by the factory, only SHT3x sensors know about it.
    config.repeatability = value


def _set_temp_offset(config: SensorConfig, value: str) -> None:
    try:
        config.temp_offset = _parse_float(value)
    except ValueError as e:
        raise InvalidSensorOptionError(
            f"Failed to parse temperature offset '{value}': {e}",
            option="temp_offset", value=value, cause=e,
        ) from e


def _set_humidity_offset(config: SensorConfig, value: str) -> None:
    try:
        config.humidity_offset = _parse_float(value)
    except ValueError as e:
        raise InvalidSensorOptionError(
            f"Failed to parse humidity offset '{value}': {e}",
            option="humidity_offset", value=value, cause=e,
        ) from e


_OPTION_SETTERS = {
    "address": _set_address,
    "bus": _set_bus,
    "repeatability": _set_repeatability,
    "temp_offset": _set_temp_offset,
    "humidity_offset": _set_humidity_offset,
}


# --- Public API ------------------------------------------------------------

def parse_descriptor(descriptor: str) -> SensorConfig:
    """
    Parse one sensor descriptor into a SensorConfig.

    Bare options without '=' get an empty string as value.

    Raises:
        MissingSensorModelError: The model field is empty.
        UnknownSensorOptionError: An option key is not recognised.
        InvalidSensorOptionError: An option value is malformed.
    """
    fields = descriptor.split(",")
    model = fields[0]
    if not model:
        raise MissingSensorModelError()

    config = SensorConfig(model=model)
    for field in fields[1:]:
        key, _, value = field.partition("=")
        setter = _OPTION_SETTERS.get(key)
        if setter is None:
            raise UnknownSensorOptionError(key)
        setter(config, value)
    return config


def parse_descriptors(descriptors: Iterable[str]) -> list[SensorConfig]:
    """
    Parse a list of sensor descriptors, preserving their order.

    Raises:
        DescriptorError: Names the 1-based index and the original text of the
            first descriptor that failed, with the underlying error chained.
    """
    configs: list[SensorConfig] = []
    for index, descriptor in enumerate(descriptors, start=1):
        try:
            configs.append(parse_descriptor(descriptor))
        except DescriptorError as e:
            raise DescriptorError(
                str(e), index=index, descriptor=descriptor, cause=e
            ) from e
    return configs
