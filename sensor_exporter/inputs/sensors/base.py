"""
base.py

Defines the Reading record and the BaseSensor abstract class, which all
sensor drivers must implement.
"""


import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from sensor_exporter.rounding import round_half_away

LABEL_NAMES = ("address", "bus", "model", "repeatability")


@dataclass(frozen=True)
class Reading:
    """
    Raw, uncorrected result of one poll.

    Either value is None when the sensor did not provide it.
    """
    temperature: Optional[float] = None
    humidity: Optional[float] = None


class BaseSensor(ABC):
    """
    Abstract base class for all sensor drivers.

    Every instance owns one device lock. Concrete subclasses must implement:
      - labels(): the fixed Prometheus label set of the sensor
      - _read():  the device specific read sequence, called with the lock held
      - close():  release the underlying transport
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    @abstractmethod
    def labels(self) -> dict[str, str]:
        """Label values keyed by LABEL_NAMES. Must not touch the hardware."""

    @abstractmethod
    def _read(self) -> Reading:
        """
        Perform the raw reads and return unrounded values.

        Raises a SensorReadError subclass if any read fails.
        """

    @abstractmethod
    def close(self) -> None:
        """Release the transport handle."""

    def poll(self) -> Reading:
        """
        Read the sensor once.

        Blocks while another poll of the same device is in progress. Values
        are rounded to two decimal places.
        """
        with self._lock:
            raw = self._read()
        return Reading(
            temperature=_round_optional(raw.temperature),
            humidity=_round_optional(raw.humidity),
        )


def _round_optional(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    return round_half_away(float(value), 2)
