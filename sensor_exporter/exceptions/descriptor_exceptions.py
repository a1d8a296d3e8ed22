from typing import Optional

from .config_exceptions import ConfigurationError


class DescriptorError(ConfigurationError):
    """
    Base exception for sensor descriptor parsing errors.

    When raised for one entry of a batch the error carries the 1-based index
    and the original descriptor text, which are rendered as a prefix.
    """
    def __init__(
        self,
        message: str,
        *,
        index: Optional[int] = None,
        descriptor: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.index = index
        self.descriptor = descriptor
        self.__cause__ = cause

    def __str__(self) -> str:
        base = super().__str__()
        if self.index is None:
            return base
        return f"sensor {self.index} '{self.descriptor}': {base}"


class MissingSensorModelError(DescriptorError):
    def __init__(self) -> None:
        super().__init__("Missing sensor model")


class UnknownSensorOptionError(DescriptorError):
    def __init__(self, option: str) -> None:
        super().__init__(f"Unknown sensor option '{option}'")
        self.option = option


class InvalidSensorOptionError(DescriptorError):
    """Raised when an option value cannot be converted to the expected type."""
    def __init__(
        self,
        message: str,
        *,
        option: str,
        value: str,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.option = option
        self.value = value


class DuplicateSensorError(DescriptorError):
    """Raised when two descriptors resolve to the same device and label set."""
    def __init__(
        self,
        first_index: int,
        *,
        index: Optional[int] = None,
        descriptor: Optional[str] = None,
    ) -> None:
        super().__init__(
            f"Duplicate sensor, same device and labels as sensor {first_index}",
            index=index,
            descriptor=descriptor,
        )
        self.first_index = first_index
