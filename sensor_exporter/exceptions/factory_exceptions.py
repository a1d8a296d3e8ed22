from typing import Optional

from .config_exceptions import ConfigurationError


class FactoryError(ConfigurationError):
    """
    Base exception for factory-related errors.
    Carries optional context for better logs without string parsing.
    """
    def __init__(
        self,
        message: str,
        *,
        model: Optional[str] = None,
        descriptor: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.model = model
        self.descriptor = descriptor
        self.__cause__ = cause

    def __str__(self) -> str:
        base = super().__str__()
        if self.descriptor:
            return f"{base} (descriptor={self.descriptor})"
        return base


class UnknownSensorModelError(FactoryError):
    def __init__(
        self,
        unknown_model: str,
        known_models: list[str],
        *,
        descriptor: Optional[str] = None,
    ) -> None:
        msg = (
            f"Invalid/Unsupported sensor model '{unknown_model}'. "
            f"Known models: {', '.join(sorted(known_models)) or '∅'}"
        )
        super().__init__(msg, model=unknown_model, descriptor=descriptor)


class UnknownRepeatabilityError(FactoryError):
    def __init__(
        self,
        repeatability: str,
        *,
        model: Optional[str] = None,
        descriptor: Optional[str] = None,
    ) -> None:
        super().__init__(
            f"Unknown repeatability: {repeatability}",
            model=model,
            descriptor=descriptor,
        )
        self.repeatability = repeatability
