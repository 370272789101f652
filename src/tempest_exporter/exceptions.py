"""Exceptions raised by the Tempest exporter."""


class TempestExporterError(Exception):
    """Base exception for all exporter errors."""


class ConfigurationError(TempestExporterError):
    """Required startup configuration is missing or invalid."""


class FetchError(TempestExporterError):
    """Fetching or decoding a station observation failed."""


class StationStatusError(FetchError):
    """The WeatherFlow API answered with a non-success status code."""

    def __init__(self, status_code: int, status_message: str = "") -> None:
        self.status_code = status_code
        self.status_message = status_message
        super().__init__(f"station API returned status {status_code}: {status_message or 'unknown'}")


class RegistryConfigError(TempestExporterError):
    """The metric registry was initialized with an unusable shape."""


class RegistryStateError(TempestExporterError):
    """A metric registry operation was called in the wrong lifecycle state."""
