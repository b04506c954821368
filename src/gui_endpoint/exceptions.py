class EndpointError(Exception):
    """Base class for gui_endpoint errors."""


class ConfigError(EndpointError):
    """An endpoint record or settings file could not be read."""


class URLParseError(EndpointError, ValueError):
    """An override string is not a parseable URL."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"parse {url!r}: {reason}")
        self.url = url
        self.reason = reason
