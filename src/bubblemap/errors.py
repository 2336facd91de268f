"""Exception hierarchy for bubblemap."""


class BubblemapError(Exception):
    """Base class for all bubblemap errors."""


class TreeStructureError(BubblemapError, ValueError):
    """Input tree is not a well-formed ``{name, children}`` node."""

    def __init__(self, message: str, location: str = "root"):
        super().__init__(f"{location}: {message}")
        self.location = location


class MeasurementUnavailableError(BubblemapError, RuntimeError):
    """No text measurement backend could be used for wrapping and sizing."""


class ExportError(BubblemapError, RuntimeError):
    """Rendering the scene into an output format failed."""


class GenerationError(BubblemapError, RuntimeError):
    """The text-to-tree service failed or returned an unusable response."""


class ConfigError(BubblemapError, ValueError):
    """Configuration file contains unknown keys or invalid values."""
