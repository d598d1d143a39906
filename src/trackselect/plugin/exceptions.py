"""Plugin system exceptions."""


class PluginError(Exception):
    """Base exception for plugin errors."""


class PluginLoadError(PluginError):
    """Failed to load plugin."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Failed to load plugin '{name}': {reason}")


class PluginValidationError(PluginError):
    """Plugin failed validation."""

    def __init__(self, name: str, errors: list[str]) -> None:
        self.name = name
        self.errors = errors
        super().__init__(f"Plugin '{name}' validation failed: {'; '.join(errors)}")
