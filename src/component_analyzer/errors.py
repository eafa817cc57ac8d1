"""Custom exceptions for component analysis."""


class ComponentAnalyzerError(Exception):
    """Base exception for component analysis errors."""
    pass


class MissingResourcePoolError(ComponentAnalyzerError):
    """Raised when an analyzer is created without a resource pool."""

    def __init__(self) -> None:
        super().__init__("A resource pool is required to analyze components")


class ResourceNotFoundError(ComponentAnalyzerError):
    """Raised by resource pools when a module path does not exist."""

    def __init__(self, name: str):
        super().__init__(f"Resource not found: {name}")
        self.name = name


class DescriptorParseError(ComponentAnalyzerError):
    """Raised when a descriptor is not valid JSON or has an unexpected structure."""

    def __init__(self, name: str, cause: Exception):
        super().__init__(f"Failed to parse descriptor '{name}': {cause}")
        self.name = name
        self.cause = cause


class ConfigurationError(ComponentAnalyzerError):
    """Raised when the analyzer settings file cannot be read."""
    pass
