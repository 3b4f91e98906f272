"""
tonescope.exceptions - Custom exception classes.

All Tonescope-specific exceptions inherit from TonescopeError.
"""


class TonescopeError(Exception):
    """Base exception for all Tonescope errors."""

    pass


class ConfigError(TonescopeError):
    """Configuration loading or validation error."""

    pass


class AnalysisError(TonescopeError):
    """Feature extraction or scoring error."""

    pass


class EmptyInputError(AnalysisError):
    """Waveform has no samples to analyze."""

    pass


class ValidationError(TonescopeError):
    """Input file validation error."""

    pass


class AudioLoadError(TonescopeError):
    """Audio file could not be decoded."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")
