"""
Exception types for the conversion engine.

Only MissingConfigurationError is meant to reach a caller of a converter;
everything else is recovered inside the parser or converter that hit it.
"""


class PromptBridgeError(Exception):
    """Base exception for conversion operations."""
    pass


class MissingConfigurationError(PromptBridgeError, ValueError):
    """A converter was called without an option it cannot guess."""

    def __init__(self, message: str, option: str):
        super().__init__(message)
        self.option = option


class InvalidSectionError(PromptBridgeError):
    """A section's fields do not have the shape a converter expects."""
    pass
