"""
Base exception types for the relay.
"""


class FormRelayError(Exception):
    """Base exception for all relay errors."""


class ConfigurationError(FormRelayError):
    """Required configuration is missing or invalid.

    Raised only at startup; the process must not start listening.
    """

    def __init__(self, message: str, variable: str | None = None) -> None:
        super().__init__(message)
        self.variable = variable
