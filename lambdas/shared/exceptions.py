"""Custom exceptions for the dice engine."""


class DiceEngineError(Exception):
    """Base exception for all dice engine errors."""

    def __init__(self, message: str = "An error occurred") -> None:
        """Initialize exception with message.

        Args:
            message: Error message
        """
        self.message = message
        super().__init__(self.message)


class ValidationError(DiceEngineError):
    """Dice expression failed validation.

    Always caller-fixable: an empty group list, or a dice count/side count
    outside the supported range.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize validation error.

        Args:
            message: Validation error message
            field: Optional field name that failed validation
        """
        self.field = field
        super().__init__(message)


class ResolutionError(DiceEngineError):
    """A character-derived modifier could not be resolved to a number."""

    def __init__(self, message: str, reason: str | None = None) -> None:
        """Initialize resolution error.

        Args:
            message: User-facing error message
            reason: Optional machine-readable cause (e.g. "no_character")
        """
        self.reason = reason
        super().__init__(message)


class ConfigurationError(DiceEngineError):
    """Configuration or environment error."""

    def __init__(self, message: str, config_key: str | None = None) -> None:
        """Initialize configuration error.

        Args:
            message: Error message
            config_key: Optional configuration key that caused the error
        """
        self.config_key = config_key
        super().__init__(message)
