"""Errors raised by the layers that act on environment configuration."""

from typing import Optional, Sequence

from common.validation import ConfigViolation


class InvalidEnvironmentConfigError(ValueError):
    """Raised by the stack when a configuration fails validation.

    Attributes:
        violations: Every violation reported for the configuration
    """

    def __init__(self, violations: Sequence[ConfigViolation]) -> None:
        self.violations = tuple(violations)
        details = "; ".join(f"{v.field}: {v.message}" for v in self.violations)
        super().__init__(f"Invalid environment configuration: {details}")


class UnknownEnvironmentError(ValueError):
    """Raised when an environment has no default configuration."""

    def __init__(self, environment: Optional[str]) -> None:
        self.environment = environment
        super().__init__(
            f"No default configuration found for environment: {environment}"
        )
