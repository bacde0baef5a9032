"""Exceptions raised by fuel engine services."""


class FuelEngineError(Exception):
    """Base class for service-level failures."""


class ProfileNotFoundError(FuelEngineError):
    """Raised when a user has no synced profile."""

    def __init__(self, token_identifier: str) -> None:
        super().__init__("User not found. Sync profile first.")
        self.token_identifier = token_identifier


class MissingBiometricsError(FuelEngineError):
    """Raised when energy targets are requested without biometrics."""


class InvalidWeightError(FuelEngineError):
    """Raised for non-finite or non-positive bodyweight values."""


class AuthorizationError(FuelEngineError):
    """Raised when an operation lacks the required capability."""
