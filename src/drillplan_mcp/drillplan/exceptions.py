"""Drill plan exceptions."""


class DrillPlanError(Exception):
    """Base exception for drill plan errors."""
    pass


class AuthenticationError(DrillPlanError):
    """Raised when signing in fails or no user is signed in."""
    pass


class APIError(DrillPlanError):
    """Raised when a Firebase REST call fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class TokenExpiredError(AuthenticationError):
    """Raised when the authentication token has expired."""
    pass


class UnknownDayError(DrillPlanError, ValueError):
    """Raised when a day name is not one of the six training days."""

    def __init__(self, day: str):
        super().__init__(f"Unknown training day: {day!r}")
        self.day = day


class StorageError(DrillPlanError):
    """Raised when the local save file cannot be written or read back."""
    pass
