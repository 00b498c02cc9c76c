"""Error taxonomy shared by the stores and the gateway."""


class EnrollmentError(Exception):
    """Base class for errors raised by the enrollment core."""


class ValidationError(EnrollmentError):
    """Required input is missing or malformed."""


class AuthError(EnrollmentError):
    """Login failed. The message never says which part was wrong."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class PersistenceError(EnrollmentError):
    """Reading or writing the database file failed."""
