"""
Custom Exceptions - Application-specific error types
"""


class HabitTrackerException(Exception):
    """Base exception for all habit tracker errors"""
    pass


class HabitNotFoundError(HabitTrackerException):
    """Raised when a habit id is not in the working collection"""
    pass


class InvalidHabitDataError(HabitTrackerException):
    """Raised when habit data cannot be used as-is (e.g. a non-numeric remote id)"""
    pass


class RemoteServiceError(HabitTrackerException):
    """Raised when the remote habit service cannot be used"""
    pass


class RemoteTransportError(RemoteServiceError):
    """Raised on connection failures and timeouts"""
    pass


class RemoteStatusError(RemoteServiceError):
    """Raised when the remote service answers with a non-success status"""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(RemoteServiceError):
    """Raised when a response body is not JSON or has an unexpected shape"""
    pass


class LocalStorageError(HabitTrackerException):
    """Raised when the local store cannot be read, parsed or written"""
    pass
