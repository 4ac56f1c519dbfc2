"""
Custom exceptions for the application
"""

class BaseAppException(Exception):
    """Base application exception"""
    status_code = 500

    def __init__(self, message: str, details: str = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


class ValidationError(BaseAppException):
    """Raised when a submission or its request body fails validation"""
    status_code = 400


class MethodError(BaseAppException):
    """Raised when an endpoint is called with an unsupported HTTP method"""
    status_code = 405

    def __init__(self, allowed: str, message: str = "method not allowed", details: str = None):
        super().__init__(message, details)
        self.allowed = allowed


class DuplicateError(BaseAppException):
    """Raised when an insert violates a uniqueness constraint"""
    status_code = 409


class StorageError(BaseAppException):
    """Raised when any other database operation fails"""
    status_code = 500
