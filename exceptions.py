"""Custom exceptions for Quote Builder."""


class QuoteBuilderError(Exception):
    """Base exception for all application errors."""
    def __init__(self, message="An internal error occurred", payload=None):
        super().__init__(message)
        self.message = message
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['message'] = self.message
        rv['status'] = 'error'
        return rv


class InvalidDataError(QuoteBuilderError):
    """Raised when imported or persisted data is unparsable or has the wrong shape."""
    def __init__(self, message="Invalid data", payload=None):
        super().__init__(message, payload)


class ValidationError(QuoteBuilderError):
    """Raised when an action is missing required input."""
    def __init__(self, message, payload=None):
        super().__init__(message, payload)


class NotFoundError(QuoteBuilderError):
    """Raised when a referenced record does not exist."""
    def __init__(self, message="Record not found", payload=None):
        super().__init__(message, payload)
