from typing import Optional

class BaseCustomError(Exception):
    """Base exception class for custom errors"""
    def __init__(self, message: str, error_code: Optional[str] = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)

# Upstream failures

class DatabaseError(BaseCustomError):
    """Raised when record store operations fail"""
    def __init__(self, message: str):
        super().__init__(message, "DATABASE_ERROR")

class OCRProcessingError(BaseCustomError):
    """Raised when a receipt could not be processed"""
    def __init__(self, message: str):
        super().__init__(message, "OCR_PROCESSING_ERROR")

# Not found

class NotFoundError(BaseCustomError):
    """Raised when a record looked up by id or email does not exist"""
    def __init__(self, message: str, error_code: str = "NOT_FOUND"):
        super().__init__(message, error_code)

class UserNotFoundError(NotFoundError):
    def __init__(self, message: str):
        super().__init__(message, "USER_NOT_FOUND")

class ApprovalNotFoundError(NotFoundError):
    def __init__(self, message: str):
        super().__init__(message, "APPROVAL_NOT_FOUND")

# Validation failures

class ValidationError(BaseCustomError):
    """Raised when validation fails"""
    def __init__(self, message: str, error_code: str = "VALIDATION_ERROR"):
        super().__init__(message, error_code)

class UserAlreadyExistsError(ValidationError):
    """Raised when trying to create a user whose email is taken"""
    def __init__(self, message: str):
        super().__init__(message, "USER_ALREADY_EXISTS")

class AuthenticationError(ValidationError):
    """Raised when authentication fails"""
    def __init__(self, message: str):
        super().__init__(message, "AUTHENTICATION_ERROR")
