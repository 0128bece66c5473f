from fastapi import HTTPException, status
import logging

logger = logging.getLogger(__name__)

class RuleConfigurationError(ValueError):
    """Raised when a validation rule is attached with missing or invalid options"""

class BaseAPIException(HTTPException):
    """Base exception class for API errors"""
    def __init__(self, detail: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        super().__init__(status_code=status_code, detail=detail)
        logger.error(f"{self.__class__.__name__}: {detail}")

class BadRequestException(BaseAPIException):
    """Bad request exceptions"""
    def __init__(self, detail: str):
        super().__init__(detail=detail, status_code=status.HTTP_400_BAD_REQUEST)

class ValidationException(BaseAPIException):
    """Data validation exceptions"""
    def __init__(self, detail: str):
        super().__init__(detail=f"Validation error: {detail}", status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)
