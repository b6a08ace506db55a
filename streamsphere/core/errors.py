# streamsphere/core/errors.py
from typing import Optional, Dict
from fastapi import HTTPException, status


class ApiError(HTTPException):
    """
    Base for every error the API renders as ``{"error": ..., "code": ...}``.
    ``detail`` holds the human readable message.
    """
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(status_code=self.status_code, detail=message, headers=headers)
        self.code = code or self.default_code


class ValidationFailed(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "VALIDATION_ERROR"


class Conflict(ApiError):
    # informational, e.g. switching to the role already held
    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "CONFLICT"


class Unauthenticated(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_code = "UNAUTHORIZED"

    def __init__(self, message: str = "Authentication required", code: Optional[str] = None):
        super().__init__(message, code, headers={"WWW-Authenticate": "Bearer"})


class Forbidden(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    default_code = "FORBIDDEN"


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_code = "NOT_FOUND"


class UpstreamError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code = "UPSTREAM_ERROR"
