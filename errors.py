# src/errors.py
from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class UnauthorizedError(HTTPException):
    """The record exists but belongs to another user."""

    def __init__(self, detail: str = "Not allowed to access this resource"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class FeatureDisabledError(HTTPException):
    def __init__(self, detail: str = "Feature disabled in settings"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class ConflictError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ResourceExhaustedError(HTTPException):
    def __init__(self, detail: str = "No VPN locations available"):
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)


class PersistenceUnavailableError(HTTPException):
    def __init__(self, detail: str = "Database not available"):
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)


class UpstreamError(Exception):
    """The completion service failed or returned garbage."""
