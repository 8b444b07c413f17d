"""
Custom exception classes
Provides consistent error responses across the application
"""

from fastapi import HTTPException, status
from typing import Any, Dict, List, Optional

class AirdropException(HTTPException):
    """Base exception class for the airdrop application"""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code

    def extra_content(self) -> Dict[str, Any]:
        """Additional top-level fields merged into the error envelope"""
        return {}

class ValidationException(AirdropException):
    """400 Bad Request with field-level details"""

    def __init__(
        self,
        detail: str = "Validation failed",
        details: Optional[List[Dict[str, Any]]] = None,
        error_code: str = "VALIDATION_ERROR"
    ):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code=error_code
        )
        self.details = details or []

    def extra_content(self) -> Dict[str, Any]:
        if self.details:
            return {"details": self.details}
        return {}

class NotFoundException(AirdropException):
    """404 Not Found"""

    def __init__(self, detail: str = "Not found", error_code: str = "NOT_FOUND"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code=error_code
        )

class ConflictException(AirdropException):
    """409 Conflict"""

    def __init__(
        self,
        detail: str,
        field: Optional[str] = None,
        registration: Optional[Dict[str, Any]] = None,
        error_code: str = "CONFLICT"
    ):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            error_code=error_code
        )
        self.field = field
        self.registration = registration

    def extra_content(self) -> Dict[str, Any]:
        content: Dict[str, Any] = {}
        if self.field:
            content["field"] = self.field
        if self.registration is not None:
            content["registration"] = self.registration
        return content

class RateLimitException(AirdropException):
    """429 Too Many Requests"""

    def __init__(
        self,
        detail: str = "Too many requests",
        error_code: str = "RATE_LIMIT_EXCEEDED",
        retry_after: Optional[int] = None,
        headers: Optional[Dict[str, Any]] = None,
    ):
        headers = dict(headers or {})
        if retry_after:
            headers["Retry-After"] = str(retry_after)

        super().__init__(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=detail,
            error_code=error_code,
            headers=headers
        )
        self.retry_after = retry_after

    def extra_content(self) -> Dict[str, Any]:
        return {
            "message": f"Rate limit exceeded. Try again in {self.retry_after} seconds.",
            "retryAfter": self.retry_after,
        }

class DatabaseException(AirdropException):
    """500 Internal Server Error caused by the data store"""

    def __init__(
        self,
        detail: str = "Database operation failed",
        error_code: str = "DATABASE_ERROR"
    ):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            error_code=error_code
        )

class ServiceUnavailableException(AirdropException):
    """503 Service Unavailable"""

    def __init__(
        self,
        detail: str = "Service temporarily unavailable",
        error_code: str = "SERVICE_UNAVAILABLE"
    ):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=detail,
            error_code=error_code
        )

# Business logic exceptions
class RegistrationNotFoundException(NotFoundException):
    """No registration exists for the wallet"""

    def __init__(self, detail: str = "Registration not found"):
        super().__init__(detail=detail, error_code="REGISTRATION_NOT_FOUND")

class DuplicateRegistrationException(ConflictException):
    """Wallet or email already registered"""

    MESSAGES = {
        "wallet_address": "Wallet address already registered",
        "email": "Email already registered",
    }

    def __init__(self, field: str, registration: Optional[Dict[str, Any]] = None):
        super().__init__(
            detail=self.MESSAGES.get(field, "Registration already exists"),
            field=field,
            registration=registration,
            error_code="DUPLICATE_REGISTRATION"
        )

class ReferralTrackingException(ValidationException):
    """Referral event could not be recorded"""

    def __init__(self, reason: str):
        super().__init__(
            detail="Failed to track referral",
            details=[{"field": "referral_code", "message": reason, "code": reason}],
            error_code="REFERRAL_TRACKING_FAILED"
        )
