"""Exception classes for the attendance SDK"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(str, Enum):
    """Error category codes"""
    API = "API"
    AUTH = "AUTH"
    NETWORK = "NET"
    BOOTSTRAP = "BOOT"
    VALIDATION = "VAL"
    CONFIG = "CONFIG"
    UNKNOWN = "UNKNOWN"


class AttendanceError(Exception):
    """
    Base exception for SDK errors

    All errors raised by the SDK extend from this class.
    Provides consistent error handling and categorization.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.status_code = status_code
        self.details = details
        self.timestamp = datetime.now(timezone.utc)
        self.category = self._determine_category(code)

    def _determine_category(self, code: Optional[str]) -> ErrorCategory:
        """Determine error category from code"""
        if not code:
            return ErrorCategory.UNKNOWN

        for category in ErrorCategory:
            if category is not ErrorCategory.UNKNOWN and code.startswith(category.value):
                return category

        return ErrorCategory.UNKNOWN

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary"""
        return {
            "name": self.__class__.__name__,
            "message": str(self),
            "code": self.code,
            "status_code": self.status_code,
            "category": self.category.value,
            "timestamp": self.timestamp.isoformat(),
            "details": self.details,
        }

    def has_code(self, code: str) -> bool:
        """Check if error has a specific code"""
        return self.code == code

    def is_category(self, category: ErrorCategory) -> bool:
        """Check if error belongs to a category"""
        return self.category == category

    def get_description(self) -> str:
        """Get human-readable error description"""
        parts = [str(self)]

        if self.code:
            parts.insert(0, f"[{self.code}]")

        if self.status_code:
            parts.append(f"(HTTP {self.status_code})")

        return " ".join(parts)


class ValidationError(AttendanceError):
    """Validation error"""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code="VALIDATION_ERROR", details=details)
        self.field = field


class ConfigError(AttendanceError):
    """Configuration error"""

    def __init__(
        self,
        message: str,
        code: str = "CONFIG01",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code=code, details=details)


class TransportError(AttendanceError):
    """
    Failure below the HTTP layer (DNS, refused connection, TLS, timeout)

    Never retried by the client; always propagates to the caller.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        network_code: str = "NET10",
    ) -> None:
        super().__init__(message, code=network_code, status_code=status_code)
        self.network_code = network_code

    @classmethod
    def timeout(cls, message: str = "Request timed out") -> "TransportError":
        """Create a timeout error"""
        return cls(message, status_code=408, network_code="NET01")

    @classmethod
    def connection_refused(
        cls, message: str = "Connection refused"
    ) -> "TransportError":
        """Create a connection refused error"""
        return cls(message, network_code="NET02")

    @classmethod
    def ssl_error(cls, message: str = "SSL/TLS error") -> "TransportError":
        """Create an SSL error"""
        return cls(message, network_code="NET04")


class ApiError(AttendanceError):
    """Non-200 response that no interceptor resolved"""

    def __init__(
        self,
        message: str,
        status_code: int,
        body: Any = None,
    ) -> None:
        super().__init__(
            message,
            code=f"API{status_code}",
            status_code=status_code,
            details={"body": body},
        )
        self.body = body


class AuthRefreshError(AttendanceError):
    """Login (initial or refresh) did not yield a session token"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message, code="AUTH01", status_code=status_code, details=details
        )


class BootstrapError(AttendanceError):
    """A session bootstrap step failed; no client was produced"""

    def __init__(
        self,
        message: str,
        step: str,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(
            message,
            code="BOOT01",
            status_code=status_code,
            details={"step": step},
        )
        self.step = step
