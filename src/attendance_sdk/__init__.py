"""
Attendance SDK for Python

Main entry point for the SDK
"""

from attendance_sdk.client import AttendanceClient
from attendance_sdk.exceptions import (
    AttendanceError,
    ErrorCategory,
    ValidationError,
    ConfigError,
    TransportError,
    ApiError,
    AuthRefreshError,
    BootstrapError,
)

# HTTP Client
from attendance_sdk.client import (
    HttpClient,
    HttpMethod,
    RequestSpec,
    ClientDefaults,
    ResponseResult,
    HttpAuditEntry,
    FailureContext,
    InterceptorChain,
    InterceptorEntry,
    LoggingInterceptor,
    AuthInterceptor,
    Session,
    SessionBootstrap,
    AuthenticatedClients,
)

# Configuration
from attendance_sdk.config import (
    ClientConfig,
    PartialClientConfig,
    ConfigLoader,
    ConfigValidator,
    DEFAULT_CONFIG_URL,
    ENV_VAR_MAPPING,
    ConfigDefaults,
)

# Models
from attendance_sdk.models import (
    RuntimeConfig,
    SchoolConnection,
    DirectoryUserInfo,
    UserIdentity,
    ActivityAttendanceReportRequest,
)

from attendance_sdk.crypto import hash_password
from attendance_sdk.utils import configure_logging

__version__ = "0.1.0"

__all__ = [
    # Client
    "AttendanceClient",
    # HTTP Client
    "HttpClient",
    "HttpMethod",
    "RequestSpec",
    "ClientDefaults",
    "ResponseResult",
    "HttpAuditEntry",
    "FailureContext",
    "InterceptorChain",
    "InterceptorEntry",
    "LoggingInterceptor",
    "AuthInterceptor",
    "Session",
    "SessionBootstrap",
    "AuthenticatedClients",
    # Exceptions
    "AttendanceError",
    "ErrorCategory",
    "ValidationError",
    "ConfigError",
    "TransportError",
    "ApiError",
    "AuthRefreshError",
    "BootstrapError",
    # Configuration
    "ClientConfig",
    "PartialClientConfig",
    "ConfigLoader",
    "ConfigValidator",
    "DEFAULT_CONFIG_URL",
    "ENV_VAR_MAPPING",
    "ConfigDefaults",
    # Models
    "RuntimeConfig",
    "SchoolConnection",
    "DirectoryUserInfo",
    "UserIdentity",
    "ActivityAttendanceReportRequest",
    # Utilities
    "hash_password",
    "configure_logging",
]
