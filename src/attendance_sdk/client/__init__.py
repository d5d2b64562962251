"""
HTTP Client module for the attendance SDK
"""

from attendance_sdk.client.http_client import (
    HttpClient,
    HttpMethod,
    RequestSpec,
    ClientDefaults,
    ResponseResult,
    HttpAuditEntry,
    build_url,
    merge_headers,
)
from attendance_sdk.client.interceptors import (
    FailureContext,
    InterceptorChain,
    InterceptorEntry,
    LoggingInterceptor,
)
from attendance_sdk.client.session import Session, login
from attendance_sdk.client.auth_interceptor import AuthInterceptor
from attendance_sdk.client.bootstrap import (
    AuthenticatedClients,
    BootstrapStep,
    SessionBootstrap,
)
from attendance_sdk.client.attendance_client import AttendanceClient

__all__ = [
    "AttendanceClient",
    "HttpClient",
    "HttpMethod",
    "RequestSpec",
    "ClientDefaults",
    "ResponseResult",
    "HttpAuditEntry",
    "build_url",
    "merge_headers",
    "FailureContext",
    "InterceptorChain",
    "InterceptorEntry",
    "LoggingInterceptor",
    "Session",
    "login",
    "AuthInterceptor",
    "AuthenticatedClients",
    "BootstrapStep",
    "SessionBootstrap",
]
