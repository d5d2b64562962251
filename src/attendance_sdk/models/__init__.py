"""Models module initialization"""

from attendance_sdk.models.directory import (
    RuntimeConfig,
    SchoolConnection,
    DirectoryUserInfo,
)
from attendance_sdk.models.user import UserIdentity
from attendance_sdk.models.report import ActivityAttendanceReportRequest

__all__ = [
    "RuntimeConfig",
    "SchoolConnection",
    "DirectoryUserInfo",
    "UserIdentity",
    "ActivityAttendanceReportRequest",
]
