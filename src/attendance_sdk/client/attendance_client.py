"""
Attendance client
High-level entry point: bootstraps a session and exposes the business calls
"""

import time
from datetime import date
from typing import Any, Callable, Optional, Sequence, Union

from attendance_sdk.client.bootstrap import AuthenticatedClients, SessionBootstrap
from attendance_sdk.client.http_client import HttpClient, QueryValue, ResponseResult
from attendance_sdk.client.session import Session
from attendance_sdk.config.client_config import ClientConfig
from attendance_sdk.exceptions import ApiError
from attendance_sdk.models.report import ActivityAttendanceReportRequest
from attendance_sdk.utils.logger import configure_logging


ATTENDANCE_INFO_PATH = "classroom/getAllAttendanceInfo"
ACTIVITIES_PATH = "activity/getAllActivities"
ACTIVITY_ATTENDANCE_REPORT_PATH = "v2/Reports/ActivityAttendanceReport"


class AttendanceClient:
    """
    Authenticated client for a single user

    Construction performs the whole login choreography; a failed
    bootstrap raises BootstrapError and no client is returned.

    Example:
        >>> config = ConfigLoader().load()
        >>> with AttendanceClient(config) as client:
        ...     activities = client.get_activities()
    """

    def __init__(
        self,
        config: ClientConfig,
        sleep: Callable[[float], None] = time.sleep,
        client_factory: Callable[..., HttpClient] = HttpClient,
    ) -> None:
        self.config = config
        if config.debug:
            configure_logging(debug=True)

        self._clients: AuthenticatedClients = SessionBootstrap(
            config, sleep=sleep, client_factory=client_factory
        ).run()

    @property
    def directory(self) -> HttpClient:
        return self._clients.directory

    @property
    def tenant(self) -> HttpClient:
        return self._clients.tenant

    @property
    def session(self) -> Session:
        return self._clients.session

    def _unwrap(self, result: ResponseResult, operation: str) -> Any:
        if result.status_code != 200:
            raise ApiError(
                f"{operation} failed with HTTP {result.status_code}",
                status_code=result.status_code,
                body=result.body,
            )
        return result.body

    def get_attendance_info(self, **query: QueryValue) -> Any:
        """Current attendance status for the tenant"""
        result = self.tenant.get(ATTENDANCE_INFO_PATH, query=query)
        return self._unwrap(result, "Attendance info")

    def get_activities(self, **query: QueryValue) -> Any:
        """All activities visible to the user"""
        result = self.tenant.get(ACTIVITIES_PATH, query=query)
        return self._unwrap(result, "Activity listing")

    def activity_attendance_report(
        self,
        activity_ids: Union[str, Sequence[Union[int, str]]],
        site_prefix: str,
        from_date: Union[date, str],
        to_date: Union[date, str],
        grade_ids: Union[str, Sequence[Union[int, str]]],
        school_code: Optional[str] = None,
    ) -> Any:
        """
        Generate the activity attendance report

        Args:
            activity_ids: Activity ids, joined with commas on the wire
            site_prefix: Site prefix
            from_date: Start of the reporting window
            to_date: End of the reporting window
            grade_ids: Grade ids, joined with commas on the wire
            school_code: Defaults to the session's school code

        Returns:
            Report payload
        """
        request = ActivityAttendanceReportRequest(
            activities=activity_ids,
            site_prefix=site_prefix,
            from_date=from_date,
            to_date=to_date,
            grades=grade_ids,
        )
        result = self.tenant.post(
            ACTIVITY_ATTENDANCE_REPORT_PATH,
            body=request.to_body(),
            query={"schoolCode": school_code or self.session.school_code},
        )
        return self._unwrap(result, "Activity attendance report")

    def close(self) -> None:
        """Close both HTTP clients"""
        self._clients.close()

    def __enter__(self) -> "AttendanceClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
