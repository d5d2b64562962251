"""
Authentication interceptor
Recovers from expired session tokens (401) and rate limiting (429)
"""

import logging
import time
from typing import Callable, Optional

from attendance_sdk.client.http_client import HttpClient, ResponseResult
from attendance_sdk.client.interceptors import FailureContext, InterceptorEntry
from attendance_sdk.client.session import TOKEN_HEADER, Session, login
from attendance_sdk.config.client_config import ConfigDefaults
from attendance_sdk.exceptions import AuthRefreshError


logger = logging.getLogger(__name__)

HTTP_UNAUTHORIZED = 401
HTTP_TOO_MANY_REQUESTS = 429

LoginFunction = Callable[[HttpClient, Session], str]


def parse_retry_after(value: Optional[str]) -> int:
    """Read Retry-After as whole seconds; missing or malformed counts as 0"""
    if value is None:
        return 0
    try:
        seconds = int(value.strip())
    except ValueError:
        return 0
    return max(seconds, 0)


class AuthInterceptor:
    """
    Error resolver for tenant requests

    - 401 on a request not yet retried: log in again with the stored
      session credentials, then re-issue the request once with the fresh
      ``Token`` header. A failed re-login leaves the 401 unresolved.
    - 429: wait ``Retry-After`` plus a safety margin, then re-issue the
      request. This happens on every 429, retried or not.

    The session is attached once bootstrap has established it; until then
    401s are left alone.
    """

    def __init__(
        self,
        session: Optional[Session] = None,
        rate_limit_margin: int = ConfigDefaults.RATE_LIMIT_MARGIN,
        sleep: Callable[[float], None] = time.sleep,
        login_function: LoginFunction = login,
    ) -> None:
        self.session = session
        self.rate_limit_margin = rate_limit_margin
        self._sleep = sleep
        self._login = login_function

    def as_entry(self) -> InterceptorEntry:
        """Register on the error path only"""
        return InterceptorEntry(on_error=self.on_error)

    def on_error(self, context: FailureContext) -> Optional[ResponseResult]:
        status = context.response.status_code

        if status == HTTP_UNAUTHORIZED and not context.request.retried:
            return self._refresh_and_retry(context)

        if status == HTTP_TOO_MANY_REQUESTS:
            return self._backoff_and_retry(context)

        return None

    def _refresh_and_retry(self, context: FailureContext) -> Optional[ResponseResult]:
        if self.session is None:
            return None

        try:
            token = self._login(context.client, self.session)
        except AuthRefreshError as e:
            logger.warning(f"Session refresh failed, keeping original 401: {e}")
            return None

        self.session.session_token = token
        context.client.update_default_headers({TOKEN_HEADER: token})
        logger.info("Session token refreshed, retrying request")

        headers = dict(context.request.headers)
        headers[TOKEN_HEADER] = token
        retry = context.request.copy_with(headers=headers, retried=True)
        return context.client.execute(retry)

    def _backoff_and_retry(self, context: FailureContext) -> ResponseResult:
        # Constant stack depth however long the 429 streak runs
        spec = context.request.copy_with()
        result = context.response
        attempts = 0

        while result.status_code == HTTP_TOO_MANY_REQUESTS:
            retry_after = parse_retry_after(result.header("Retry-After"))
            delay = retry_after + self.rate_limit_margin
            attempts += 1

            logger.warning(f"Rate limited, retrying in {delay}s (attempt {attempts})")
            self._sleep(delay)
            result = context.client.send(spec)

        return context.client.dispatch(spec, result)
