"""
Tenant session state and the login procedure

The same login call serves the initial bootstrap and every token refresh.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Union

from attendance_sdk.client.http_client import HttpClient, ResponseResult
from attendance_sdk.exceptions import AuthRefreshError


logger = logging.getLogger(__name__)

TOKEN_HEADER = "Token"
LOGIN_PATH = "User/Login"


@dataclass
class Session:
    """
    Authenticated tenant identity

    Lives only as long as the process holding the client. Not thread safe:
    ``session_token`` is replaced in place on refresh.
    """
    school_code: str
    user_type: Union[int, str]
    user_id: Union[int, str]
    password_hash: str = field(repr=False)
    session_token: Optional[str] = field(default=None, repr=False)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.session_token)

    def login_query(self) -> dict:
        return {
            "schoolCode": self.school_code,
            "userType": self.user_type,
            "userId": self.user_id,
            "password": self.password_hash,
        }


def extract_session_token(result: ResponseResult) -> Optional[str]:
    """
    Pull the opaque token out of a login response

    The service answers with either a JSON string or bare text. Bare text
    that happens to parse as a JSON number or boolean is still the token,
    so anything other than a string, object, array or null is read back
    from the raw body.
    """
    body = result.body
    if isinstance(body, str):
        token = body.strip()
    elif isinstance(body, dict) and "rawText" in body:
        token = result.raw_text.strip()
    elif body is None or isinstance(body, (dict, list)):
        return None
    else:
        token = result.raw_text.strip()
    return token or None


def login(client: HttpClient, session: Session) -> str:
    """
    Obtain a session token for ``session`` from the tenant service

    The request is flagged as already retried so that a 401 from the
    login endpoint never triggers another refresh.

    Raises:
        AuthRefreshError: Non-200 answer or no usable token
        TransportError: The request never produced an HTTP response
    """
    result = client.post(LOGIN_PATH, query=session.login_query(), retried=True)

    if result.status_code != 200:
        raise AuthRefreshError(
            f"Login rejected with HTTP {result.status_code}",
            status_code=result.status_code,
            details={"body": result.body},
        )

    token = extract_session_token(result)
    if token is None:
        raise AuthRefreshError(
            "Login response did not contain a session token",
            status_code=result.status_code,
        )

    logger.debug(f"Obtained session token for user {session.user_id}")
    return token
