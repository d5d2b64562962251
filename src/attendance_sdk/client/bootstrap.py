"""
Session bootstrap
Turns user credentials into an authenticated directory client and
tenant client

Steps run strictly in order and are not resumable. Any failure closes
whatever was created and raises BootstrapError naming the step.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, List, Type, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from attendance_sdk.client.auth_interceptor import AuthInterceptor
from attendance_sdk.client.http_client import ClientDefaults, HttpClient, ResponseResult
from attendance_sdk.client.interceptors import InterceptorEntry, LoggingInterceptor
from attendance_sdk.client.session import TOKEN_HEADER, Session, login
from attendance_sdk.config.client_config import ClientConfig
from attendance_sdk.crypto.digest import hash_password
from attendance_sdk.exceptions import AttendanceError, BootstrapError
from attendance_sdk.models.directory import (
    DirectoryUserInfo,
    RuntimeConfig,
    SchoolConnection,
)
from attendance_sdk.models.user import UserIdentity


logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

DIRECTORY_LOOKUP_PATH = "findspruserinfo"
USER_LOOKUP_PATH = "User"


class BootstrapStep:
    """Names of the bootstrap steps, reported in BootstrapError.step"""
    RUNTIME_CONFIG = "runtime_config"
    DIRECTORY_LOOKUP = "directory_lookup"
    USER_LOOKUP = "user_lookup"
    LOGIN = "login"


@dataclass
class AuthenticatedClients:
    """Result of a successful bootstrap"""
    directory: HttpClient
    tenant: HttpClient
    session: Session
    connection: SchoolConnection

    def close(self) -> None:
        self.directory.close()
        self.tenant.close()


def _expect_ok(result: ResponseResult, step: str, what: str) -> Any:
    if result.status_code != 200:
        raise BootstrapError(
            f"{what} failed with HTTP {result.status_code}",
            step=step,
            status_code=result.status_code,
        )
    return result.body


def _first_record(body: Any, model: Type[M], step: str, what: str) -> M:
    if not isinstance(body, list) or not body:
        raise BootstrapError(f"{what} returned no records", step=step)
    return _parse(body[0], model, step, what)


def _parse(payload: Any, model: Type[M], step: str, what: str) -> M:
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        raise BootstrapError(f"{what} returned an unexpected payload: {e}", step=step) from e


class SessionBootstrap:
    """
    Ordered login choreography

    Example:
        >>> config = ClientConfig(
        ...     username="a@b.com",
        ...     password="secret",
        ...     config_url="https://config.district.test/runtime.json",
        ... )
        >>> clients = SessionBootstrap(config).run()
        >>> clients.tenant.get("activity/getAllActivities")
    """

    def __init__(
        self,
        config: ClientConfig,
        sleep: Callable[[float], None] = time.sleep,
        client_factory: Callable[..., HttpClient] = HttpClient,
    ) -> None:
        self.config = config
        self._sleep = sleep
        self._client_factory = client_factory

    def _new_client(
        self,
        defaults: ClientDefaults,
        interceptors: List[InterceptorEntry],
    ) -> HttpClient:
        return self._client_factory(
            defaults=defaults,
            interceptors=interceptors,
            timeout=self.config.timeout,
            enable_audit_log=self.config.enable_audit_log,
        )

    def _observers(self) -> List[InterceptorEntry]:
        if self.config.debug:
            return [LoggingInterceptor().as_entry()]
        return []

    def fetch_runtime_config(self) -> RuntimeConfig:
        """Step 1: read the directory base URL and bearer token"""
        if self.config.uses_placeholder_config_url:
            logger.warning(
                f"config_url is the placeholder {self.config.config_url}; "
                "set config_url or ATTENDANCE_CONFIG_URL for this deployment"
            )
        with self._new_client(ClientDefaults(), self._observers()) as client:
            result = client.get(self.config.config_url)
        body = _expect_ok(result, BootstrapStep.RUNTIME_CONFIG, "Runtime config fetch")
        return _parse(body, RuntimeConfig, BootstrapStep.RUNTIME_CONFIG, "Runtime config fetch")

    def create_directory_client(self, runtime: RuntimeConfig) -> HttpClient:
        """Step 2"""
        return self._new_client(
            ClientDefaults(
                base_url=runtime.default_home_base_url,
                headers={"Authorization": f"Bearer {runtime.auth_token}"},
            ),
            self._observers(),
        )

    def resolve_connection(self, directory: HttpClient) -> SchoolConnection:
        """Step 3: map the username to its tenant"""
        result = directory.get(
            DIRECTORY_LOOKUP_PATH,
            query={"emailAddress": self.config.username},
        )
        body = _expect_ok(result, BootstrapStep.DIRECTORY_LOOKUP, "Directory lookup")
        info = _first_record(
            body, DirectoryUserInfo, BootstrapStep.DIRECTORY_LOOKUP, "Directory lookup"
        )
        return info.school_connection

    def create_tenant_client(
        self,
        runtime: RuntimeConfig,
        connection: SchoolConnection,
        auth: AuthInterceptor,
    ) -> HttpClient:
        """Step 4: the tenant client resolves errors through ``auth``"""
        return self._new_client(
            ClientDefaults(
                base_url=self.config.tenant_base_url(connection.api_url),
                headers={
                    "Authorization": f"Bearer {runtime.auth_token}",
                    "Appcode": connection.app_code,
                },
            ),
            self._observers() + [auth.as_entry()],
        )

    def resolve_identity(
        self,
        tenant: HttpClient,
        connection: SchoolConnection,
        password_hash: str,
    ) -> UserIdentity:
        """Step 5: find the authenticating user's type and internal id"""
        result = tenant.get(
            USER_LOOKUP_PATH,
            query={
                "schoolCode": connection.app_code,
                "login": self.config.username,
                "password": password_hash,
            },
        )
        body = _expect_ok(result, BootstrapStep.USER_LOOKUP, "User lookup")
        return _first_record(body, UserIdentity, BootstrapStep.USER_LOOKUP, "User lookup")

    def run(self) -> AuthenticatedClients:
        """
        Execute all steps

        Returns:
            Directory client, tenant client (with ``Token`` default header)
            and the session backing token refresh

        Raises:
            BootstrapError: Any step failed; nothing is left open
        """
        created: List[HttpClient] = []
        step = BootstrapStep.RUNTIME_CONFIG
        try:
            runtime = self.fetch_runtime_config()

            step = BootstrapStep.DIRECTORY_LOOKUP
            directory = self.create_directory_client(runtime)
            created.append(directory)
            connection = self.resolve_connection(directory)

            step = BootstrapStep.USER_LOOKUP
            auth = AuthInterceptor(
                rate_limit_margin=self.config.rate_limit_margin,
                sleep=self._sleep,
            )
            tenant = self.create_tenant_client(runtime, connection, auth)
            created.append(tenant)
            password_hash = hash_password(self.config.password)
            identity = self.resolve_identity(tenant, connection, password_hash)

            step = BootstrapStep.LOGIN
            session = Session(
                school_code=connection.app_code,
                user_type=identity.user_type,
                user_id=identity.internal_id,
                password_hash=password_hash,
            )
            session.session_token = login(tenant, session)
            tenant.update_default_headers({TOKEN_HEADER: session.session_token})
            auth.session = session
        except BootstrapError:
            self._close_all(created)
            raise
        except AttendanceError as e:
            self._close_all(created)
            raise BootstrapError(
                f"Bootstrap failed at {step}: {e}",
                step=step,
                status_code=e.status_code,
            ) from e

        logger.info(
            f"Authenticated {self.config.username} against tenant {connection.app_code}"
        )
        return AuthenticatedClients(
            directory=directory,
            tenant=tenant,
            session=session,
            connection=connection,
        )

    @staticmethod
    def _close_all(clients: List[HttpClient]) -> None:
        for client in clients:
            client.close()
