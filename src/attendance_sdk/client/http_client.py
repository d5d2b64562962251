"""
HTTP transport layer for the attendance SDK
Builds requests from client defaults plus per-call overrides, normalizes
responses, and hands outcomes to the interceptor chain
"""

import json
import time
import uuid
import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)
from urllib.parse import urlencode

import requests
from requests.adapters import HTTPAdapter

from attendance_sdk.client.interceptors import (
    FailureContext,
    InterceptorChain,
    InterceptorEntry,
)
from attendance_sdk.config.client_config import ConfigDefaults
from attendance_sdk.exceptions import TransportError


logger = logging.getLogger(__name__)


QueryValue = Union[str, int, Sequence[Union[str, int]]]
Query = Mapping[str, QueryValue]


class HttpMethod(str, Enum):
    """HTTP method types supported"""
    GET = "GET"
    POST = "POST"


@dataclass(frozen=True)
class RequestSpec:
    """
    A single logical request

    ``path`` never carries a query string; the client appends ``query``.
    Specs are not mutated between attempts: retries go through
    ``copy_with``.
    """
    method: HttpMethod
    path: str
    query: Dict[str, QueryValue] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Any] = None
    retried: bool = False

    def copy_with(self, **changes: Any) -> "RequestSpec":
        """Return a copy with fresh containers and the given overrides"""
        changes.setdefault("query", dict(self.query))
        changes.setdefault("headers", dict(self.headers))
        return replace(self, **changes)


@dataclass
class ClientDefaults:
    """Base URL and headers merged into every request of one client"""
    base_url: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass
class ResponseResult:
    """Normalized HTTP response"""
    status_code: int
    body: Any
    raw_text: str
    headers: Dict[str, str] = field(default_factory=dict)
    duration: int = 0  # milliseconds
    request_id: str = ""

    @property
    def ok(self) -> bool:
        return self.status_code == 200

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive response header lookup"""
        lower_name = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lower_name:
                return value
        return None


@dataclass
class HttpAuditEntry:
    """Audit log entry for HTTP requests"""
    timestamp: str
    request_id: str
    method: str
    url: str
    query: Dict[str, Any]
    headers: Dict[str, str]
    body: Optional[Any] = None
    status_code: Optional[int] = None
    duration: int = 0
    retried: bool = False
    error: Optional[str] = None


# Sensitive fields that should be redacted in logs
SENSITIVE_FIELDS = [
    "authorization",
    "token",
    "password",
    "appcode",
]


def strip_trailing_slash(value: str) -> str:
    return value.rstrip("/")


def strip_leading_slash(value: str) -> str:
    return value.lstrip("/")


def join_url(base_url: Optional[str], path: str) -> str:
    """Join base URL and path with exactly one slash between them"""
    if not base_url:
        return path
    return f"{strip_trailing_slash(base_url)}/{strip_leading_slash(path)}"


def flatten_query(query: Optional[Query]) -> List[Tuple[str, str]]:
    """
    Expand a query mapping into ordered key/value pairs

    Sequence values yield one pair per element, in order; keys keep the
    mapping's insertion order.
    """
    pairs: List[Tuple[str, str]] = []
    if not query:
        return pairs

    for key, value in query.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, str(item)) for item in value)
        else:
            pairs.append((key, str(value)))
    return pairs


def build_url(base_url: Optional[str], path: str, query: Optional[Query] = None) -> str:
    """Build the final request URL; the query is appended exactly once"""
    url = join_url(base_url, path)
    pairs = flatten_query(query)
    if not pairs:
        return url
    return f"{url}?{urlencode(pairs)}"


def merge_headers(
    defaults: Optional[Mapping[str, str]],
    overrides: Optional[Mapping[str, str]],
) -> Dict[str, str]:
    """Overlay call headers on default headers; the call wins on collision"""
    merged: Dict[str, str] = dict(defaults or {})
    if overrides:
        merged.update(overrides)
    return merged


def parse_body(status_code: int, raw_text: str) -> Any:
    """Parse a JSON body, synthesizing a fallback object when it is not JSON"""
    try:
        return json.loads(raw_text)
    except ValueError:
        return {"statusCode": status_code, "rawText": raw_text}


class HttpClient:
    """
    HTTP Client for the directory and tenant services

    Features:
    - Base URL and default headers owned by this instance
    - Ordered interceptors: success observers and error resolvers
    - Never raises on HTTP status codes or non-JSON bodies
    - Request ID generation for traceability
    - Optional audit logging with sensitive data redacted
    - Connection keep-alive via session pooling

    Example:
        >>> client = HttpClient(ClientDefaults(base_url="https://dir.test"))
        >>> result = client.get("findspruserinfo", query={"emailAddress": "a@b.com"})
        >>> print(result.status_code, result.body)
    """

    def __init__(
        self,
        defaults: Optional[ClientDefaults] = None,
        interceptors: Iterable[InterceptorEntry] = (),
        timeout: int = ConfigDefaults.TIMEOUT,
        enable_audit_log: bool = False,
    ) -> None:
        """
        Create a new HTTP client instance

        Args:
            defaults: Base URL and default headers for every request
            interceptors: Outcome handlers, fixed for the client's lifetime
            timeout: Request timeout in milliseconds
            enable_audit_log: Deliver audit entries to the audit callback
        """
        self.defaults = defaults or ClientDefaults()
        self.interceptors = InterceptorChain(interceptors)
        self.timeout = timeout
        self.enable_audit_log = enable_audit_log

        self._audit_log_callback: Optional[Callable[[HttpAuditEntry], None]] = None

        self._session = self._create_session()

    def _create_session(self) -> requests.Session:
        """Create requests session with connection pooling"""
        session = requests.Session()

        session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json",
        })

        # Retries are driven by interceptors, never by the adapter
        adapter = HTTPAdapter(
            pool_connections=10,
            pool_maxsize=10,
            max_retries=0,
        )

        session.mount("http://", adapter)
        session.mount("https://", adapter)

        return session

    def _generate_request_id(self) -> str:
        """Generate unique request ID for traceability"""
        timestamp = hex(int(time.time() * 1000))[2:]
        unique_id = uuid.uuid4().hex[:8]
        return f"att-{timestamp}-{unique_id}"

    def _redact_sensitive_data(self, obj: Any) -> Any:
        """Redact sensitive data from object for logging"""
        if isinstance(obj, list):
            return [self._redact_sensitive_data(item) for item in obj]

        if isinstance(obj, dict):
            redacted = {}
            for key, value in obj.items():
                lower_key = str(key).lower()
                if any(name in lower_key for name in SENSITIVE_FIELDS):
                    redacted[key] = "[REDACTED]"
                elif isinstance(value, (dict, list)):
                    redacted[key] = self._redact_sensitive_data(value)
                else:
                    redacted[key] = value
            return redacted

        return obj

    def _log_audit(
        self,
        spec: RequestSpec,
        headers: Dict[str, str],
        request_id: str,
        start_time: float,
        result: Optional[ResponseResult] = None,
        error: Optional[Exception] = None,
    ) -> None:
        """Build and deliver an audit entry when auditing is enabled"""
        if not (self.enable_audit_log and self._audit_log_callback):
            return

        entry = HttpAuditEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            request_id=request_id,
            method=spec.method.value,
            url=join_url(self.defaults.base_url, spec.path),
            query=self._redact_sensitive_data(dict(spec.query)),
            headers=self._redact_sensitive_data(headers),
            body=self._redact_sensitive_data(spec.body),
            status_code=result.status_code if result is not None else None,
            duration=int((time.time() - start_time) * 1000),
            retried=spec.retried,
            error=str(error) if error else None,
        )
        self._audit_log_callback(entry)

    def set_audit_log_callback(
        self, callback: Callable[[HttpAuditEntry], None]
    ) -> None:
        """Set audit log callback"""
        self._audit_log_callback = callback

    def update_default_headers(self, headers: Mapping[str, str]) -> None:
        """Add or override default headers, keeping the others"""
        self.defaults.headers.update(headers)

    def build_url(self, path: str, query: Optional[Query] = None) -> str:
        """Resolve a path and query against this client's base URL"""
        return build_url(self.defaults.base_url, path, query)

    def _normalize_transport_error(
        self, error: requests.exceptions.RequestException
    ) -> TransportError:
        """Map requests exceptions onto TransportError"""
        if isinstance(error, requests.exceptions.Timeout):
            return TransportError.timeout(f"Request timed out: {error}")

        if isinstance(error, requests.exceptions.SSLError):
            return TransportError.ssl_error(f"SSL/TLS error: {error}")

        if isinstance(error, requests.exceptions.ConnectionError):
            return TransportError.connection_refused(f"Connection error: {error}")

        return TransportError(f"Request error: {error}")

    def send(self, spec: RequestSpec) -> ResponseResult:
        """
        Perform one HTTP exchange without invoking interceptors

        Raises:
            TransportError: The request never produced an HTTP response
        """
        start_time = time.time()
        request_id = self._generate_request_id()

        url = self.build_url(spec.path, spec.query)
        headers = merge_headers(self.defaults.headers, spec.headers)
        data = json.dumps(spec.body) if spec.body is not None else None

        try:
            request = requests.Request(
                method=spec.method.value,
                url=url,
                headers=headers,
                data=data,
            )
            prepared = self._session.prepare_request(request)
            response = self._session.send(
                prepared,
                timeout=self.timeout / 1000.0,
            )
        except requests.exceptions.RequestException as e:
            self._log_audit(spec, headers, request_id, start_time, error=e)
            raise self._normalize_transport_error(e) from e

        raw_text = response.text or ""
        result = ResponseResult(
            status_code=response.status_code,
            body=parse_body(response.status_code, raw_text),
            raw_text=raw_text,
            headers=dict(response.headers),
            duration=int((time.time() - start_time) * 1000),
            request_id=request_id,
        )
        self._log_audit(spec, headers, request_id, start_time, result=result)
        return result

    def execute(self, spec: RequestSpec) -> ResponseResult:
        """
        Execute a request and run the interceptor chain on its outcome

        Status 200 notifies every success observer. Any other status is
        offered to the error resolvers; the first replacement result they
        return is what this call returns.

        Raises:
            TransportError: The request never produced an HTTP response
        """
        return self.dispatch(spec, self.send(spec))

    def dispatch(self, spec: RequestSpec, result: ResponseResult) -> ResponseResult:
        """
        Run the interceptor chain once on the outcome of ``spec``

        Returns ``result`` itself, or the replacement produced by the first
        error resolver that returns one.
        """
        if result.status_code == 200:
            self.interceptors.notify_success(result)
            return result

        logger.debug(
            f"{spec.method.value} {spec.path} returned {result.status_code} "
            f"(request {result.request_id})"
        )
        replacement = self.interceptors.resolve_error(
            FailureContext(request=spec, response=result, client=self)
        )
        if replacement is not None:
            return replacement
        return result

    def get(
        self,
        path: str,
        query: Optional[Query] = None,
        headers: Optional[Mapping[str, str]] = None,
        retried: bool = False,
    ) -> ResponseResult:
        """
        Perform GET request

        Args:
            path: Request path (relative to base URL)
            query: Query parameters
            headers: Per-call headers, overriding defaults

        Returns:
            Normalized response
        """
        return self.execute(RequestSpec(
            method=HttpMethod.GET,
            path=path,
            query=dict(query or {}),
            headers=dict(headers or {}),
            retried=retried,
        ))

    def post(
        self,
        path: str,
        body: Optional[Any] = None,
        query: Optional[Query] = None,
        headers: Optional[Mapping[str, str]] = None,
        retried: bool = False,
    ) -> ResponseResult:
        """
        Perform POST request

        Args:
            path: Request path (relative to base URL)
            body: JSON-serializable request body
            query: Query parameters
            headers: Per-call headers, overriding defaults

        Returns:
            Normalized response
        """
        return self.execute(RequestSpec(
            method=HttpMethod.POST,
            path=path,
            query=dict(query or {}),
            headers=dict(headers or {}),
            body=body,
            retried=retried,
        ))

    @property
    def base_url(self) -> Optional[str]:
        """Get base URL"""
        return self.defaults.base_url

    def close(self) -> None:
        """Close the HTTP session"""
        self._session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
