"""
Interceptor chain
Ordered outcome handlers attached to an HttpClient at construction time
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterable, Iterator, Optional, Tuple

if TYPE_CHECKING:
    from attendance_sdk.client.http_client import (
        HttpClient,
        RequestSpec,
        ResponseResult,
    )


@dataclass(frozen=True)
class FailureContext:
    """
    A non-200 outcome offered to error handlers

    ``client`` is the client that executed ``request``; handlers use it to
    re-issue the call and must not keep it beyond the handler invocation.
    """
    request: "RequestSpec"
    response: "ResponseResult"
    client: "HttpClient"


# Success handlers observe; error handlers may return a replacement result
SuccessHandler = Callable[["ResponseResult"], None]
ErrorHandler = Callable[[FailureContext], Optional["ResponseResult"]]


@dataclass(frozen=True)
class InterceptorEntry:
    """Optional success and error slots of one interceptor"""
    on_success: Optional[SuccessHandler] = None
    on_error: Optional[ErrorHandler] = None


class InterceptorChain:
    """
    Immutable, ordered collection of interceptor entries

    Every success handler runs, in registration order. Error handlers run
    in registration order until one returns a replacement result.
    """

    def __init__(self, entries: Iterable[InterceptorEntry] = ()) -> None:
        self._entries: Tuple[InterceptorEntry, ...] = tuple(entries)

    def __iter__(self) -> Iterator[InterceptorEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def notify_success(self, result: "ResponseResult") -> None:
        """Run every success handler"""
        for entry in self._entries:
            if entry.on_success is not None:
                entry.on_success(result)

    def resolve_error(self, context: FailureContext) -> Optional["ResponseResult"]:
        """Run error handlers until the first one produces a replacement"""
        for entry in self._entries:
            if entry.on_error is None:
                continue
            replacement = entry.on_error(context)
            if replacement is not None:
                return replacement
        return None


class LoggingInterceptor:
    """Reports request outcomes through a logger without resolving anything"""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger(__name__)

    def on_success(self, result: "ResponseResult") -> None:
        self._logger.debug(
            f"Request {result.request_id} succeeded in {result.duration}ms"
        )

    def on_error(self, context: FailureContext) -> None:
        self._logger.info(
            f"{context.request.method.value} {context.request.path} failed with "
            f"HTTP {context.response.status_code} (retried={context.request.retried})"
        )
        return None

    def as_entry(self) -> InterceptorEntry:
        return InterceptorEntry(on_success=self.on_success, on_error=self.on_error)
