"""Fallible handlers and the combinator that adapts them to Starlette.

A fallible handler receives a ResponseWriter and the request and returns
an error instead of writing one::

    @new_f
    async def get_user(w: ResponseWriter, request: Request) -> Exception | None:
        user = users.get(request.path_params["id"])
        if user is None:
            return errorf(404, "user %s not found", request.path_params["id"])
        return ok_with_data(w, 200, OK_MSG, {"user": user})

    app.add_route("/users/{id}", get_user)

The combinator is the only place an error becomes a response, so a handler
cannot report an error and then carry on writing a second response.
"""

import functools
import inspect
from collections.abc import Awaitable, Callable
from typing import Protocol, TypeAlias, runtime_checkable

from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import Response

from httpwr import config
from httpwr.exceptions import HTTPError, InternalServerError, as_error
from httpwr.logging import get_logger
from httpwr.responses import default_error_handler
from httpwr.writer import ResponseWriter

logger = get_logger(__name__)

HandlerResult: TypeAlias = Exception | None
HandlerFunction: TypeAlias = Callable[
    [ResponseWriter, Request], HandlerResult | Awaitable[HandlerResult]
]
ErrorHandler: TypeAlias = Callable[[ResponseWriter, int, BaseException], None]
Endpoint: TypeAlias = Callable[[Request], Awaitable[Response]]


@runtime_checkable
class Handler(Protocol):
    """Like a Starlette endpoint, but serving a request may return an error."""

    async def serve_http(self, w: ResponseWriter, request: Request) -> HandlerResult: ...


class HandlerFunc:
    """Adapts a plain function to the Handler protocol.

    Coroutine functions are awaited; regular functions run in Starlette's
    threadpool, the same way Starlette runs sync endpoints.
    """

    def __init__(self, fn: HandlerFunction) -> None:
        self.fn = fn
        functools.update_wrapper(self, fn)

    async def serve_http(self, w: ResponseWriter, request: Request) -> HandlerResult:
        if inspect.iscoroutinefunction(self.fn):
            return await self.fn(w, request)  # type: ignore[no-any-return]
        result = await run_in_threadpool(self.fn, w, request)
        if inspect.isawaitable(result):
            result = await result
        return result


def classify_error(err: BaseException) -> tuple[int, BaseException]:
    """Pick the status and the error to report for ``err``.

    The outermost HTTPError in the chain supplies both. Anything else is an
    unclassified error and gets the configured fallback status.
    """
    herr = as_error(err, HTTPError)
    if herr is not None:
        return herr.status, herr.cause if herr.cause is not None else herr

    settings = config.settings
    if settings.expose_unclassified_errors:
        return settings.unclassified_status, err
    return settings.unclassified_status, InternalServerError()


def _log_error(request: Request, err: BaseException, status: int) -> None:
    context = {"status": status, "path": request.url.path, "method": request.method}
    herr = as_error(err, HTTPError)
    if herr is None:
        logger.error("unclassified_handler_error", error=str(err), exc_info=err, **context)
    elif status >= 500:
        logger.error("handler_server_error", error=str(herr), **context)
    else:
        logger.warning("handler_error", error=str(herr), **context)


def new_with_handler(handler: Handler, eh: ErrorHandler) -> Endpoint:
    """Wrap a fallible handler into a Starlette endpoint.

    Errors returned or raised by ``handler`` are classified and passed to
    ``eh``, which writes the response. Anything the handler wrote before
    failing is discarded, so the error response is the only one sent.
    """

    async def endpoint(request: Request) -> Response:
        w = ResponseWriter()
        try:
            err = await handler.serve_http(w, request)
        except Exception as exc:
            err = exc

        if err is None:
            return w.to_response()
        if not isinstance(err, BaseException):
            err = TypeError(
                f"fallible handler must return an exception or None, got {type(err).__name__}"
            )

        status, cause = classify_error(err)
        _log_error(request, err, status)
        error_w = ResponseWriter()
        eh(error_w, status, cause)
        return error_w.to_response()

    endpoint.__name__ = getattr(handler, "__name__", type(handler).__name__)
    endpoint.__qualname__ = endpoint.__name__
    endpoint.__doc__ = getattr(handler, "__doc__", None)
    return endpoint


def new(handler: Handler) -> Endpoint:
    """Wrap a fallible handler, writing errors as JSON envelopes."""
    return new_with_handler(handler, default_error_handler)


def new_f_with_handler(fn: HandlerFunction, eh: ErrorHandler) -> Endpoint:
    """Wrap a fallible handler function with a custom error-handling policy."""
    return new_with_handler(HandlerFunc(fn), eh)


def new_f(fn: HandlerFunction) -> Endpoint:
    """Wrap a fallible handler function. Also usable as a decorator."""
    return new(HandlerFunc(fn))
