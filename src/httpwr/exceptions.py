"""Status-carrying errors and chain-unwrapping helpers.

Handlers return (or raise) these to pick the status code of the error
response. The adapting combinator in handler.py classifies whatever comes
back and hands it to an error-handling policy, which writes the
{"status": ..., "error": "..."} envelope.
"""

from collections.abc import Iterator
from http import HTTPStatus
from typing import TypeVar, cast


class HTTPError(Exception):
    """An underlying error paired with the HTTP status it should produce.

    ``str(err)`` is the display text of the wrapped cause. The cause is also
    linked as ``__cause__`` so tracebacks and :func:`is_error` see it.
    """

    def __init__(self, status: int, cause: BaseException | None = None) -> None:
        self.status = status
        self.cause = cause
        super().__init__(status, cause)
        self.__cause__ = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return str(self.cause)
        try:
            return HTTPStatus(self.status).phrase
        except ValueError:
            return f"HTTP {self.status}"

    def __repr__(self) -> str:
        return f"HTTPError(status={self.status}, cause={self.cause!r})"

    def matches(self, other: object) -> bool:
        """Kind-level match: any HTTPError instance matches any other, payload ignored.

        A class target matches only when this error is an instance of it.
        Anything else is compared against the wrapped cause by
        :func:`is_error`, which keeps walking the chain.
        """
        if isinstance(other, HTTPError):
            return True
        return isinstance(other, type) and isinstance(self, other)


class InternalServerError(Exception):
    """Generic server-side failure, safe to show to clients."""

    def __init__(self, message: str = "internal server error") -> None:
        super().__init__(message)


class BadRequestError(Exception):
    def __init__(self, message: str = "bad request") -> None:
        super().__init__(message)


class UnauthorizedError(Exception):
    def __init__(self, message: str = "unauthorized") -> None:
        super().__init__(message)


class ForbiddenError(Exception):
    def __init__(self, message: str = "forbidden") -> None:
        super().__init__(message)


def wrap(status: int, err: BaseException | None) -> HTTPError | None:
    """Wrap ``err`` with ``status``.

    Returns None when ``err`` is None, so the result of a fallible call can be
    wrapped unconditionally::

        return wrap(400, validate(payload))
    """
    if err is None:
        return None
    return HTTPError(status, err)


def errorf(status: int, format: str, *args: object) -> HTTPError:
    """Build an error from a %-style format string and wrap it with ``status``.

    With no ``args`` the format string is used verbatim. Arguments that do not
    fit the format raise TypeError here, at the call site.
    """
    try:
        message = format % args if args else format
    except TypeError as exc:
        raise TypeError(
            f"errorf: format {format!r} does not match {len(args)} argument(s)"
        ) from exc
    return cast(HTTPError, wrap(status, Exception(message)))


def unwrap(err: BaseException | None) -> BaseException | None:
    """Return the error ``err`` wraps, or None."""
    if err is None:
        return None
    return err.__cause__


def _chain(err: BaseException) -> Iterator[BaseException]:
    seen: set[int] = set()
    current: BaseException | None = err
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = unwrap(current)


def is_error(err: BaseException | None, target: object) -> bool:
    """Report whether ``err`` or any error it wraps matches ``target``.

    ``target`` may be an error value (compared by identity, then ``==``) or an
    exception class (compared with ``isinstance``). Errors defining
    ``matches(target)`` get the final say for their own link.
    """
    if err is None or target is None:
        return err is target

    for link in _chain(err):
        if isinstance(target, type):
            if isinstance(link, target):
                return True
        elif link is target or link == target:
            return True
        if isinstance(link, HTTPError) and link.matches(target):
            return True
    return False


E = TypeVar("E", bound=BaseException)


def as_error(err: BaseException | None, kind: type[E]) -> E | None:
    """Return the outermost error in the chain of ``err`` that is a ``kind``."""
    if err is None:
        return None
    for link in _chain(err):
        if isinstance(link, kind):
            return link
    return None
