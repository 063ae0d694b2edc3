"""JSON response writers.

ok() and ok_with_data() write success envelopes and return None, so a
fallible handler can end with ``return ok(w, 201, CREATED_MSG)``.
default_error_handler() is the error-handling policy the combinator uses
unless told otherwise.

Encoding is best-effort: if the envelope cannot be serialized the status
and headers are still written, the body stays empty and the failure is
logged, never raised.
"""

from collections.abc import Callable

from pydantic import BaseModel

from httpwr.logging import get_logger
from httpwr.schemas.envelope import ErrorResponse, M, OKResponse, OKWithDataResponse
from httpwr.writer import ResponseWriter

logger = get_logger(__name__)

JSON_MEDIA_TYPE = "application/json"

CREATED_MSG = "Created"
OK_MSG = "OK"
INTERNAL_SERVER_ERROR_MSG = "Internal Server Error"
BAD_REQUEST_MSG = "Bad Request"


def _write_json(w: ResponseWriter, status: int, build: Callable[[], BaseModel]) -> None:
    w.headers["Content-Type"] = JSON_MEDIA_TYPE
    w.write_header(status)

    # ValidationError and PydanticSerializationError are both ValueErrors
    try:
        body = build().model_dump_json()
    except ValueError as exc:
        logger.warning("envelope_encode_failed", status=status, error=str(exc))
        return

    w.write(body.encode() + b"\n")


def ok(w: ResponseWriter, status: int, msg: str) -> None:
    """Write ``{"status": status, "msg": msg}`` with the given status."""
    _write_json(w, status, lambda: OKResponse(status=status, msg=msg))


def ok_with_data(w: ResponseWriter, status: int, msg: str, data: M | None) -> None:
    """Write ``{"status": status, "msg": msg, "data": data}`` with the given status."""
    _write_json(w, status, lambda: OKWithDataResponse(status=status, msg=msg, data=data))


def default_error_handler(w: ResponseWriter, status: int, err: BaseException) -> None:
    """Write ``{"status": status, "error": str(err)}`` with the given status."""
    _write_json(w, status, lambda: ErrorResponse(status=status, error=str(err)))
