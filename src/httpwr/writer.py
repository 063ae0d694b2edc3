"""Writable response target handed to fallible handlers.

A ResponseWriter buffers the status line, headers and body a handler
produces for one request; the adapting combinator turns it into a
Starlette Response once the handler (or the error-handling policy) is done.
"""

from starlette.datastructures import MutableHeaders
from starlette.responses import Response

from httpwr.logging import get_logger

logger = get_logger(__name__)

DEFAULT_STATUS = 200


class ResponseWriter:
    """Collects the response for a single request.

    Set headers first, then call write_header(), then write() the body.
    Writing the body without a status implies 200. Only the first status
    written counts.
    """

    def __init__(self) -> None:
        self.headers = MutableHeaders()
        self.status_code: int | None = None
        self._body = bytearray()

    @property
    def written(self) -> bool:
        """True once a status has been written."""
        return self.status_code is not None

    @property
    def body(self) -> bytes:
        return bytes(self._body)

    def write_header(self, status: int) -> None:
        if not 100 <= status <= 999:
            raise ValueError(f"invalid HTTP status code: {status}")
        if self.status_code is not None:
            logger.warning(
                "superfluous_write_header",
                status=status,
                written_status=self.status_code,
            )
            return
        self.status_code = status

    def write(self, data: bytes) -> int:
        if self.status_code is None:
            self.write_header(DEFAULT_STATUS)
        self._body.extend(data)
        return len(data)

    def to_response(self) -> Response:
        response = Response(
            content=bytes(self._body),
            status_code=self.status_code or DEFAULT_STATUS,
        )
        # Response computed content-length from the body; keep it authoritative
        response.raw_headers.extend(
            (key, value) for key, value in self.headers.raw if key != b"content-length"
        )
        return response
