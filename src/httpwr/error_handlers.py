"""Render HTTPError raised from ordinary routes.

Fallible handlers wrapped with new()/new_f() never let an HTTPError
escape. Regular Starlette/FastAPI endpoints in the same app can still
``raise wrap(404, exc)``; install_error_handlers() makes those produce the
same envelope.
"""

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import Response

from httpwr.exceptions import HTTPError
from httpwr.handler import ErrorHandler, classify_error
from httpwr.logging import get_logger
from httpwr.responses import default_error_handler
from httpwr.writer import ResponseWriter

logger = get_logger(__name__)


def install_error_handlers(
    app: Starlette,
    error_handler: ErrorHandler = default_error_handler,
) -> None:
    async def _http_error_handler(request: Request, exc: Exception) -> Response:
        status, cause = classify_error(exc)
        logger.warning("http_error_raised", status=status, error=str(exc), path=request.url.path)
        w = ResponseWriter()
        error_handler(w, status, cause)
        return w.to_response()

    app.add_exception_handler(HTTPError, _http_error_handler)
