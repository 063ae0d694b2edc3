"""Response envelope schemas.

Every response body written by httpwr is a top-level object carrying
``status`` plus either ``msg`` (and optionally ``data``) or ``error``:

    {"status": 200, "msg": "OK"}
    {"status": 200, "msg": "OK", "data": {...}}
    {"status": 404, "error": "user not found"}

The writers in responses.py build these inline and serialize them
immediately; nothing holds on to an envelope.
"""

from typing import Any

from pydantic import BaseModel

M = dict[str, Any]
"""Caller-supplied payload for the ``data`` field. Values must be JSON-serializable."""


class OKResponse(BaseModel):
    """Success envelope with a human-readable message."""

    status: int
    msg: str


class OKWithDataResponse(OKResponse):
    """Success envelope that also carries an arbitrary ``data`` document."""

    data: M | None


class ErrorResponse(BaseModel):
    """Error envelope written by the default error-handling policy."""

    status: int
    error: str
