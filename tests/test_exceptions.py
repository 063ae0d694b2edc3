"""Unit tests for status-carrying errors and the chain helpers."""

import pytest

from httpwr.exceptions import (
    BadRequestError,
    ForbiddenError,
    HTTPError,
    InternalServerError,
    UnauthorizedError,
    as_error,
    errorf,
    is_error,
    unwrap,
    wrap,
)

EOF = EOFError("EOF")
UNEXPECTED_EOF = EOFError("unexpected EOF")


# ---------------------------------------------------------------------------
# wrap / errorf
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("status", [200, 400, 404, 500])
def test_wrap_none_returns_none(status: int) -> None:
    assert wrap(status, None) is None


def test_wrap_error_carries_status_and_cause() -> None:
    cause = ValueError("errr")
    err = wrap(404, cause)

    assert isinstance(err, HTTPError)
    assert err.status == 404
    assert err.cause is cause
    assert err.__cause__ is cause


def test_str_is_cause_text() -> None:
    assert str(wrap(400, ValueError("data was wrong"))) == "data was wrong"


def test_str_without_cause_falls_back_to_reason_phrase() -> None:
    assert str(HTTPError(404)) == "Not Found"
    assert str(HTTPError(799)) == "HTTP 799"


def test_errorf_formats_message() -> None:
    err = errorf(409, "foo bar %d", 10)

    assert err.status == 409
    assert str(err) == "foo bar 10"


def test_errorf_without_args_keeps_format_verbatim() -> None:
    assert str(errorf(400, "100% wrong")) == "100% wrong"


def test_errorf_matches_equivalent_http_error() -> None:
    expected = HTTPError(409, Exception("foo bar 10"))
    assert is_error(errorf(409, "foo bar %d", 10), expected)


# ---------------------------------------------------------------------------
# is_error
# ---------------------------------------------------------------------------
def test_is_error_matches_any_http_error_instance() -> None:
    assert is_error(wrap(410, EOF), HTTPError(0))
    assert is_error(wrap(410, EOF), HTTPError(500, RuntimeError("unrelated")))


def test_is_error_matches_http_error_class() -> None:
    assert is_error(wrap(410, EOF), HTTPError)


def test_is_error_finds_wrapped_cause() -> None:
    assert is_error(wrap(410, EOF), EOF)


def test_is_error_rejects_unrelated_cause() -> None:
    assert not is_error(wrap(410, UNEXPECTED_EOF), EOF)


def test_is_error_walks_explicit_exception_chain() -> None:
    try:
        try:
            raise EOF
        except EOFError as exc:
            raise RuntimeError("read failed") from exc
    except RuntimeError as outer:
        err = wrap(502, outer)

    assert is_error(err, EOF)
    assert is_error(err, EOFError)
    assert is_error(err, RuntimeError)
    assert not is_error(err, KeyError)


def test_is_error_plain_error_does_not_match_http_error() -> None:
    assert not is_error(ValueError("plain"), HTTPError(400, ValueError("plain")))


def test_is_error_handles_none() -> None:
    assert is_error(None, None)
    assert not is_error(None, EOF)
    assert not is_error(EOF, None)


def test_is_error_terminates_on_cycles() -> None:
    first = RuntimeError("first")
    second = RuntimeError("second")
    first.__cause__ = second
    second.__cause__ = first

    assert not is_error(first, EOF)


# ---------------------------------------------------------------------------
# as_error / unwrap
# ---------------------------------------------------------------------------
def test_as_error_returns_outermost_match() -> None:
    inner = wrap(404, KeyError("user"))
    outer = wrap(400, inner)

    assert as_error(outer, HTTPError) is outer


def test_as_error_finds_http_error_behind_plain_error() -> None:
    herr = wrap(403, ForbiddenError())
    wrapper = RuntimeError("while checking access")
    wrapper.__cause__ = herr

    assert as_error(wrapper, HTTPError) is herr


def test_as_error_returns_none_without_match() -> None:
    assert as_error(ValueError("nope"), HTTPError) is None
    assert as_error(None, HTTPError) is None


def test_unwrap() -> None:
    cause = EOFError("EOF")
    assert unwrap(wrap(500, cause)) is cause
    assert unwrap(cause) is None
    assert unwrap(None) is None


# ---------------------------------------------------------------------------
# Sentinel kinds
# ---------------------------------------------------------------------------
@pytest.mark.parametrize(
    "kind, message",
    [
        (InternalServerError, "internal server error"),
        (BadRequestError, "bad request"),
        (UnauthorizedError, "unauthorized"),
        (ForbiddenError, "forbidden"),
    ],
)
def test_sentinel_default_messages(kind: type[Exception], message: str) -> None:
    assert str(kind()) == message
    assert is_error(wrap(418, kind()), kind)


def test_errorf_argument_mismatch_raises_type_error() -> None:
    with pytest.raises(TypeError, match="does not match 1 argument"):
        errorf(400, "no placeholder", 10)


# ---------------------------------------------------------------------------
# HTTPError subclasses as targets
# ---------------------------------------------------------------------------
class NotFound(HTTPError):
    def __init__(self, cause: BaseException | None = None) -> None:
        super().__init__(404, cause)


def test_subclass_target_requires_subclass_link() -> None:
    assert not is_error(wrap(400, ValueError("bad")), NotFound)
    assert is_error(NotFound(KeyError("user")), NotFound)
    assert is_error(NotFound(KeyError("user")), HTTPError)


def test_subclass_instance_target_is_kind_level() -> None:
    assert is_error(wrap(400, ValueError("bad")), NotFound())
