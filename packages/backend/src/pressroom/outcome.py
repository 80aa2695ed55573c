"""Explicit success/failure values returned by the service layer.

Services never build HTTP responses and never raise for expected
failures (bad input, bad credentials, missing rows). They return
Ok(value) or a Failure, and the route hands failures to
pressroom.errors.render_failure, the one place that knows the wire
format.
"""

import enum
from dataclasses import dataclass, field
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class FailureKind(str, enum.Enum):
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    message: str
    fields: dict[str, list[str]] = field(default_factory=dict)


Outcome = Union[Ok[T], Failure]


INVALID_DATA = "The given data was invalid."
INVALID_CREDENTIALS = "These credentials do not match our records."
UNAUTHENTICATED = "Unauthenticated."
NOT_FOUND = "Resource not found"


def validation_failed(fields: dict[str, list[str]]) -> Failure:
    return Failure(FailureKind.VALIDATION, INVALID_DATA, fields)


def invalid_credentials() -> Failure:
    """The one failure login returns, whatever actually went wrong."""
    return Failure(FailureKind.AUTHENTICATION, INVALID_CREDENTIALS)


def unauthenticated() -> Failure:
    return Failure(FailureKind.AUTHENTICATION, UNAUTHENTICATED)


def not_found() -> Failure:
    return Failure(FailureKind.NOT_FOUND, NOT_FOUND)


class Rejected(Exception):
    """Carries a Failure out of a FastAPI dependency.

    Dependencies cannot return a response, so the request authenticator
    and route-model binding raise this instead; the app's exception
    handler passes the wrapped Failure to render_failure.
    """

    def __init__(self, failure: Failure):
        super().__init__(failure.message)
        self.failure = failure
