from __future__ import annotations

from typing import Any


class InterhookException(Exception):
    ...


class AuthenticationFailure(InterhookException):  # noqa: N818
    """request could not be authenticated; always answered with a 401"""


class HTTPException(InterhookException):
    status_code: int = 0

    def __init__(self, detail: Any | None = None) -> None:  # noqa: ANN401
        self.detail = detail
        super().__init__(detail)


class BadRequest(HTTPException):
    status_code: int = 400


class Unauthorized(HTTPException):
    status_code: int = 401


class Forbidden(HTTPException):
    status_code: int = 403


class NotFound(HTTPException):
    status_code: int = 404


class ServerError(HTTPException):
    status_code: int = 500
