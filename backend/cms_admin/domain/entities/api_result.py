"""Tagged result type returned by every remote API call."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from cms_admin.domain.exceptions import ResourceApiError

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Why a remote call failed."""

    NETWORK = "network"
    HTTP_STATUS = "http_status"
    APPLICATION = "application"
    DECODE = "decode"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class ApiError:
    """A normalized failure from the remote API."""

    kind: ErrorKind
    message: str
    status_code: int | None = None


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    """Either ``data`` (ok) or ``error`` — never both.

    Built only through ``ApiResult.success`` / ``ApiResult.failure``.
    """

    data: T | None = None
    error: ApiError | None = None
    message: str | None = None

    @classmethod
    def success(cls, data: Any = None, message: str | None = None) -> "ApiResult[Any]":
        return cls(data=data, error=None, message=message)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        status_code: int | None = None,
    ) -> "ApiResult[Any]":
        return cls(data=None, error=ApiError(kind=kind, message=message, status_code=status_code))

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self, resource: str = "resource") -> T:
        """Return the data or raise ResourceApiError."""
        if self.error is not None:
            raise ResourceApiError(resource, self.error)
        return self.data  # type: ignore[return-value]
