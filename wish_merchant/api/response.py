# wish_merchant/api/response.py
"""Request/response envelopes and the status code classifier.

The service wraps every answer in ``{"code": ..., "data": ..., "paging": ...}``.
``classify`` decides from ``code`` alone whether ``data`` is a result or which
failure to raise. Codes are checked in the order of ``STATUS_TABLE``.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

from wish_merchant.api.exceptions import (
    InvalidParameterError,
    OrderAlreadyFulfilledError,
    ServiceResponseError,
    UnauthorizedReason,
    UnauthorizedRequestError,
    WishResponseError,
)

SUCCESS = 0


@dataclass(frozen=True)
class WishRequest:
    """A single call: HTTP method, endpoint path and its own parameters."""
    method: str
    path: str
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class WishResponse:
    """Decoded response envelope."""
    status_code: int
    data: Any = None
    has_more: bool = False
    message: str = ""
    request: Optional[WishRequest] = None


def _unauthorized(reason: UnauthorizedReason, default: str) -> Callable[..., WishResponseError]:
    def build(code: int, message: str, response) -> WishResponseError:
        return UnauthorizedRequestError(code, reason, message or default, response)
    return build


# Ordered: the first matching code wins.
STATUS_TABLE: Tuple[Tuple[int, Callable[..., WishResponseError]], ...] = (
    (4000, _unauthorized(UnauthorizedReason.INVALID_ACCESS, "Unauthorized access")),
    (1015, _unauthorized(UnauthorizedReason.TOKEN_EXPIRED, "Access Token expired")),
    (1016, _unauthorized(UnauthorizedReason.TOKEN_REVOKED, "Access Token revoked")),
    (1000, InvalidParameterError),
    (1002, OrderAlreadyFulfilledError),
)


def failure_for(status_code: int, message: str = "", response=None) -> Optional[WishResponseError]:
    """Build the failure for a status code, or None when the code means success."""
    if status_code == SUCCESS:
        return None
    for code, build in STATUS_TABLE:
        if status_code == code:
            return build(status_code, message, response)
    return ServiceResponseError(status_code, message, response)


def classify(status_code: int, data: Any, message: str = "", response=None) -> Any:
    """Return ``data`` for a successful code, raise the matching failure otherwise.

    Empty payloads (``None``, ``{}``, ``[]``) are valid successes.

    Raises:
        WishResponseError: Subclass chosen by ``failure_for``.
    """
    failure = failure_for(status_code, message, response)
    if failure is not None:
        raise failure
    return data


def classify_response(response: WishResponse) -> Any:
    """Classify a whole envelope, attaching it to any failure raised."""
    return classify(response.status_code, response.data, response.message, response)
