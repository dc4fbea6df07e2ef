# wish_merchant/api/exceptions.py
from enum import Enum
from typing import Optional


class UnauthorizedReason(str, Enum):
    """Why the service refused the credentials."""
    INVALID_ACCESS = "invalid_access"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_REVOKED = "token_revoked"


class WishError(Exception):
    """Base class for every error raised by the SDK."""


class WishResponseError(WishError):
    """The service answered with a non-zero status code.

    Attributes:
        code (int): Status code from the response envelope.
        message (str): Message sent by the service, if any.
        response: The WishResponse that carried the code, when available.
    """

    default_message = "Unknown error"

    def __init__(self, code: int, message: str = "", response=None):
        self.code = code
        self.message = message or self.default_message
        self.response = response
        super().__init__(f"{self.message} (code {code})")


class UnauthorizedRequestError(WishResponseError):
    """Access token is invalid, expired or revoked."""

    def __init__(self, code: int, reason: UnauthorizedReason, message: str = "", response=None):
        self.reason = reason
        super().__init__(code, message, response)


class InvalidParameterError(WishResponseError):
    """The service rejected the request parameters."""

    default_message = "Invalid parameter"


class OrderAlreadyFulfilledError(WishResponseError):
    """The order was fulfilled before this request arrived."""

    default_message = "Order has been fulfilled"
    kind = "order_already_fulfilled"


class ServiceResponseError(WishResponseError):
    """Any other non-zero status code; `code` keeps the raw value."""


class ConversionError(WishError):
    """A raw record could not be turned into a model."""

    def __init__(self, model: str, record, detail: str):
        self.model = model
        self.record = record
        super().__init__(f"Cannot build {model}: {detail}")


class FetchCancelledError(WishError):
    """A paginated fetch was abandoned between pages."""

    def __init__(self, offset: int, fetched: int, path: Optional[str] = None):
        self.offset = offset
        self.fetched = fetched
        self.path = path
        super().__init__(f"Fetch cancelled at offset {offset} after {fetched} items")
