# tests/test_response.py
import pytest
from wish_merchant.api.exceptions import (
    InvalidParameterError, OrderAlreadyFulfilledError, ServiceResponseError,
    UnauthorizedReason, UnauthorizedRequestError, WishResponseError,
)
from wish_merchant.api.response import WishResponse, classify, classify_response, failure_for

@pytest.mark.parametrize("code, reason", [
    (4000, UnauthorizedReason.INVALID_ACCESS),
    (1015, UnauthorizedReason.TOKEN_EXPIRED),
    (1016, UnauthorizedReason.TOKEN_REVOKED),
])
def test_unauthorized_codes(code, reason):
    with pytest.raises(UnauthorizedRequestError) as exc_info:
        classify(code, {"x": 1})
    assert exc_info.value.reason is reason
    assert exc_info.value.code == code

def test_success_returns_payload():
    payload = [{"Product": {"id": "1"}}]
    assert classify(0, payload) is payload

@pytest.mark.parametrize("payload", [{}, [], None])
def test_empty_success_payloads(payload):
    assert classify(0, payload) == payload

def test_invalid_parameter():
    with pytest.raises(InvalidParameterError) as exc_info:
        classify(1000, None)
    assert exc_info.value.code == 1000
    assert not isinstance(exc_info.value, ServiceResponseError)

def test_order_already_fulfilled_is_distinct():
    error = failure_for(1002)
    assert isinstance(error, OrderAlreadyFulfilledError)
    assert error.kind == "order_already_fulfilled"
    assert not isinstance(error, ServiceResponseError)

@pytest.mark.parametrize("code", [1, 1001, 1003, 3000, 4001, 9999, -1])
def test_unknown_codes_keep_raw_code(code):
    with pytest.raises(ServiceResponseError) as exc_info:
        classify(code, {"a": 1})
    assert exc_info.value.code == code

def test_failure_for_success_is_none():
    assert failure_for(0) is None

def test_failure_for_does_not_raise():
    error = failure_for(1015, "expired")
    assert isinstance(error, UnauthorizedRequestError)
    assert error.message == "expired"

def test_default_messages():
    assert failure_for(4000).message == "Unauthorized access"
    assert failure_for(1016).message == "Access Token revoked"
    assert failure_for(77).message == "Unknown error"

def test_exactly_one_failure_kind_per_code():
    kinds = (UnauthorizedRequestError, InvalidParameterError, OrderAlreadyFulfilledError, ServiceResponseError)
    for code in (4000, 1015, 1016, 1000, 1002, 5):
        error = failure_for(code)
        assert sum(isinstance(error, kind) for kind in kinds) == 1

def test_classify_response_attaches_envelope():
    response = WishResponse(status_code=1000, message="bad id")
    with pytest.raises(WishResponseError) as exc_info:
        classify_response(response)
    assert exc_info.value.response is response
    assert exc_info.value.message == "bad id"
