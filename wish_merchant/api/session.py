# wish_merchant/api/session.py
import requests
from typing import Any, Dict, Optional
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential
from wish_merchant.api.base_client import Transport
from wish_merchant.api.response import WishRequest, WishResponse
from wish_merchant.config.settings import SESSION_HOSTS
from wish_merchant.utils.logging import logger

DEFAULT_TIMEOUT = 30

def encode_params(params: Dict[str, Any]) -> Dict[str, str]:
    """Flatten parameters into the string form the API expects.

    Lists are comma separated, booleans become "true"/"false" and None values
    are dropped.
    """
    encoded = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            encoded[key] = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            encoded[key] = ",".join(str(v) for v in value)
        else:
            encoded[key] = str(value)
    return encoded

class WishSession(Transport):
    """Authenticated HTTP transport for the Wish merchant API."""

    def __init__(self, access_token: str, session_type: str = "prod", merchant_id: Optional[str] = None,
                 timeout: float = DEFAULT_TIMEOUT, max_attempts: int = 3, retry_wait=None):
        """Initialize the session.

        Args:
            access_token (str): OAuth access token of the merchant.
            session_type (str): "prod" or "sandbox".
            merchant_id (Optional[str]): Merchant to act for, if the token spans several.
            timeout (float): Per-request timeout in seconds.
            max_attempts (int): Attempts for connection errors and timeouts.
            retry_wait: tenacity wait strategy between attempts.

        Raises:
            ValueError: If the session type is unknown.
        """
        if session_type not in SESSION_HOSTS:
            raise ValueError(f"Unknown session type: {session_type}")
        self.access_token = access_token
        self.session_type = session_type
        self.merchant_id = merchant_id
        self.base_url = SESSION_HOSTS[session_type]
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.retry_wait = retry_wait or wait_exponential(multiplier=1, min=4, max=10)
        self.headers = {"Accept": "application/json"}

    def execute(self, method: str, path: str, params: Optional[Dict[str, Any]] = None) -> WishResponse:
        """Send one request and decode its envelope.

        Returns:
            WishResponse: Envelope with the service status code, not yet classified.

        Raises:
            requests.RequestException: If the request fails after retries or the
                body is not a status envelope.
        """
        request = WishRequest(method.upper(), path, dict(params or {}))
        payload = encode_params(request.params)
        payload["access_token"] = self.access_token
        if self.merchant_id:
            payload["merchant_id"] = str(self.merchant_id)
        logger.debug(f"[{self.session_type}] {request.method} {path} with params: {encode_params(request.params)}")
        response = self._send(request.method, f"{self.base_url}{path}", payload)
        return self._decode(request, response)

    def _send(self, method: str, url: str, payload: Dict[str, str]) -> requests.Response:
        for attempt in Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=self.retry_wait,
            retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
            reraise=True,
        ):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.warning(f"[{self.session_type}] Retrying {method} {url} "
                                   f"(attempt {attempt.retry_state.attempt_number}/{self.max_attempts})")
                if method == "GET":
                    return requests.request(method, url, params=payload, headers=self.headers, timeout=self.timeout)
                return requests.request(method, url, data=payload, headers=self.headers, timeout=self.timeout)

    def _decode(self, request: WishRequest, response: requests.Response) -> WishResponse:
        try:
            body = response.json()
        except ValueError:
            logger.error(f"[{self.session_type}] Non-JSON body for {request.path}: HTTP {response.status_code}")
            response.raise_for_status()
            raise
        if not isinstance(body, dict) or "code" not in body:
            response.raise_for_status()
            raise requests.exceptions.InvalidJSONError(
                f"Response for {request.path} has no status code", response=response)
        paging = body.get("paging") or {}
        return WishResponse(
            status_code=int(body["code"]),
            data=body.get("data"),
            has_more=bool(paging.get("next")),
            message=body.get("message") or "",
            request=request,
        )
