# wish_merchant/api/base_client.py
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from wish_merchant.api.response import WishResponse

class Transport(ABC):
    """Abstract base class for authenticated Wish API transports."""

    session_type: str = "prod"

    @abstractmethod
    def execute(self, method: str, path: str, params: Optional[Dict[str, Any]] = None) -> WishResponse:
        """Send one request and return the decoded response envelope."""
        pass
