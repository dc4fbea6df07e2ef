# wish_merchant/config/settings.py
from dotenv import load_dotenv
import os

load_dotenv()

SESSION_HOSTS = {
    "prod": "https://merchant.wish.com/api/v2/",
    "sandbox": "https://sandbox.merchant.wish.com/api/v2/",
}

class Settings:
    """SDK configuration read from the environment."""
    WISH_ACCESS_TOKEN: str = os.getenv("WISH_ACCESS_TOKEN")
    WISH_SESSION_TYPE: str = os.getenv("WISH_SESSION_TYPE", "prod")
    WISH_MERCHANT_ID: str = os.getenv("WISH_MERCHANT_ID")
    WISH_TIMEOUT: float = float(os.getenv("WISH_TIMEOUT", 30))
    WISH_MAX_ATTEMPTS: int = int(os.getenv("WISH_MAX_ATTEMPTS", 3))

    def validate(self) -> None:
        """Validate that the configured values can build a client."""
        if not self.WISH_ACCESS_TOKEN:
            raise ValueError("Environment variable WISH_ACCESS_TOKEN is not set!")
        if self.WISH_SESSION_TYPE not in SESSION_HOSTS:
            raise ValueError(f"Unknown WISH_SESSION_TYPE: {self.WISH_SESSION_TYPE}")
        if self.WISH_TIMEOUT <= 0:
            raise ValueError("WISH_TIMEOUT must be positive!")
        if self.WISH_MAX_ATTEMPTS < 1:
            raise ValueError("WISH_MAX_ATTEMPTS must be at least 1!")

settings = Settings()
