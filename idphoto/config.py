import logging
import os

from pydantic import BaseModel, SecretStr

DEFAULT_MODEL = "gemini-2.5-flash-image"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseModel):
    api_key: SecretStr | None = None
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 120.0

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from the process environment (after load_dotenv)."""
        return cls(
            api_key=os.getenv("GOOGLE_API_KEY") or os.getenv("API_KEY") or None,
            model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
            base_url=os.getenv("GEMINI_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            timeout=float(os.getenv("GEMINI_TIMEOUT", "120")),
        )


def configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format=LOG_FORMAT,
    )
