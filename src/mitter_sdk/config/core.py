import logging
import os

logger = logging.getLogger(__name__)

_DEFAULT_BASE_URL = "https://api.mitter.io"


class Core:
    def __init__(self, config: dict | None = None) -> None:
        api_cfg = (config or {}).get("mitter", {}).get("api", {})

        self.API_BASE_URL: str = str(
            api_cfg.get("base_url", os.getenv("MITTER_API_BASE_URL", _DEFAULT_BASE_URL))
        ).rstrip("/")
        self.APPLICATION_ID: str | None = api_cfg.get("application_id") or os.getenv("MITTER_APPLICATION_ID")
        self.REQUEST_TIMEOUT: float = float(api_cfg.get("request_timeout", os.getenv("MITTER_REQUEST_TIMEOUT", "30")))
        self.USER_AGENT: str = str(api_cfg.get("user_agent", os.getenv("MITTER_USER_AGENT", "mitter-sdk-python")))

        if not self.API_BASE_URL.startswith(("http://", "https://")):
            raise ValueError(f"Invalid MITTER_API_BASE_URL: {self.API_BASE_URL!r}")

        if not self.APPLICATION_ID:
            # Most endpoints still work with a user token; the header is simply omitted.
            logger.debug("No MITTER_APPLICATION_ID configured.")
