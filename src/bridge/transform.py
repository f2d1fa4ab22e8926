"""
Client for the external payload transformation (encryption) service.
"""

import requests
import structlog

from .errors import TransformError

logger = structlog.get_logger(__name__, component="transform")

ENCRYPT_PATH = "encrypt"


class TransformClient:
    """Rewrites a payload string through POST <base_url>encrypt"""

    def __init__(self, base_url: str | None, timeout_seconds: float = 5.0):
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds
        self.session = requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

        if not base_url:
            logger.warning("Encryption enabled but API URL not set, messages will be dropped")

    @property
    def endpoint(self) -> str | None:
        if not self.base_url:
            return None
        return self.base_url + ENCRYPT_PATH

    def transform(self, text: str) -> str:
        """Send text to the service and return its result field

        Raises:
            TransformError: endpoint unset, transport error or timeout,
                non-200 status, or a body without a string "result".
        """
        if not self.endpoint:
            raise TransformError("Encryption enabled but API URL not set")

        try:
            response = self.session.post(
                self.endpoint, json={"text": text}, timeout=self.timeout_seconds
            )
        except requests.exceptions.Timeout as e:
            raise TransformError(f"Request timed out after {self.timeout_seconds}s") from e
        except requests.exceptions.RequestException as e:
            raise TransformError(f"Request failed: {e}") from e

        if response.status_code != 200:
            raise TransformError(f"Non-200 response: {response.status_code}")

        try:
            body = response.json()
        except ValueError as e:
            raise TransformError(f"Decode failed: {e}") from e

        result = body.get("result") if isinstance(body, dict) else None
        if not isinstance(result, str):
            raise TransformError("Decode failed: response has no string 'result' field")

        return result

    def close(self):
        self.session.close()
