"""DummyNER service connector."""

from typing import Optional

import httpx

from ..config import settings
from .base import NERService

SERVICE_URL = "http://dummyner.freeyourmetadata.org/"
PROPERTY_NAMES = ["API user", "API key"]


class DummyNER(NERService):
    """Connector for the DummyNER test service."""

    def __init__(self, service_url: Optional[str] = None):
        super().__init__(service_url or settings.dummy_ner_url or SERVICE_URL, PROPERTY_NAMES)
        self.set_property("API user", "ABCDEFGHIJKL")
        self.set_property("API key", "KLMNOPQRSTUV")

    def _request_headers(self) -> dict[str, str]:
        return {"Content-Type": "text/plain; charset=utf-8"}

    def _create_request_body(self, text: str) -> bytes:
        return text.encode("utf-8")

    def _parse_response(self, response: httpx.Response) -> list[str]:
        # Body is a JSON array of entity names
        results = response.json()
        if not isinstance(results, list) or not all(isinstance(r, str) for r in results):
            raise ValueError("expected a JSON array of strings")
        return results
