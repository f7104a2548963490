"""Base connector for named-entity recognition services."""

import logging
from abc import ABC, abstractmethod

import httpx

from ..config import settings

logger = logging.getLogger(__name__)


class ExtractionError(Exception):
    """Raised when a service fails to extract named entities."""
    pass


class NERService(ABC):
    """Abstract base class for HTTP named-entity recognition services."""

    def __init__(self, service_url: str, property_names: list[str]):
        self.service_url = service_url
        self._properties: dict[str, str] = {name: "" for name in property_names}

    @property
    def property_names(self) -> list[str]:
        return list(self._properties)

    @property
    def properties(self) -> dict[str, str]:
        return dict(self._properties)

    def get_property(self, name: str) -> str:
        return self._properties[name]

    def set_property(self, name: str, value: str):
        if name not in self._properties:
            raise KeyError(f"Unknown property for {type(self).__name__}: {name}")
        self._properties[name] = value

    def is_configured(self) -> bool:
        """Whether every property has a value."""
        return all(self._properties.values())

    def extract_named_entities(self, text: str) -> list[str]:
        """
        Extract named entities from a text.

        Args:
            text: The text to analyze

        Returns:
            The extracted entity names, in the order the service returned them

        Raises:
            ExtractionError: If the request fails or the response can't be parsed
        """
        if not text or not text.strip():
            return []

        try:
            with httpx.Client(timeout=settings.ner_request_timeout) as client:
                response = client.post(
                    self.service_url,
                    content=self._create_request_body(text),
                    headers=self._request_headers(),
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"{type(self).__name__} request failed: {e}")
            raise ExtractionError(f"Request to {self.service_url} failed: {e}") from e

        try:
            return self._parse_response(response)
        except ValueError as e:
            raise ExtractionError(
                f"Unexpected response from {self.service_url}: {e}"
            ) from e

    def _request_headers(self) -> dict[str, str]:
        return {}

    @abstractmethod
    def _create_request_body(self, text: str) -> bytes:
        """Create the request body for a text."""
        pass

    @abstractmethod
    def _parse_response(self, response: httpx.Response) -> list[str]:
        """Parse the entity names from a response."""
        pass
