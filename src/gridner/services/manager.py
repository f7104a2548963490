"""Registry of available named-entity recognition services."""

import logging

from .base import NERService
from .dummy import DummyNER

logger = logging.getLogger(__name__)


class ServiceManager:
    """Keeps the configured NER services by name."""

    def __init__(self):
        self._services: dict[str, NERService] = {}

    def register(self, name: str, service: NERService):
        self._services[name] = service
        logger.debug(f"Registered NER service {name!r}")

    def get(self, name: str) -> NERService:
        if name not in self._services:
            raise KeyError(f"Unknown NER service: {name}")
        return self._services[name]

    def has(self, name: str) -> bool:
        return name in self._services

    def names(self) -> list[str]:
        return list(self._services)


def default_manager() -> ServiceManager:
    """Create a manager with the built-in services."""
    manager = ServiceManager()
    manager.register("DummyNER", DummyNER())
    return manager
