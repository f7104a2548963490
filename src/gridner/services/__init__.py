"""Named-entity recognition service connectors."""

from .base import NERService, ExtractionError
from .dummy import DummyNER
from .extraction import TermExtractor
from .manager import ServiceManager, default_manager

__all__ = [
    "NERService",
    "ExtractionError",
    "DummyNER",
    "ServiceManager",
    "default_manager",
    "TermExtractor",
]
