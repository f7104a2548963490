"""Registry resolving change type tags to change classes."""

import logging

from .base import Change
from .change import NERChange
from .errors import MalformedRecord

logger = logging.getLogger(__name__)


class ChangeRegistry:
    """Maps stable change type tags to the classes that load them."""

    def __init__(self):
        self._types: dict[str, type[Change]] = {}

    def register(self, change_class: type[Change]) -> type[Change]:
        """
        Register a change class under its change_type tag.

        Can be used as a class decorator.
        """
        tag = change_class.change_type
        existing = self._types.get(tag)
        if existing is not None and existing is not change_class:
            raise ValueError(
                f"Change type {tag!r} is already registered to {existing.__name__}"
            )
        self._types[tag] = change_class
        logger.debug(f"Registered change type {tag!r}: {change_class.__name__}")
        return change_class

    def load(self, change_type: str, line: str) -> Change:
        """
        Reconstruct a change from its type tag and saved line.

        Raises:
            MalformedRecord: If the tag is unknown or the line is invalid
        """
        change_class = self._types.get(change_type)
        if change_class is None:
            raise MalformedRecord(f"Unknown change type: {change_type!r}")
        return change_class.load(line)

    def types(self) -> list[str]:
        return sorted(self._types)

    def __contains__(self, change_type: str) -> bool:
        return change_type in self._types


default_registry = ChangeRegistry()
default_registry.register(NERChange)
