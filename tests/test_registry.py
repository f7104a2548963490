"""Tests for the change type registry."""

import pytest

from gridner.ops import (
    Change,
    ChangeRegistry,
    MalformedRecord,
    NERChange,
    default_registry,
)


class RenameChange(Change):
    """Minimal change used to exercise registration."""

    change_type = "rename"

    def __init__(self, name: str):
        self.name = name

    def apply(self, grid):
        pass

    def revert(self, grid):
        pass

    def save(self) -> str:
        return self.name

    @classmethod
    def load(cls, line: str) -> "RenameChange":
        return cls(line)


class TestChangeRegistry:
    """Test resolving change types."""

    def test_default_registry_knows_ner_changes(self, city_change):
        """Test NER changes load through the default registry."""
        assert "ner" in default_registry

        loaded = default_registry.load("ner", city_change.save())

        assert isinstance(loaded, NERChange)
        assert loaded == city_change

    def test_unknown_type_raises(self):
        """Test an unknown tag is a format error."""
        with pytest.raises(MalformedRecord, match="Unknown change type"):
            default_registry.load("missing", "{}")

    def test_register_as_decorator(self):
        """Test registering a custom change class."""
        registry = ChangeRegistry()

        decorated = registry.register(RenameChange)

        assert decorated is RenameChange
        assert registry.types() == ["rename"]
        loaded = registry.load("rename", "new name")
        assert isinstance(loaded, RenameChange)
        assert loaded.name == "new name"

    def test_register_twice_is_idempotent(self):
        """Test registering the same class again is allowed."""
        registry = ChangeRegistry()
        registry.register(RenameChange)
        registry.register(RenameChange)

        assert registry.types() == ["rename"]

    def test_conflicting_registration_raises(self):
        """Test a tag cannot be taken by a second class."""
        registry = ChangeRegistry()
        registry.register(NERChange)

        class OtherChange(RenameChange):
            change_type = "ner"

        with pytest.raises(ValueError, match="already registered"):
            registry.register(OtherChange)

    def test_invalid_record_propagates_format_error(self):
        """Test the change's own format error reaches the caller."""
        with pytest.raises(MalformedRecord):
            default_registry.load("ner", '{"column": 1}')
