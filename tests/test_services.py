"""Tests for NER service connectors and term extraction."""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from gridner.grid import Grid
from gridner.services import (
    DummyNER,
    ExtractionError,
    NERService,
    ServiceManager,
    TermExtractor,
    default_manager,
)
from gridner.services.dummy import SERVICE_URL


def _response(status_code: int = 200, **kwargs) -> httpx.Response:
    return httpx.Response(
        status_code, request=httpx.Request("POST", SERVICE_URL), **kwargs
    )


@pytest.fixture
def mock_http_client():
    """Patch httpx.Client and yield the client used inside the context manager."""
    with patch("gridner.services.base.httpx.Client") as client_class:
        client = MagicMock()
        client_class.return_value.__enter__.return_value = client
        yield client


class FakeNER(NERService):
    """Service returning canned results per text."""

    def __init__(self, results: dict[str, list[str]]):
        super().__init__("http://fake.invalid/", [])
        self.results = results
        self.calls: list[str] = []

    def extract_named_entities(self, text: str) -> list[str]:
        if not text:
            return []
        self.calls.append(text)
        return list(self.results.get(text, []))

    def _create_request_body(self, text: str) -> bytes:
        return b""

    def _parse_response(self, response: httpx.Response) -> list[str]:
        return []


class TestDummyNER:
    """Test the DummyNER connector."""

    def test_default_properties(self):
        """Test the connector comes configured."""
        service = DummyNER()

        assert service.service_url == SERVICE_URL
        assert service.property_names == ["API user", "API key"]
        assert service.get_property("API user") == "ABCDEFGHIJKL"
        assert service.is_configured()

    def test_set_unknown_property_raises(self):
        """Test only declared properties can be set."""
        service = DummyNER()

        with pytest.raises(KeyError):
            service.set_property("API secret", "x")

    def test_extract_named_entities(self, mock_http_client):
        """Test the text is posted as UTF-8 and the JSON array parsed."""
        mock_http_client.post.return_value = _response(json=["Paris", "Zürich"])

        result = DummyNER().extract_named_entities("Paris and Zürich")

        assert result == ["Paris", "Zürich"]
        _, kwargs = mock_http_client.post.call_args
        assert kwargs["content"] == "Paris and Zürich".encode("utf-8")

    def test_empty_text_skips_request(self, mock_http_client):
        """Test blank text returns no entities without a request."""
        assert DummyNER().extract_named_entities("   ") == []
        mock_http_client.post.assert_not_called()

    def test_http_error_raises_extraction_error(self, mock_http_client):
        """Test error statuses are reported as extraction errors."""
        mock_http_client.post.return_value = _response(500)

        with pytest.raises(ExtractionError, match="failed"):
            DummyNER().extract_named_entities("Paris")

    def test_connection_error_raises_extraction_error(self, mock_http_client):
        """Test transport failures are reported as extraction errors."""
        mock_http_client.post.side_effect = httpx.ConnectError("refused")

        with pytest.raises(ExtractionError):
            DummyNER().extract_named_entities("Paris")

    @pytest.mark.parametrize(
        "kwargs",
        [{"content": b"not json"}, {"json": {"entities": []}}, {"json": [1, 2]}],
    )
    def test_unexpected_response_raises(self, mock_http_client, kwargs):
        """Test bodies that are not arrays of strings are rejected."""
        mock_http_client.post.return_value = _response(**kwargs)

        with pytest.raises(ExtractionError, match="Unexpected response"):
            DummyNER().extract_named_entities("Paris")


class TestServiceManager:
    """Test the service registry."""

    def test_default_manager(self):
        """Test DummyNER is available by default."""
        manager = default_manager()

        assert manager.names() == ["DummyNER"]
        assert isinstance(manager.get("DummyNER"), DummyNER)

    def test_unknown_service_raises(self):
        """Test looking up a missing service."""
        manager = ServiceManager()

        assert not manager.has("Missing")
        with pytest.raises(KeyError):
            manager.get("Missing")


class TestTermExtractor:
    """Test building term tables and changes from a grid column."""

    @pytest.fixture
    def extractor(self) -> TermExtractor:
        manager = ServiceManager()
        manager.register(
            "A", FakeNER({"Paris and London": ["Paris", "London"], "Berlin": ["Berlin"]})
        )
        manager.register("B", FakeNER({"Berlin": ["Berlin", "Germany"]}))
        return TermExtractor(manager)

    def test_extract_terms(self, extractor, city_grid):
        """Test terms are collected per row and service."""
        terms = extractor.extract_terms(city_grid, "text", ["A", "B"])

        assert terms == [
            [["Paris", "London"], []],
            [["Berlin"], ["Berlin", "Germany"]],
        ]

    def test_empty_cells_yield_no_terms(self, extractor):
        """Test rows without text get empty lists without a request."""
        grid = Grid.from_rows(["text"], [[None], ["Berlin"]])

        terms = extractor.extract_terms(grid, "text", ["A"])

        assert terms == [[[]], [["Berlin"]]]
        assert extractor.manager.get("A").calls == ["Berlin"]

    def test_unknown_service_fails_before_requests(self, extractor, city_grid):
        """Test a missing service is reported before any text is sent."""
        with pytest.raises(KeyError):
            extractor.extract_terms(city_grid, "text", ["A", "Missing"])

        assert extractor.manager.get("A").calls == []

    def test_unknown_column_raises(self, extractor, city_grid):
        """Test a missing source column is reported."""
        with pytest.raises(KeyError):
            extractor.extract_terms(city_grid, "missing", ["A"])

    def test_build_change_places_columns_after_source(self, extractor, city_grid):
        """Test the change puts its columns right of the source column."""
        before = city_grid.snapshot()
        change = extractor.build_change(city_grid, "id", ["A"])
        assert change.column_index == 1

        change = extractor.build_change(city_grid, "text", ["A", "B"])
        change.apply(city_grid)

        assert city_grid.snapshot() == (
            ["id", "text", "A", "B"],
            [
                ["1", "Paris and London", "Paris", None],
                [None, None, "London", None],
                ["2", "Berlin", "Berlin", "Berlin"],
                [None, None, None, "Germany"],
            ],
        )

        change.revert(city_grid)
        assert city_grid.snapshot() == before
