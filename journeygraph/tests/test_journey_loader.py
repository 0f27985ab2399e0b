"""Tests for loading journeys from the backend API."""

import httpx
import pytest

from journeygraph.errors import JourneyLoaderError
from journeygraph.scripts.generate_sample_journey import create_split_test
from journeygraph.sdk.journey_loader import JourneyLoader


def _loader(handler, token=None) -> JourneyLoader:
    return JourneyLoader(
        base_url="http://backend.test/api/",
        token=token,
        transport=httpx.MockTransport(handler),
    )


class TestJourneyLoader:
    """Test fetching, caching and error mapping."""

    def test_get(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=create_split_test())

        record = _loader(handler).get("sample-split-test")

        assert record.name == "Split Test"
        assert str(requests[0].url) == "http://backend.test/api/journeys/sample-split-test"
        assert "authorization" not in requests[0].headers

    def test_get_unwraps_data_envelope(self):
        loader = _loader(lambda request: httpx.Response(200, json={"data": create_split_test()}))
        assert len(loader.get("sample-split-test").nodes) == 5

    def test_bearer_token(self):
        seen = {}

        def handler(request):
            seen.update(request.headers)
            return httpx.Response(200, json=create_split_test())

        _loader(handler, token="secret").get("j1")
        assert seen["authorization"] == "Bearer secret"

    def test_cache(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json=create_split_test())

        loader = _loader(handler)
        first = loader.get("j1")
        second = loader.get("j1")
        assert second is first
        assert len(calls) == 1

        loader.clear_cache()
        loader.get("j1")
        assert len(calls) == 2

    def test_not_found(self):
        loader = _loader(lambda request: httpx.Response(404, json={"error": "nope"}))
        with pytest.raises(JourneyLoaderError, match="Journey not found: missing"):
            loader.get("missing")

    def test_server_error(self):
        loader = _loader(lambda request: httpx.Response(500))
        with pytest.raises(JourneyLoaderError, match="Backend returned 500"):
            loader.get("j1")

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(JourneyLoaderError, match="Failed to connect"):
            _loader(handler).get("j1")

    def test_malformed_payload(self):
        loader = _loader(lambda request: httpx.Response(200, json={"nodes": [{"id": "x"}]}))
        with pytest.raises(JourneyLoaderError, match="Malformed journey payload"):
            loader.get("j1")

    def test_get_graph(self):
        loader = _loader(lambda request: httpx.Response(200, json=create_split_test()))
        graph = loader.get_graph("sample-split-test")
        assert len(graph) == 5
        assert graph.successor_ids("split") == ["text-a", "wait-2h"]
