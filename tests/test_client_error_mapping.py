import httpx
import pytest

from nodit_mcp.config import NoditConfig
from nodit_mcp.nodit_api.client import (
    MalformedResponseError,
    MissingApiKeyError,
    NoditApiClient,
    RequestTimeoutError,
    TransportError,
    UpstreamError,
)


class MockResponse:
    def __init__(self, status_code: int, text: str):
        self.status_code = status_code
        self.text = text


class MockAsyncClient:
    def __init__(self, responses=None, exc=None):
        self.responses = list(responses or [])
        self.exc = exc
        self.calls = []

    async def request(self, method, url, headers=None, json=None, **kwargs):
        self.calls.append({"method": method, "url": url, "headers": headers, "json": json, **kwargs})
        if self.exc is not None:
            raise self.exc
        if not self.responses:
            raise RuntimeError("No mock responses")
        return self.responses.pop(0)

    async def aclose(self):
        return None


def _client(mock, api_key="test-key"):
    return NoditApiClient(NoditConfig(api_key=api_key), async_client=mock)


@pytest.mark.asyncio
async def test_success_returns_raw_text_and_sends_headers():
    mock = MockAsyncClient([MockResponse(200, '{"result": "0x1"}')])
    client = _client(mock)
    text = await client.request("post", "https://ethereum-mainnet.nodit.io/", json_body={"id": 1})
    assert text == '{"result": "0x1"}'
    call = mock.calls[0]
    assert call["method"] == "POST"
    assert call["json"] == {"id": 1}
    assert call["headers"]["X-API-KEY"] == "test-key"
    assert call["headers"]["Accept"] == "application/json"
    assert call["headers"]["Content-Type"] == "application/json"
    assert call["headers"]["User-Agent"] == "nodit-mcp-server"


@pytest.mark.asyncio
async def test_post_without_body_sends_empty_object():
    mock = MockAsyncClient([MockResponse(200, "{}")])
    await _client(mock).request("POST", "https://example")
    assert mock.calls[0]["json"] == {}


@pytest.mark.asyncio
async def test_get_sends_no_body():
    mock = MockAsyncClient([MockResponse(200, "[]")])
    await _client(mock).request("get", "https://example", json_body={"ignored": True})
    assert mock.calls[0]["method"] == "GET"
    assert mock.calls[0]["json"] is None


@pytest.mark.asyncio
async def test_missing_api_key_raises_before_sending():
    mock = MockAsyncClient([MockResponse(200, "{}")])
    with pytest.raises(MissingApiKeyError) as excinfo:
        await _client(mock, api_key=None).request("POST", "https://example")
    assert "NODIT_API_KEY" in str(excinfo.value)
    assert mock.calls == []


@pytest.mark.asyncio
async def test_upstream_status_maps_to_upstream_error():
    mock = MockAsyncClient([MockResponse(429, '{"message": "Too many requests"}')])
    with pytest.raises(UpstreamError) as excinfo:
        await _client(mock).request("POST", "https://example")
    assert excinfo.value.status_code == 429
    assert excinfo.value.body == '{"message": "Too many requests"}'


@pytest.mark.asyncio
async def test_non_json_success_maps_to_malformed():
    mock = MockAsyncClient([MockResponse(200, "<html>ok</html>")])
    with pytest.raises(MalformedResponseError) as excinfo:
        await _client(mock).request("POST", "https://example")
    assert excinfo.value.body == "<html>ok</html>"


@pytest.mark.asyncio
async def test_timeout_maps_to_timeout_error():
    mock = MockAsyncClient(exc=httpx.ReadTimeout("timed out"))
    with pytest.raises(RequestTimeoutError):
        await _client(mock).request("POST", "https://example")


@pytest.mark.asyncio
async def test_connection_failure_maps_to_transport_error():
    mock = MockAsyncClient(exc=httpx.ConnectError("connection refused"))
    with pytest.raises(TransportError) as excinfo:
        await _client(mock).request("POST", "https://example")
    assert "connection refused" in str(excinfo.value)


@pytest.mark.asyncio
async def test_aclose_leaves_injected_client_open():
    mock = MockAsyncClient()
    client = _client(mock)
    await client.aclose()
    assert client._client is mock
