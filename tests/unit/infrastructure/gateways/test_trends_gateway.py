from __future__ import annotations

from datetime import datetime, timezone

import httpx
import pytest

from fleetview.domain.entities.errors import TelemetryGatewayError
from fleetview.infrastructure.gateways.trends_gateway import TrendsGateway


class _StubResponse:
    def __init__(self, status_code: int, json_data=None):
        self.status_code = status_code
        self._json = json_data
        self.text = "error"

    def json(self):
        return self._json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            request = httpx.Request("GET", "http://trends")
            response = httpx.Response(self.status_code, request=request, text=self.text)
            raise httpx.HTTPStatusError("error", request=request, response=response)


class _StubAsyncClient:
    def __init__(self, response: _StubResponse):
        self._response = response
        self.requests: list[tuple] = []

    async def __aenter__(self) -> "_StubAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url, params=None):
        self.requests.append((url, params))
        return self._response


@pytest.mark.asyncio
async def test_get_latest(monkeypatch) -> None:
    client = _StubAsyncClient(_StubResponse(200, {"spd": 4, "volt": 48}))
    monkeypatch.setattr("httpx.AsyncClient", lambda timeout: client)

    data = await TrendsGateway("http://trends/api/").get_latest()

    assert data == {"spd": 4, "volt": 48}
    assert client.requests == [("http://trends/api/latest", None)]


@pytest.mark.asyncio
async def test_get_history_sends_range_and_tags(monkeypatch) -> None:
    payload = [{"time": "t0", "spd": 1}, "junk"]
    client = _StubAsyncClient(_StubResponse(200, payload))
    monkeypatch.setattr("httpx.AsyncClient", lambda timeout: client)

    start = datetime(2024, 5, 1, tzinfo=timezone.utc)
    end = datetime(2024, 5, 2, tzinfo=timezone.utc)
    records = await TrendsGateway("http://trends/api").get_history(
        start, end, ["Forklift1_Speed", "Forklift1_Voltage"], "1hr"
    )

    assert records == [{"time": "t0", "spd": 1}]
    url, params = client.requests[0]
    assert url == "http://trends/api/history"
    assert params == {
        "start": start.isoformat(),
        "end": end.isoformat(),
        "tags": "Forklift1_Speed,Forklift1_Voltage",
        "aggregation": "1hr",
    }


@pytest.mark.asyncio
async def test_unexpected_payload_shapes_raise(monkeypatch) -> None:
    monkeypatch.setattr(
        "httpx.AsyncClient",
        lambda timeout: _StubAsyncClient(_StubResponse(200, {"not": "a list"})),
    )
    gateway = TrendsGateway("http://trends/api")
    start = datetime(2024, 5, 1, tzinfo=timezone.utc)

    with pytest.raises(TelemetryGatewayError):
        await gateway.get_history(start, start, ["Forklift1_Speed"])


@pytest.mark.asyncio
async def test_http_error_is_wrapped(monkeypatch) -> None:
    monkeypatch.setattr(
        "httpx.AsyncClient",
        lambda timeout: _StubAsyncClient(_StubResponse(503)),
    )

    with pytest.raises(TelemetryGatewayError) as exc_info:
        await TrendsGateway("http://trends/api").get_latest()

    assert exc_info.value.details["status_code"] == 503
