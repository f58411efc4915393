"""Prometheus metrics tests."""

import pytest
from httpx import AsyncClient
from prometheus_client import REGISTRY

from shortener.exceptions import ShortCodeNotFoundError, ShortenError


def _sample(name: str, status: str) -> float:
    return REGISTRY.get_sample_value(name, {"status": status}) or 0.0


def _shorten_count(status: str) -> float:
    return _sample("url_shortener_shorten_requests_total", status)


def _lookup_count(status: str) -> float:
    return _sample("url_shortener_lookup_requests_total", status)


def test_service_counters_move_by_outcome(service, store) -> None:
    before = {s: _shorten_count(s) for s in ("success", "existing", "error")}
    before_not_found = _lookup_count("not_found")
    before_found = _lookup_count("success")

    code = service.shorten_url("https://example.com/metrics")
    service.shorten_url("https://example.com/metrics")
    service.get_long_url(code)
    with pytest.raises(ShortCodeNotFoundError):
        service.get_long_url("missing")

    # Counter value 2 is already taken, so the next save collides
    store.save("2", "https://example.com/taken")
    with pytest.raises(ShortenError):
        service.shorten_url("https://example.com/other")

    assert _shorten_count("success") - before["success"] == 1
    assert _shorten_count("existing") - before["existing"] == 1
    assert _shorten_count("error") - before["error"] == 1
    assert _lookup_count("success") - before_found == 1
    assert _lookup_count("not_found") - before_not_found == 1


@pytest.mark.asyncio
async def test_metrics_endpoint_exposes_service_counters(client: AsyncClient) -> None:
    await client.post("/shorten", json={"long_url": "https://example.com/exposed"})
    await client.get("/unknown", follow_redirects=False)

    response = await client.get("/metrics")

    assert response.status_code == 200
    assert 'url_shortener_shorten_requests_total{status="success"}' in response.text
    assert 'url_shortener_lookup_requests_total{status="not_found"}' in response.text
