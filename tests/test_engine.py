import pytest
import asyncio
from unittest.mock import AsyncMock, MagicMock, patch
from cachecheck.engine import Engine, normalize_url
from cachecheck.logic.result import FetchResponse

class StubStrategy:
    def __init__(self, name, response=None, delay=0.0, error=None):
        self.name = name
        self.response = response
        self.delay = delay
        self.error = error
        self.calls = []

    async def fetch(self, client, url):
        self.calls.append(url)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.response

def ok(strategy="direct", status=200, headers=None):
    return FetchResponse(status=status, headers=headers or {"Cache-Control": "public, max-age=600"},
                         response_time=50, strategy=strategy)

def test_normalize_url():
    assert normalize_url("example.com") == "https://example.com"
    assert normalize_url("  http://example.com ") == "http://example.com"
    assert normalize_url("https://example.com/x") == "https://example.com/x"

@pytest.mark.asyncio
async def test_first_successful_strategy_wins():
    first = StubStrategy("direct", ok())
    second = StubStrategy("relay", ok("relay"))
    engine = Engine(strategies=[first, second])

    with patch('cachecheck.engine.HttpClient') as MockClient:
        MockClient.return_value.__aenter__.return_value = AsyncMock()
        results = await engine.run(["example.com"])

    assert len(results) == 1
    assert results[0].strategy == "direct"
    assert results[0].url == "https://example.com"
    assert first.calls == ["https://example.com"]
    assert second.calls == []
    assert engine.stats['fetched'] == 1

@pytest.mark.asyncio
async def test_falls_through_to_next_strategy():
    first = StubStrategy("direct", None)
    second = StubStrategy("relay", ok("relay"))
    engine = Engine(strategies=[first, second])

    with patch('cachecheck.engine.HttpClient') as MockClient:
        MockClient.return_value.__aenter__.return_value = AsyncMock()
        results = await engine.run(["https://example.com"])

    assert results[0].strategy == "relay"
    assert results[0].fetch_failed is False
    assert second.calls == ["https://example.com"]

@pytest.mark.asyncio
async def test_all_strategies_fail_gives_fallback():
    engine = Engine(strategies=[StubStrategy("direct"), StubStrategy("relay")])

    with patch('cachecheck.engine.HttpClient') as MockClient:
        MockClient.return_value.__aenter__.return_value = AsyncMock()
        results = await engine.run(["https://down.example"])

    result = results[0]
    assert result.fetch_failed is True
    assert result.status == 500
    assert result.score == 0
    assert engine.stats['failed'] == 1

@pytest.mark.asyncio
async def test_unexpected_error_gives_fallback():
    engine = Engine(strategies=[StubStrategy("direct", error=RuntimeError("boom"))])

    with patch('cachecheck.engine.HttpClient') as MockClient:
        MockClient.return_value.__aenter__.return_value = AsyncMock()
        results = await engine.run(["example.com"])

    assert results[0].fetch_failed is True
    assert results[0].url == "https://example.com"

@pytest.mark.asyncio
async def test_results_keep_input_order():
    class SlowFirst(StubStrategy):
        async def fetch(self, client, url):
            await asyncio.sleep(0.05 if "slow" in url else 0)
            return ok(headers={"Server": url})

    engine = Engine(strategies=[SlowFirst("direct")], concurrency=3)
    with patch('cachecheck.engine.HttpClient') as MockClient:
        MockClient.return_value.__aenter__.return_value = AsyncMock()
        results = await engine.run(["https://slow.example", "https://a.example", "https://b.example"])

    assert [r.url for r in results] == ["https://slow.example", "https://a.example", "https://b.example"]

@pytest.mark.asyncio
async def test_engine_concurrency():
    """
    Four checks of 0.1s each with two workers take about 0.2s.
    """
    engine = Engine(strategies=[StubStrategy("direct", ok(), delay=0.1)], concurrency=2)

    with patch('cachecheck.engine.HttpClient') as MockClient:
        MockClient.return_value.__aenter__.return_value = AsyncMock()
        start_time = asyncio.get_running_loop().time()
        await engine.run(["http://t1.com", "http://t2.com", "http://t3.com", "http://t4.com"])
        duration = asyncio.get_running_loop().time() - start_time

    assert duration >= 0.2
    assert duration < 0.35

@pytest.mark.asyncio
async def test_geo_lookup_fills_ip_fields():
    engine = Engine(strategies=[StubStrategy("direct", ok())], geo=True)

    with patch('cachecheck.engine.HttpClient') as MockClient, \
         patch('cachecheck.logic.geo.resolve_ip', AsyncMock(return_value="93.184.216.34")), \
         patch('cachecheck.logic.geo.lookup_geo', AsyncMock(return_value={
             "ip_location": "Norwell, Massachusetts, US", "ip_org": "AS15133 Edgecast"})):
        MockClient.return_value.__aenter__.return_value = AsyncMock()
        results = await engine.run(["example.com"])

    assert results[0].ip_address == "93.184.216.34"
    assert results[0].ip_location == "Norwell, Massachusetts, US"
    assert results[0].ip_org == "AS15133 Edgecast"

@pytest.mark.asyncio
async def test_geo_skipped_when_dns_fails():
    engine = Engine(strategies=[StubStrategy("direct", ok())], geo=True)
    lookup = AsyncMock()

    with patch('cachecheck.engine.HttpClient') as MockClient, \
         patch('cachecheck.logic.geo.resolve_ip', AsyncMock(return_value=None)), \
         patch('cachecheck.logic.geo.lookup_geo', lookup):
        MockClient.return_value.__aenter__.return_value = AsyncMock()
        results = await engine.run(["example.com"])

    assert results[0].ip_address is None
    lookup.assert_not_called()

@pytest.mark.asyncio
async def test_malformed_relay_headers_counted_once():
    bad = FetchResponse(status=200, headers=["not", "a", "mapping"], response_time=5, strategy="relay")
    engine = Engine(strategies=[StubStrategy("relay", bad)])

    with patch('cachecheck.engine.HttpClient') as MockClient:
        MockClient.return_value.__aenter__.return_value = AsyncMock()
        results = await engine.run(["example.com"])

    assert results[0].fetch_failed is True
    assert engine.stats['fetched'] == 0
    assert engine.stats['failed'] == 1

@pytest.mark.asyncio
async def test_geo_error_keeps_fetched_result():
    engine = Engine(strategies=[StubStrategy("direct", ok())], geo=True)

    with patch('cachecheck.engine.HttpClient') as MockClient, \
         patch('cachecheck.logic.geo.resolve_ip', AsyncMock(side_effect=UnicodeError("label empty or too long"))):
        MockClient.return_value.__aenter__.return_value = AsyncMock()
        results = await engine.run(["example.com"])

    result = results[0]
    assert result.fetch_failed is False
    assert result.strategy == "direct"
    assert result.score == 30
    assert result.ip_address is None
    assert result.ip_location is None
    assert result.ip_org is None
    assert engine.stats['fetched'] == 1
    assert engine.stats['failed'] == 0
