from datetime import datetime, timezone
from cachecheck.logic.headers import (
    normalize_headers,
    extract_cache_status,
    group_headers,
    guess_http_version,
)
from cachecheck.logic.inspector import build_result, fallback_result
from cachecheck.logic.result import FetchResponse


def test_normalize_headers_lowercases_names():
    headers = normalize_headers({"Cache-Control": "max-age=60", "ETag": '"x"'})
    assert headers == {"cache-control": "max-age=60", "etag": '"x"'}
    assert normalize_headers(None) == {}


def test_cache_status_priority():
    assert extract_cache_status({"x-cache": "MISS", "cache-status": "edge; hit"}) == "edge; hit"
    assert extract_cache_status({"cf-cache-status": "HIT"}) == "HIT"
    assert extract_cache_status({"x-cache": "HIT, MISS", "cf-cache-status": "DYNAMIC"}) == "HIT, MISS"
    assert extract_cache_status({"server": "nginx"}) == "unknown"


def test_group_headers():
    headers = normalize_headers({
        "Fastly-Debug-Path": "(D cache-ams)",
        "Surrogate-Key": "page-1",
        "X-Pantheon-Styx-Hostname": "styx",
        "Policy-Doc-Cache": "HIT",
        "CF-Ray": "123-AMS",
        "X-Amz-Cf-Pop": "AMS50-C1",
        "Strict-Transport-Security": "max-age=31536000",
        "X-Powered-By": "PHP",
        "Cache-Control": "max-age=60",
        "Age": "3",
    })
    groups = group_headers(headers)

    assert groups["fastly_debug"] == ["fastly-debug-path: (D cache-ams)", "surrogate-key: page-1"]
    assert groups["pantheon_debug"] == ["x-pantheon-styx-hostname: styx", "policy-doc-cache: HIT"]
    assert groups["cloudflare_debug"] == ["cf-ray: 123-AMS"]
    assert groups["cloudfront_debug"] == ["x-amz-cf-pop: AMS50-C1"]
    assert groups["security_headers"] == ["strict-transport-security: max-age=31536000"]
    assert groups["useful_headers"] == ["x-powered-by: PHP"]


def test_guess_http_version():
    assert guess_http_version({"alt-svc": 'h3=":443"; ma=86400'}) == "HTTP/3"
    assert guess_http_version({"alt-svc": 'h2=":443"'}) == "HTTP/2"
    assert guess_http_version({"x-firefox-spdy": "h2"}) == "HTTP/2"
    assert guess_http_version({}, "HTTP/1.1") == "HTTP/1.1"
    assert guess_http_version({}) is None


def test_build_result_from_headers():
    response = FetchResponse(
        status=200,
        headers={
            "Server": "nginx",
            "Cache-Control": "public, max-age=3600",
            "ETag": '"abc"',
            "X-Cache": "HIT",
            "Age": "12",
            "X-Served-By": "cache-ams21",
            "X-Cache-Hits": "4",
        },
        response_time=35,
        strategy="direct",
        http_version="HTTP/1.1",
    )
    result = build_result("https://example.com", response, now=datetime(2024, 1, 1, tzinfo=timezone.utc))

    assert result.status == 200
    assert result.server == "nginx"
    assert result.cache_status == "HIT"
    assert result.cache_control == "public, max-age=3600"
    assert result.served_by == "cache-ams21"
    assert result.cache_hits == "4"
    # 10 + 5 + 10 + 5 (tier) + 10 (etag) + 10 (age) + 20 (hit)
    assert result.score == 70
    assert "decent caching configuration" in result.summary
    assert result.http_version == "HTTP/1.1"
    assert result.strategy == "direct"
    assert result.fetch_failed is False
    assert len(result.suggestions) <= 5
    assert result.headers["cache-control"] == "public, max-age=3600"


def test_build_result_defaults():
    result = build_result("https://example.com", FetchResponse(status=404, headers={}, response_time=400, strategy="relay"))
    assert result.server == "Unknown"
    assert result.cache_status == "unknown"
    assert result.age == ""
    assert result.score == 0
    assert result.http_version is None


def test_fallback_result():
    result = fallback_result("https://down.example")
    assert result.status == 500
    assert result.score == 0
    assert result.server == "Unknown"
    assert result.fetch_failed is True
    assert result.strategy == "fallback"
    assert "Unable to fetch HTTP headers for https://down.example" in result.summary
    assert result.suggestions[0] == "Unable to analyze headers due to connection error"
    assert result.to_dict()["fetch_failed"] is True


def test_normalize_headers_joins_case_variants():
    headers = normalize_headers({"Cache-Control": "public", "cache-control": "max-age=600"})
    assert headers == {"cache-control": "public, max-age=600"}
