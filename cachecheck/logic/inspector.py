from cachecheck.logic.headers import normalize_headers, extract_cache_status, group_headers, guess_http_version
from cachecheck.logic.result import FetchResponse, InspectionResult
from cachecheck.logic.scoring import calculate_caching_score
from cachecheck.logic.summary import (
    generate_summary,
    generate_suggestions,
    fallback_summary,
    FALLBACK_SUGGESTIONS,
)

def build_result(url: str, response: FetchResponse, now=None) -> InspectionResult:
    """
    Turn fetched headers into a scored, summarized result.
    """
    headers = normalize_headers(response.headers)

    server = headers.get("server") or "Unknown"
    cache_status = extract_cache_status(headers)
    cache_control = headers.get("cache-control", "")
    age = headers.get("age", "")
    expires = headers.get("expires", "")
    last_modified = headers.get("last-modified", "")
    etag = headers.get("etag", "")

    score = calculate_caching_score(cache_control, etag, last_modified, expires, cache_status, age, now=now)

    return InspectionResult(
        url=url,
        status=response.status,
        headers=headers,
        server=server,
        cache_status=cache_status,
        cache_control=cache_control,
        age=age,
        expires=expires,
        last_modified=last_modified,
        etag=etag,
        served_by=headers.get("x-served-by", ""),
        cache_hits=headers.get("x-cache-hits", ""),
        response_time=response.response_time,
        score=score,
        summary=generate_summary(server, score, response.response_time, cache_status),
        suggestions=generate_suggestions(cache_control, etag, last_modified, server, score, response.response_time),
        http_version=guess_http_version(headers, response.http_version),
        strategy=response.strategy,
        **group_headers(headers),
    )

def fallback_result(url: str) -> InspectionResult:
    """Placeholder returned when every fetch strategy failed."""
    return InspectionResult(
        url=url,
        status=500,
        headers={},
        summary=fallback_summary(url),
        suggestions=list(FALLBACK_SUGGESTIONS),
        fetch_failed=True,
    )
