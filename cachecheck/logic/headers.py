from typing import Dict, List, Optional

# Checked in order; the first one present is reported as the cache status
CACHE_STATUS_HEADERS = [
    "cache-status",
    "x-cache",
    "cf-cache-status",
    "x-cache-status",
    "akamai-cache-status",
    "x-proxy-cache",
    "x-drupal-cache",
]

CACHING_HEADERS = {
    "cache-control",
    "age",
    "expires",
    "last-modified",
    "etag",
    "vary",
    "pragma",
    "x-served-by",
    "x-cache-hits",
    "surrogate-control",
    *CACHE_STATUS_HEADERS,
}

SECURITY_HEADERS = {
    "strict-transport-security",
    "content-security-policy",
    "content-security-policy-report-only",
    "x-frame-options",
    "x-content-type-options",
    "referrer-policy",
    "permissions-policy",
    "x-xss-protection",
    "cross-origin-opener-policy",
    "cross-origin-resource-policy",
    "cross-origin-embedder-policy",
}

# Substring markers per CDN group; a header lands in the first group it matches
DEBUG_GROUPS = [
    ("fastly_debug", ["fastly", "surrogate-key"]),
    ("pantheon_debug", ["pantheon", "x-var", "x-req", "policy-doc", "pcontext"]),
    ("cloudfront_debug", ["x-amz-cf-", "cloudfront"]),
    ("cloudflare_debug", ["cf-"]),
]


def normalize_headers(raw: Optional[Dict[str, str]]) -> Dict[str, str]:
    """Lower-case header names so lookups are case-insensitive."""
    if not raw:
        return {}
    headers: Dict[str, str] = {}
    for key, value in raw.items():
        key = str(key).lower()
        if key in headers:
            headers[key] = f"{headers[key]}, {value}"
        else:
            headers[key] = str(value)
    return headers


def extract_cache_status(headers: Dict[str, str]) -> str:
    for name in CACHE_STATUS_HEADERS:
        if headers.get(name):
            return headers[name]
    return "unknown"


def group_headers(headers: Dict[str, str]) -> Dict[str, List[str]]:
    """
    Split headers into CDN debug groups, security headers and the rest.
    Caching headers are reported elsewhere and left out of "useful_headers".
    Each entry is a "name: value" line.
    """
    groups = {name: [] for name, _ in DEBUG_GROUPS}
    groups["security_headers"] = []
    groups["useful_headers"] = []

    for key, value in headers.items():
        line = f"{key}: {value}"
        if key in SECURITY_HEADERS:
            groups["security_headers"].append(line)
            continue
        for group, markers in DEBUG_GROUPS:
            if any(marker in key for marker in markers):
                groups[group].append(line)
                break
        else:
            if key not in CACHING_HEADERS:
                groups["useful_headers"].append(line)
    return groups


def guess_http_version(headers: Dict[str, str], transport_version: Optional[str] = None) -> Optional[str]:
    """
    Guess the protocol from header hints. An Alt-Svc advertisement only says
    what the server offers, so this is a best guess, not a negotiation result.
    """
    alt_svc = headers.get("alt-svc", "").lower()
    if "h3" in alt_svc:
        return "HTTP/3"
    if "h2" in alt_svc or "x-firefox-spdy" in headers:
        return "HTTP/2"
    return transport_version
