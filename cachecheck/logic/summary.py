from typing import List
from cachecheck.logic.scoring import parse_max_age

MAX_SUGGESTIONS = 5

FALLBACK_SUGGESTIONS = [
    "Unable to analyze headers due to connection error",
    "Check if the URL is correct and accessible",
    "Try using the curl command directly on your terminal",
]

# Appended to every list; they only survive when fewer specific tips apply
GENERAL_SUGGESTIONS = [
    "Use HTTP/2 or HTTP/3 to improve connection efficiency and reduce latency.",
    "Consider implementing Brotli compression for better compression ratios than gzip.",
    "Implement content preloading with <link rel='preload'> for critical resources.",
]

SERVER_SUGGESTIONS = [
    ("apache", "Consider enabling mod_deflate for compression and mod_expires for better caching control."),
    ("nginx", "Ensure gzip compression is enabled in your Nginx configuration for text-based resources."),
    ("cloudflare", "Review your Cloudflare caching rules to optimize edge caching for static assets."),
]


def _is_hit(cache_status: str) -> bool:
    return bool(cache_status) and "hit" in cache_status.lower()


def generate_summary(server: str, score: int, response_time: int, cache_status: str) -> str:
    """Describe the caching configuration in one paragraph."""
    hit = _is_hit(cache_status)
    if score >= 80:
        detail = (
            f"The page was served from cache, resulting in a fast response time of {response_time}ms."
            if hit else
            "The page has proper cache headers, allowing browsers to store content locally."
        )
        return (f"This website is using {server} and has excellent caching configuration. {detail} "
                "Repeat visitors will experience faster page loads and reduced server load.")
    if score >= 50:
        detail = (
            f"The page was served from cache with a response time of {response_time}ms."
            if hit else
            "The page has some cache headers but could be optimized further."
        )
        return (f"This website is using {server} and has decent caching configuration. {detail} "
                "There's room for improvement to enhance user experience for repeat visitors.")
    return (f"This website is using {server} but has poor or missing caching configuration. "
            f"The page took {response_time}ms to load and wasn't properly cached. "
            "Implementing proper caching would significantly improve performance for repeat visitors "
            "and reduce server load.")


def fallback_summary(url: str) -> str:
    return (f"Unable to fetch HTTP headers for {url}. "
            "This could be due to CORS restrictions or the server not responding.")


def generate_suggestions(
    cache_control: str,
    etag: str,
    last_modified: str,
    server: str,
    score: int,
    response_time: int,
) -> List[str]:
    """
    Pick up to five performance suggestions, most specific first.
    """
    suggestions = []

    if not cache_control or "no-store" in cache_control:
        suggestions.append("Add appropriate Cache-Control headers to enable browser and CDN caching.")
    elif "max-age=" not in cache_control:
        suggestions.append("Set a specific max-age directive in Cache-Control to control caching duration.")
    elif parse_max_age(cache_control) == 0:
        suggestions.append("Increase max-age value to enable longer caching for static assets.")

    if not etag and not last_modified:
        suggestions.append("Add ETag or Last-Modified headers to enable conditional requests and reduce bandwidth.")

    server_lower = (server or "").lower()
    for needle, tip in SERVER_SUGGESTIONS:
        if needle in server_lower:
            suggestions.append(tip)
            break

    if response_time > 300:
        suggestions.append("Consider implementing a CDN to reduce latency for global users.")

    if score < 50:
        suggestions.append("Implement a caching strategy with longer TTLs for static assets "
                           "and shorter ones for dynamic content.")

    suggestions.extend(GENERAL_SUGGESTIONS)
    return suggestions[:MAX_SUGGESTIONS]
