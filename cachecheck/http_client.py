import time
import aiohttp
from typing import Optional, Dict, Any
from cachecheck.utils.logger import logger

DEBUG_HEADERS = {
    "Fastly-Debug": "1",
    "Pantheon-Debug": "1",
}

def merge_headers(headers) -> Dict[str, str]:
    """
    Flatten a multidict of headers, joining repeated fields with ", "
    the way browser fetch does. Keys keep the casing of their first occurrence.
    """
    merged: Dict[str, str] = {}
    names: Dict[str, str] = {}
    for key in headers.keys():
        lower = key.lower()
        if lower in names:
            continue
        names[lower] = key
        merged[key] = ", ".join(headers.getall(key))
    return merged

class HttpClient:
    def __init__(self, timeout: int = 10, proxy: Optional[str] = None):
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.proxy = proxy
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        self.session = aiohttp.ClientSession(timeout=self.timeout)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.session:
            await self.session.close()

    async def request(self, method: str, url: str, headers: Optional[Dict[str, str]] = None, **kwargs) -> Any:
        if not self.session:
            raise RuntimeError("Session not initialized. Use 'async with' context manager.")

        start = time.monotonic()
        try:
            async with self.session.request(method, url, headers=headers, proxy=self.proxy, **kwargs) as response:
                # Read body immediately to release connection
                body = await response.read()
                elapsed = int((time.monotonic() - start) * 1000)
                version = None
                if response.version:
                    version = f"HTTP/{response.version.major}.{response.version.minor}"
                return {
                    "status": response.status,
                    "headers": merge_headers(response.headers),
                    "body": body,
                    "url": str(response.url),
                    "elapsed_ms": elapsed,
                    "version": version
                }
        except Exception as e:
            logger.debug(f"Request failed for {url}: {str(e)}")
            return None
