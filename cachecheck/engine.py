import asyncio
from typing import List, Optional
from cachecheck.http_client import HttpClient
from cachecheck.logic.result import InspectionResult
from cachecheck.logic.strategies import FetchStrategy, DirectStrategy
from cachecheck.utils.logger import logger

def normalize_url(url: str) -> str:
    url = url.strip()
    if not url.startswith("http://") and not url.startswith("https://"):
        url = "https://" + url
    return url

class Engine:
    def __init__(self, strategies: Optional[List[FetchStrategy]] = None, concurrency: int = 5,
                 timeout: int = 10, geo: bool = False):
        self.strategies = strategies if strategies is not None else [DirectStrategy()]
        self.concurrency = concurrency
        self.timeout = timeout
        self.geo = geo
        self.stats = {
            'total_urls': 0,
            'fetched': 0,
            'failed': 0,
        }

    async def run(self, urls: List[str]) -> List[InspectionResult]:
        """
        Inspect every URL; results come back in input order.
        """
        self.stats['total_urls'] = len(urls)

        # Worker Pool Pattern
        queue = asyncio.Queue()
        for index, url in enumerate(urls):
            queue.put_nowait((index, url))

        results: List[Optional[InspectionResult]] = [None] * len(urls)

        async def worker():
            while True:
                try:
                    index, url = queue.get_nowait()
                except asyncio.QueueEmpty:
                    break

                try:
                    results[index] = await self.inspect(client, url)
                except Exception as e:
                    logger.error(f"Error processing {url}: {e}")
                    from cachecheck.logic.inspector import fallback_result
                    results[index] = fallback_result(normalize_url(url))
                    self.stats['failed'] += 1
                finally:
                    queue.task_done()

        async with HttpClient(timeout=self.timeout) as client:
            workers = [asyncio.create_task(worker()) for _ in range(max(1, self.concurrency))]
            await asyncio.gather(*workers)

        logger.info(f"Check complete: {self.stats['fetched']}/{self.stats['total_urls']} fetched, "
                    f"{self.stats['failed']} failed")
        return results

    async def inspect(self, client: HttpClient, url: str) -> InspectionResult:
        from cachecheck.logic.inspector import build_result, fallback_result

        url = normalize_url(url)
        logger.info(f"Fetching headers for {url}")

        # First strategy that answers wins
        for strategy in self.strategies:
            response = await strategy.fetch(client, url)
            if response is not None:
                logger.debug(f"{strategy.name} fetch succeeded for {url} (status {response.status})")
                break
            logger.warning(f"{strategy.name} fetch failed for {url}")
        else:
            logger.warning(f"All fetch strategies failed for {url}, using fallback result")
            self.stats['failed'] += 1
            return fallback_result(url)

        result = build_result(url, response)
        self.stats['fetched'] += 1
        logger.info(f"{url}: status {result.status}, cache {result.cache_status}, score {result.score}/100")

        if self.geo:
            # Enrichment only; a failure leaves the IP fields empty
            try:
                await self._add_geo(client, result)
            except Exception as e:
                logger.warning(f"Geolocation failed for {url}: {e}")
                result.ip_address = result.ip_location = result.ip_org = None
        return result

    async def _add_geo(self, client: HttpClient, result: InspectionResult):
        from cachecheck.logic.geo import resolve_ip, lookup_geo

        result.ip_address = await resolve_ip(result.url)
        if not result.ip_address:
            return
        info = await lookup_geo(client, result.ip_address)
        result.ip_location = info["ip_location"]
        result.ip_org = info["ip_org"]
