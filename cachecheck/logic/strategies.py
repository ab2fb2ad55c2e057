import json
from typing import Optional
from urllib.parse import quote
from cachecheck.http_client import HttpClient, DEBUG_HEADERS
from cachecheck.logic.result import FetchResponse
from cachecheck.utils.logger import logger

class FetchStrategy:
    name = "base"

    async def fetch(self, client: HttpClient, url: str) -> Optional[FetchResponse]:
        raise NotImplementedError

    @staticmethod
    def _decode_json(resp) -> Optional[dict]:
        try:
            data = json.loads(resp['body'])
        except (ValueError, TypeError) as e:
            logger.debug(f"Relay returned invalid JSON: {e}")
            return None
        return data if isinstance(data, dict) else None

class DirectStrategy(FetchStrategy):
    """
    Request the target itself, asking Fastly and Pantheon for debug headers.
    Any HTTP response counts as success; only transport errors fall through.
    """
    name = "direct"

    def __init__(self, method: str = "GET"):
        self.method = method

    async def fetch(self, client: HttpClient, url: str) -> Optional[FetchResponse]:
        resp = await client.request(self.method, url, headers=dict(DEBUG_HEADERS))
        if not resp:
            return None
        return FetchResponse(
            status=resp['status'],
            headers=resp['headers'],
            response_time=resp['elapsed_ms'],
            strategy=self.name,
            http_version=resp.get('version')
        )

class RelayStrategy(FetchStrategy):
    """
    Ask a relay server (see cachecheck.relay) to fetch the target:
    GET {base}/proxy?url=... -> {url, status, headers, body}
    """
    name = "relay"

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip('/')

    def relay_url(self, url: str) -> str:
        return f"{self.base_url}/proxy?url={quote(url, safe='')}"

    async def fetch(self, client: HttpClient, url: str) -> Optional[FetchResponse]:
        resp = await client.request("GET", self.relay_url(url))
        if not resp:
            return None
        if resp['status'] != 200:
            logger.warning(f"Relay {self.base_url} answered {resp['status']} for {url}")
            return None

        data = self._decode_json(resp)
        if not data or 'status' not in data:
            return None
        try:
            status = int(data['status'])
        except (TypeError, ValueError):
            return None
        return FetchResponse(
            status=status,
            headers=data.get('headers') or {},
            response_time=resp['elapsed_ms'],
            strategy=self.name
        )

class AllOriginsStrategy(FetchStrategy):
    """
    allorigins-style relay: GET {base}/get?url=... -> {status: {http_code, headers}}
    """
    name = "allorigins"

    def __init__(self, base_url: str = "https://api.allorigins.win"):
        self.base_url = base_url.rstrip('/')

    def relay_url(self, url: str) -> str:
        return f"{self.base_url}/get?url={quote(url, safe='')}"

    async def fetch(self, client: HttpClient, url: str) -> Optional[FetchResponse]:
        resp = await client.request("GET", self.relay_url(url))
        if not resp:
            return None
        if resp['status'] != 200:
            logger.warning(f"Relay {self.base_url} answered {resp['status']} for {url}")
            return None

        data = self._decode_json(resp)
        if not data or not isinstance(data.get('status'), dict):
            return None
        info = data['status']
        try:
            status = int(info.get('http_code') or 200)
        except (TypeError, ValueError):
            status = 200
        return FetchResponse(
            status=status,
            headers=info.get('headers') or {},
            response_time=resp['elapsed_ms'],
            strategy=self.name
        )
