import asyncio
import json
import socket
from typing import Dict, Optional
from urllib.parse import urlparse
from cachecheck.http_client import HttpClient
from cachecheck.utils.logger import logger

GEO_LOOKUP_URL = "https://ipinfo.io/{ip}/json"

async def resolve_ip(url: str) -> Optional[str]:
    host = urlparse(url).hostname
    if not host:
        return None
    loop = asyncio.get_running_loop()
    try:
        infos = await loop.getaddrinfo(host, None, type=socket.SOCK_STREAM)
    except (socket.gaierror, OSError) as e:
        logger.debug(f"DNS lookup failed for {host}: {e}")
        return None
    if not infos:
        return None
    return infos[0][4][0]

async def lookup_geo(client: HttpClient, ip: str) -> Dict[str, Optional[str]]:
    """
    Returns {"ip_location": "City, Region, Country", "ip_org": "..."};
    both None when the lookup fails.
    """
    empty = {"ip_location": None, "ip_org": None}
    resp = await client.request("GET", GEO_LOOKUP_URL.format(ip=ip))
    if not resp or resp['status'] != 200:
        return empty
    try:
        data = json.loads(resp['body'])
    except ValueError:
        logger.debug(f"Geolocation lookup for {ip} returned invalid JSON")
        return empty
    if not isinstance(data, dict):
        return empty

    parts = [data.get(k) for k in ("city", "region", "country") if data.get(k)]
    return {
        "ip_location": ", ".join(parts) or None,
        "ip_org": data.get("org") or None,
    }
