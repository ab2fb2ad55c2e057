from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional

@dataclass
class FetchResponse:
    status: int
    headers: Dict[str, str]
    response_time: int
    strategy: str
    http_version: Optional[str] = None

@dataclass
class InspectionResult:
    url: str
    status: int
    headers: Dict[str, str]
    server: str = "Unknown"
    cache_status: str = "unknown"
    cache_control: str = ""
    age: str = ""
    expires: str = ""
    last_modified: str = ""
    etag: str = ""
    served_by: str = ""
    cache_hits: str = ""
    response_time: int = 0
    score: int = 0
    summary: str = ""
    suggestions: List[str] = field(default_factory=list)
    http_version: Optional[str] = None
    ip_address: Optional[str] = None
    ip_location: Optional[str] = None
    ip_org: Optional[str] = None
    fastly_debug: List[str] = field(default_factory=list)
    pantheon_debug: List[str] = field(default_factory=list)
    cloudflare_debug: List[str] = field(default_factory=list)
    cloudfront_debug: List[str] = field(default_factory=list)
    security_headers: List[str] = field(default_factory=list)
    useful_headers: List[str] = field(default_factory=list)
    strategy: str = "fallback"
    fetch_failed: bool = False

    def to_dict(self) -> Dict:
        return asdict(self)
