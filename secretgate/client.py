import time
import requests
from typing import Optional, Dict, Any
from dataclasses import dataclass

from secretgate import __version__

@dataclass
class ResponseWrapper:
    status_code: int
    headers: Dict[str, str]
    text: str
    elapsed_ms: float
    url: str

    @property
    def is_redirect(self):
        return 300 <= self.status_code < 400

    @property
    def location(self) -> Optional[str]:
        return self.headers.get("Location")

class ClientError(Exception):
    """Transport-level failure talking to a gate server."""

class GateClient:
    def __init__(self, base_url: str, timeout: float = 5.0, verbose: bool = False):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.verbose = verbose
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": f"secretgate-client/{__version__}"})

    def send(self, method: str, target: str, *,
             form_body: Optional[Dict[str, Any]] = None,
             allow_redirects: bool = False) -> ResponseWrapper:
        url = target if target.startswith("http") else f"{self.base_url}/{target.lstrip('/')}"

        start = time.time()
        try:
            resp = self.session.request(method, url, data=form_body, timeout=self.timeout,
                                        allow_redirects=allow_redirects)
        except requests.RequestException as e:
            raise ClientError(f"{method} {url} failed: {e}") from e
        elapsed = (time.time() - start) * 1000

        if self.verbose:
            print(f"[*] {method} {url} -> {resp.status_code} ({elapsed:.0f}ms)")

        # requests headers are case-insensitive; keep that for lookups like Location
        return ResponseWrapper(
            status_code=resp.status_code,
            headers=resp.headers,
            text=resp.text,
            elapsed_ms=elapsed,
            url=url,
        )

    def root(self) -> ResponseWrapper:
        return self.send("GET", "/")

    def secret(self) -> ResponseWrapper:
        return self.send("GET", "/secret")

    def authenticate(self, username: str, password: str) -> ResponseWrapper:
        return self.send("POST", "/authenticate", form_body={"username": username, "password": password})

    def health(self) -> ResponseWrapper:
        return self.send("GET", "/health")

    def close(self):
        self.session.close()
