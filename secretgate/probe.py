import uuid
from dataclasses import dataclass
from typing import List, Optional, Callable

from secretgate.client import GateClient, ClientError, ResponseWrapper
from secretgate.gate import GREETING
from secretgate.models import INVALID_CREDENTIALS_MESSAGE, SECRET_PATH

FORM_MARKER = 'action="/authenticate"'

@dataclass
class ProbeResult:
    name: str
    passed: bool
    details: str = ""

def _shows_form(resp: ResponseWrapper) -> bool:
    return FORM_MARKER in resp.text

def _check(name: str, fn: Callable[[], ProbeResult]) -> ProbeResult:
    try:
        return fn()
    except ClientError as e:
        return ProbeResult(name, False, str(e))

def run_probe(client: GateClient, username: Optional[str] = None, password: Optional[str] = None) -> List[ProbeResult]:
    """
    Smoke-checks a running gate server.

    With credentials, the final checks authenticate for real, which unlocks the
    secret for every client of that server until it restarts.
    """
    results = []

    def health():
        resp = client.health()
        return ProbeResult("health", resp.status_code == 200, f"HTTP {resp.status_code}")

    def root():
        resp = client.root()
        ok = resp.status_code == 200 and resp.text == GREETING
        return ProbeResult("root_greeting", ok, f"HTTP {resp.status_code}: {resp.text[:60]!r}")

    def secret_page():
        resp = client.secret()
        state = "locked (login form)" if _shows_form(resp) else "unlocked (secret text)"
        return ProbeResult("secret_page", resp.status_code == 200, f"HTTP {resp.status_code}, gate {state}")

    def wrong_password():
        resp = client.authenticate(username or "probe", f"wrong-{uuid.uuid4().hex}")
        ok = resp.status_code == 200 and resp.text == INVALID_CREDENTIALS_MESSAGE
        return ProbeResult("rejects_wrong_password", ok, f"HTTP {resp.status_code}: {resp.text[:60]!r}")

    results.append(_check("health", health))
    results.append(_check("root_greeting", root))
    results.append(_check("secret_page", secret_page))
    results.append(_check("rejects_wrong_password", wrong_password))

    if username and password:
        def login():
            resp = client.authenticate(username, password)
            location = resp.location or ""
            ok = resp.is_redirect and location.endswith(SECRET_PATH)
            return ProbeResult("accepts_credentials", ok, f"HTTP {resp.status_code} -> {location or 'no redirect'}")

        def unlocked():
            resp = client.secret()
            ok = resp.status_code == 200 and not _shows_form(resp)
            return ProbeResult("secret_unlocked", ok, "secret text served" if ok else "still showing login form")

        results.append(_check("accepts_credentials", login))
        results.append(_check("secret_unlocked", unlocked))

    return results
