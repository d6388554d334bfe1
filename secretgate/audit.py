import hashlib
import json
import logging
import threading
import time
import uuid
from typing import Optional, Dict, Any

logger = logging.getLogger("secret_gate.audit")

class AuditLog:
    """
    Append-only chain-of-custody log of authentication attempts.

    Every entry carries the hash of the previous one, so removing or editing a
    line breaks the chain. Passwords are never written.
    """
    def __init__(self, path: str, run_id: Optional[str] = None):
        self.path = path
        self.run_id = run_id or str(uuid.uuid4())
        self.chain_hash = hashlib.sha256(self.run_id.encode()).hexdigest()
        self._lock = threading.Lock()

        self.log_event("RUN_START", {"timestamp": time.time(), "run_id": self.run_id})

    def log_event(self, event_type: str, data: Dict[str, Any]) -> str:
        """Appends an event and advances the hash chain."""
        with self._lock:
            entry = {
                "type": event_type,
                "timestamp": time.time(),
                "data": data,
                "prev_hash": self.chain_hash,
            }
            entry_str = json.dumps(entry, sort_keys=True)
            self.chain_hash = hashlib.sha256((self.chain_hash + entry_str).encode()).hexdigest()
            entry["current_hash"] = self.chain_hash

            with open(self.path, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry) + "\n")

            return self.chain_hash

    def record_attempt(self, username: str, outcome: str, remote_addr: Optional[str] = None, unlocked: bool = False):
        self.log_event("AUTH_ATTEMPT", {"username": username, "outcome": outcome, "remote_addr": remote_addr})
        if unlocked:
            self.log_event("GATE_UNLOCKED", {"username": username, "remote_addr": remote_addr})

def verify(path: str) -> bool:
    """Recomputes the hash chain of an audit file. False on any break."""
    prev_hash = None
    with open(path, "r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, 1):
            if not line.strip():
                continue
            try:
                entry = json.loads(line)
                current = entry.pop("current_hash")
            except (ValueError, KeyError):
                logger.warning("Malformed audit entry at %s:%d", path, lineno)
                return False

            # Each server run appends its own chain, seeded from its run id.
            if entry.get("type") == "RUN_START":
                run_id = str(entry.get("data", {}).get("run_id", ""))
                prev_hash = hashlib.sha256(run_id.encode()).hexdigest()
            elif prev_hash is None:
                return False

            if entry.get("prev_hash") != prev_hash:
                logger.warning("Audit chain broken at %s:%d", path, lineno)
                return False

            entry_str = json.dumps(entry, sort_keys=True)
            expected = hashlib.sha256((prev_hash + entry_str).encode()).hexdigest()
            if expected != current:
                logger.warning("Audit hash mismatch at %s:%d", path, lineno)
                return False
            prev_hash = current
    return prev_hash is not None
