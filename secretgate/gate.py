import threading
import logging
from typing import Optional

from secretgate.models import AuthResult

logger = logging.getLogger("secret_gate.gate")

GREETING = "Hello World!"

LOGIN_FORM = """
      <h1>You are not authenticated</h1>
      <form method="POST" action="/authenticate">
        <label for="username">Enter Username:</label>
        <input type="text" name="username" id="username" required />
        <label for="password">Enter Password :</label>
        <input type="text" name="password" id="password" required />
        <button type="submit">Submit</button>
      </form>
    """

class Gate:
    """
    Process-wide authentication gate.

    Holds a single flag shared by every caller. Once any caller authenticates
    the secret is visible to all of them until the process exits; there is no
    way back to the locked state.
    """

    def __init__(self, expected_username: str, expected_password: str, secret_message: str):
        self._expected_username = expected_username
        self._expected_password = expected_password
        self._secret_message = secret_message
        self._authenticated = False
        self._lock = threading.Lock()

    @property
    def is_authenticated(self) -> bool:
        with self._lock:
            return self._authenticated

    def show_root(self) -> str:
        return GREETING

    def show_secret(self) -> str:
        """Returns the login form while locked, the secret text once unlocked."""
        if not self.is_authenticated:
            return LOGIN_FORM
        return self._secret_message

    def authenticate(self, username: str, password: str, source: Optional[str] = None) -> AuthResult:
        """
        Compares the credentials against the configured pair.
        A match unlocks the gate for everyone; a mismatch leaves it untouched.
        """
        if username == self._expected_username and password == self._expected_password:
            with self._lock:
                first = not self._authenticated
                self._authenticated = True
            if first:
                logger.info("Gate unlocked by %r (source=%s)", username, source or "-")
            else:
                logger.debug("Re-authentication by %r while already unlocked", username)
            return AuthResult.success(unlocked=first)

        logger.warning("Rejected credentials for %r (source=%s)", username, source or "-")
        return AuthResult.rejected()
